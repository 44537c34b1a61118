from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import pytest

from src.adapters.api.dependencies import build_poi_query_service
from src.adapters.config import PoiRuntimeConfig
from src.domain.exceptions import LoadError


def _config(monkeypatch: pytest.MonkeyPatch, **env: str) -> PoiRuntimeConfig:
    for name in (
        "POI_DATA_PATH",
        "POI_DATA_BUCKET",
        "POI_DATA_KEY",
        "POI_REQUIRE_DATA",
        "POI_CLUSTER_COUNT",
        "POI_CLUSTER_ITERATIONS",
        "POI_CLUSTER_SEED",
        "POI_CLUSTER_TIMEOUT_S",
        "POI_ZOOM_THRESHOLD",
    ):
        monkeypatch.delenv(name, raising=False)
    for name, value in env.items():
        monkeypatch.setenv(name, value)
    return PoiRuntimeConfig.from_env()


def test_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    cfg = _config(monkeypatch)

    assert cfg.data_path == "data/poi.jsonl"
    assert cfg.cluster_count == 200
    assert cfg.cluster_iterations == 5
    assert cfg.zoom_threshold == 8
    assert cfg.cluster_seed is None
    assert cfg.cluster_timeout_s is None
    assert not cfg.require_data
    assert not cfg.uses_s3


def test_config_reads_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    cfg = _config(
        monkeypatch,
        POI_DATA_BUCKET="poi-data",
        POI_DATA_KEY="poi.jsonl.gz",
        POI_REQUIRE_DATA="yes",
        POI_CLUSTER_COUNT="50",
        POI_CLUSTER_ITERATIONS="20",
        POI_CLUSTER_SEED="7",
        POI_CLUSTER_TIMEOUT_S="2.5",
        POI_ZOOM_THRESHOLD="6",
    )

    assert cfg.uses_s3
    assert cfg.require_data
    assert (cfg.cluster_count, cfg.cluster_iterations, cfg.cluster_seed) == (50, 20, 7)
    assert cfg.cluster_timeout_s == 2.5
    assert cfg.zoom_threshold == 6


def test_build_service_from_local_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    path = tmp_path / "poi.jsonl"
    path.write_text(
        '{"name": "a", "longitude": 0.0, "latitude": 0.0}\n'
        '{"name": "b", "longitude": 5.0, "latitude": 5.0}\n',
        encoding="utf-8",
    )
    cfg = _config(
        monkeypatch, POI_DATA_PATH=str(path), POI_CLUSTER_SEED="1", POI_ZOOM_THRESHOLD="9"
    )

    svc = build_poi_query_service(cfg)

    assert svc.store.ready
    assert svc.store.count() == 2
    assert svc.zoom_threshold == 9
    assert len(svc.fetch_clusters()) == 2


def test_build_service_runs_degraded_when_data_is_missing(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    cfg = _config(monkeypatch, POI_DATA_PATH=str(tmp_path / "absent.jsonl"))

    svc = build_poi_query_service(cfg)

    assert not svc.store.ready
    assert "absent.jsonl" in (svc.store.load_error or "")
    assert svc.fetch_all() == ()


def test_build_service_aborts_when_data_is_required(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    cfg = replace(
        _config(monkeypatch, POI_DATA_PATH=str(tmp_path / "absent.jsonl")),
        require_data=True,
    )

    with pytest.raises(LoadError):
        build_poi_query_service(cfg)
