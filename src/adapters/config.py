from __future__ import annotations

import os
from dataclasses import dataclass

from src.app.services.poi_query_service import (
    DEFAULT_CLUSTER_COUNT,
    DEFAULT_CLUSTER_ITERATIONS,
    DEFAULT_ZOOM_THRESHOLD,
)


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int | None) -> int | None:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    return int(raw)


def _env_float(name: str) -> float | None:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return None
    return float(raw)


@dataclass(frozen=True, slots=True)
class PoiRuntimeConfig:
    """Service settings.

    Env vars:
      - POI_DATA_PATH: local data file (default: data/poi.jsonl)
      - POI_DATA_BUCKET / POI_DATA_KEY: read the data set from S3 instead
      - POI_REQUIRE_DATA: 1|true to abort startup when the data set fails to load
      - POI_CLUSTER_COUNT: number of clusters for zoomed-out views (default: 200)
      - POI_CLUSTER_ITERATIONS: K-means refinement passes (default: 5)
      - POI_CLUSTER_SEED: fixed seed for cluster initialisation
      - POI_CLUSTER_TIMEOUT_S: max wait for an in-flight clustering run
      - POI_ZOOM_THRESHOLD: zoom below which clusters are served (default: 8)
    """

    data_path: str
    data_bucket: str | None
    data_key: str | None
    require_data: bool
    cluster_count: int
    cluster_iterations: int
    cluster_seed: int | None
    cluster_timeout_s: float | None
    zoom_threshold: int

    @staticmethod
    def from_env() -> "PoiRuntimeConfig":
        return PoiRuntimeConfig(
            data_path=os.getenv("POI_DATA_PATH") or "data/poi.jsonl",
            data_bucket=(os.getenv("POI_DATA_BUCKET") or "").strip() or None,
            data_key=(os.getenv("POI_DATA_KEY") or "").strip() or None,
            require_data=_env_bool("POI_REQUIRE_DATA", False),
            cluster_count=int(_env_int("POI_CLUSTER_COUNT", DEFAULT_CLUSTER_COUNT)),
            cluster_iterations=int(
                _env_int("POI_CLUSTER_ITERATIONS", DEFAULT_CLUSTER_ITERATIONS)
            ),
            cluster_seed=_env_int("POI_CLUSTER_SEED", None),
            cluster_timeout_s=_env_float("POI_CLUSTER_TIMEOUT_S"),
            zoom_threshold=int(_env_int("POI_ZOOM_THRESHOLD", DEFAULT_ZOOM_THRESHOLD)),
        )

    @property
    def uses_s3(self) -> bool:
        return bool(self.data_bucket and self.data_key)
