from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import Any

import pytest
from botocore.exceptions import ClientError

from src.adapters.persistence import s3_point_source
from src.adapters.persistence.s3_point_source import S3PointSource
from src.domain.exceptions import LoadError


@dataclass(slots=True)
class FakeS3Client:
    objects: dict[tuple[str, str], bytes] = field(default_factory=dict)

    def get_object(self, *, Bucket: str, Key: str) -> dict[str, Any]:
        try:
            body = self.objects[(Bucket, Key)]
        except KeyError:
            raise ClientError(
                {"Error": {"Code": "NoSuchKey", "Message": "Not Found"}}, "GetObject"
            ) from None
        return {"Body": io.BytesIO(body)}


@pytest.fixture
def fake_s3(monkeypatch: pytest.MonkeyPatch) -> FakeS3Client:
    client = FakeS3Client()
    monkeypatch.setattr(s3_point_source, "s3_client", lambda: client)
    return client


def test_loads_csv_object(fake_s3: FakeS3Client) -> None:
    fake_s3.objects[("poi", "data/poi.csv")] = (
        b"name,longitude,latitude\nLighthouse,-9.5,38.7\n"
    )

    points = tuple(S3PointSource(bucket="poi", key="data/poi.csv").load_points())

    assert [(p.name, p.longitude, p.latitude) for p in points] == [
        ("Lighthouse", -9.5, 38.7)
    ]


def test_missing_object_raises_load_error(fake_s3: FakeS3Client) -> None:
    with pytest.raises(LoadError, match="s3://poi/absent.jsonl") as excinfo:
        S3PointSource(bucket="poi", key="absent.jsonl").load_points()

    assert isinstance(excinfo.value.__cause__, ClientError)


def test_bucket_and_key_fall_back_to_env(
    fake_s3: FakeS3Client, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("POI_DATA_BUCKET", "env-bucket")
    monkeypatch.setenv("POI_DATA_KEY", "poi.jsonl")
    fake_s3.objects[("env-bucket", "poi.jsonl")] = (
        b'{"name": "n", "longitude": 0.0, "latitude": 0.0}\n'
    )

    source = S3PointSource()

    assert source.describe() == "s3://env-bucket/poi.jsonl"
    assert len(tuple(source.load_points())) == 1


def test_missing_bucket_configuration_raises_load_error(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.delenv("POI_DATA_BUCKET", raising=False)

    with pytest.raises(LoadError, match="POI_DATA_BUCKET"):
        S3PointSource(key="poi.jsonl").load_points()
