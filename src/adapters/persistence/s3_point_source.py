from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable

from botocore.exceptions import BotoCoreError, ClientError

from src.adapters.aws import s3_client
from src.adapters.persistence.local_point_source import decode_points
from src.app.ports.output import IPointSource
from src.domain.exceptions import LoadError
from src.domain.models import GeoPoint


@dataclass(slots=True)
class S3PointSource(IPointSource):
    """Loads points from a JSON-lines or CSV object in S3.

    Env vars:
      - POI_DATA_BUCKET: bucket name
      - POI_DATA_KEY: object key (e.g. poi/poi.jsonl.gz)
      - ENDPOINT_URL: LocalStack endpoint (e.g. http://localhost:4566)
      - AWS_REGION: defaults to eu-west-1
    """

    bucket: str | None = None
    key: str | None = None

    def _bucket(self) -> str:
        value = self.bucket or os.getenv("POI_DATA_BUCKET")
        if not value:
            raise LoadError("Missing POI_DATA_BUCKET")
        return value

    def _key(self) -> str:
        value = self.key or os.getenv("POI_DATA_KEY")
        if not value:
            raise LoadError("Missing POI_DATA_KEY")
        return value

    def describe(self) -> str:
        bucket = self.bucket or os.getenv("POI_DATA_BUCKET") or "?"
        key = self.key or os.getenv("POI_DATA_KEY") or "?"
        return f"s3://{bucket}/{key}"

    def load_points(self) -> Iterable[GeoPoint]:
        bucket = self._bucket()
        key = self._key()

        try:
            obj = s3_client().get_object(Bucket=bucket, Key=key)
            body = obj["Body"].read()
        except (BotoCoreError, ClientError) as exc:
            raise LoadError(f"Unable to read s3://{bucket}/{key}: {exc}") from exc

        return decode_points(body, key)
