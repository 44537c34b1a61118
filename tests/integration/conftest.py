from __future__ import annotations

import os
import urllib.error
import urllib.request
from typing import Iterator
from uuid import uuid4

import pytest

from src.adapters.aws import AwsRuntimeConfig, s3_client

LOCALSTACK_URL = "http://localhost:4566"


def _s3_reachable(endpoint_url: str) -> bool:
    try:
        with urllib.request.urlopen(endpoint_url, timeout=1.5):  # nosec B310
            return True
    except urllib.error.HTTPError:
        # S3 answers the bare endpoint with an error status; it is still up.
        return True
    except OSError:
        return False


@pytest.fixture
def poi_bucket(monkeypatch: pytest.MonkeyPatch) -> Iterator[tuple[object, str]]:
    """A fresh LocalStack bucket plus an S3 client pointed at it.

    Skips when LocalStack is down, unless POI_REQUIRE_LOCALSTACK or CI is set.
    """

    monkeypatch.setenv("ENDPOINT_URL", os.getenv("ENDPOINT_URL") or LOCALSTACK_URL)
    monkeypatch.setenv("AWS_REGION", os.getenv("AWS_REGION") or "eu-west-1")
    # boto3 wants credentials even though LocalStack ignores them.
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", os.getenv("AWS_ACCESS_KEY_ID") or "test")
    monkeypatch.setenv(
        "AWS_SECRET_ACCESS_KEY", os.getenv("AWS_SECRET_ACCESS_KEY") or "test"
    )

    cfg = AwsRuntimeConfig.from_env()
    endpoint_url = cfg.resolved_endpoint_url() or LOCALSTACK_URL
    if not _s3_reachable(endpoint_url):
        msg = f"LocalStack not reachable at {endpoint_url}"
        if os.getenv("CI") or os.getenv("POI_REQUIRE_LOCALSTACK"):
            pytest.fail(msg, pytrace=False)
        pytest.skip(f"{msg}; skipping S3 point source tests")

    s3 = s3_client()
    bucket = f"poi-test-{uuid4().hex[:8]}"
    s3.create_bucket(
        Bucket=bucket,
        CreateBucketConfiguration={"LocationConstraint": cfg.region},
    )
    yield s3, bucket
