from __future__ import annotations

import logging
import random
from functools import lru_cache

from src.adapters.config import PoiRuntimeConfig
from src.adapters.persistence import LocalPointSource, S3PointSource
from src.app.ports.output import IPointSource
from src.app.services.cluster_cache import ClusterCache
from src.app.services.point_store import PointStore
from src.app.services.poi_query_service import PoiQueryService
from src.domain.exceptions import LoadError

logger = logging.getLogger(__name__)


def build_poi_query_service(config: PoiRuntimeConfig) -> PoiQueryService:
    source: IPointSource
    if config.uses_s3:
        source = S3PointSource(bucket=config.data_bucket, key=config.data_key)
    else:
        source = LocalPointSource(path=config.data_path)

    try:
        store = PointStore.load(source)
    except LoadError as exc:
        if config.require_data:
            raise
        logger.error("Serving without data: %s", exc)
        store = PointStore.unready(exc)

    return PoiQueryService(
        store=store,
        cluster_cache=ClusterCache(timeout_s=config.cluster_timeout_s),
        rng=random.Random(config.cluster_seed),
        cluster_count=config.cluster_count,
        cluster_iterations=config.cluster_iterations,
        zoom_threshold=config.zoom_threshold,
    )


# One service per process: the store and the cluster cache are shared by all requests.
@lru_cache(maxsize=1)
def get_poi_query_service() -> PoiQueryService:
    return build_poi_query_service(PoiRuntimeConfig.from_env())
