from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Callable

from src.app.services.cluster_cache import ClusterCache
from src.app.services.point_store import PointStore
from src.domain.algorithms.bounding_box import query
from src.domain.algorithms.kmeans import cluster
from src.domain.exceptions import ParseError
from src.domain.models import BoundingBox, GeoPoint

logger = logging.getLogger(__name__)

DEFAULT_CLUSTER_COUNT = 200
DEFAULT_CLUSTER_ITERATIONS = 5
DEFAULT_ZOOM_THRESHOLD = 8


def resolve(
    *,
    zoom: int,
    box: BoundingBox | None,
    threshold: int,
    clusters: Callable[[], tuple[GeoPoint, ...]],
    points: tuple[GeoPoint, ...],
) -> tuple[GeoPoint, ...]:
    """Pick the cluster view below ``threshold``, the bounded view otherwise.

    Zoomed-out requests show global structure, so ``box`` is ignored there.
    """

    if zoom < threshold:
        return clusters()
    if box is None:
        raise ParseError(f"Bounds are required at zoom {zoom} (threshold {threshold})")
    return query(points, box)


@dataclass(slots=True)
class PoiQueryService:
    """Read-only queries over the loaded point store.

    - ``fetch_all`` returns the whole set.
    - ``fetch_within`` filters by bounding box.
    - ``fetch_clusters`` returns the K-means view, computed once and shared.
    - ``resolve`` chooses between the last two by zoom level.
    """

    store: PointStore
    cluster_cache: ClusterCache = field(default_factory=ClusterCache)
    rng: random.Random = field(default_factory=random.Random)

    # Tuning knobs
    cluster_count: int = DEFAULT_CLUSTER_COUNT
    cluster_iterations: int = DEFAULT_CLUSTER_ITERATIONS
    zoom_threshold: int = DEFAULT_ZOOM_THRESHOLD

    def fetch_all(self) -> tuple[GeoPoint, ...]:
        return self.store.all()

    def fetch_within(self, box: BoundingBox) -> tuple[GeoPoint, ...]:
        return query(self.store.all(), box)

    def fetch_clusters(self) -> tuple[GeoPoint, ...]:
        return self.cluster_cache.get_or_compute(self._compute_clusters)

    def resolve(
        self,
        *,
        zoom: int,
        box: BoundingBox | None,
        threshold: int | None = None,
    ) -> tuple[GeoPoint, ...]:
        return resolve(
            zoom=zoom,
            box=box,
            threshold=self.zoom_threshold if threshold is None else threshold,
            clusters=self.fetch_clusters,
            points=self.store.all(),
        )

    def _compute_clusters(self) -> tuple[GeoPoint, ...]:
        started = time.perf_counter()
        points = self.store.all()
        clusters = cluster(
            points,
            k=self.cluster_count,
            max_iterations=self.cluster_iterations,
            rng=self.rng,
        )
        elapsed_ms = (time.perf_counter() - started) * 1000.0
        logger.info(
            "Computed %d clusters from %d points in %.0f ms",
            len(clusters),
            len(points),
            elapsed_ms,
        )
        return clusters
