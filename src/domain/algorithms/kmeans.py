from __future__ import annotations

import random
from typing import Sequence

from src.domain.exceptions import ComputeFailure
from src.domain.models import GeoPoint

Coord = tuple[float, float]


def _d2(a: Coord, b: Coord) -> float:
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return dx * dx + dy * dy


def _nearest(coord: Coord, centroids: Sequence[Coord]) -> int:
    best_i = 0
    best_d2 = float("inf")
    for i, c in enumerate(centroids):
        d2 = _d2(coord, c)
        # Strict comparison keeps the lowest index on ties.
        if d2 < best_d2:
            best_d2 = d2
            best_i = i
    return best_i


def _assign(coords: Sequence[Coord], centroids: Sequence[Coord]) -> list[int]:
    return [_nearest(c, centroids) for c in coords]


def _seed_centroids(
    coords: Sequence[Coord], k: int, rng: random.Random
) -> list[Coord]:
    """K-means++ seeding: each new centroid is drawn with probability
    proportional to its squared distance from the closest chosen one."""

    first = coords[rng.randrange(len(coords))]
    centroids: list[Coord] = [first]
    min_d2 = [_d2(c, first) for c in coords]

    while len(centroids) < k:
        total = sum(min_d2)
        if total <= 0.0:
            # Every remaining point coincides with a centroid.
            chosen = rng.randrange(len(coords))
        else:
            target = rng.random() * total
            acc = 0.0
            chosen = -1
            for i, w in enumerate(min_d2):
                acc += w
                if w > 0.0 and acc > target:
                    chosen = i
                    break
            if chosen < 0:
                # Float round-off left target at the very end of the range.
                chosen = max(i for i, w in enumerate(min_d2) if w > 0.0)

        center = coords[chosen]
        centroids.append(center)
        for i, c in enumerate(coords):
            d2 = _d2(c, center)
            if d2 < min_d2[i]:
                min_d2[i] = d2

    return centroids


def _recompute(
    coords: Sequence[Coord], assignments: Sequence[int], centroids: Sequence[Coord]
) -> list[Coord]:
    k = len(centroids)
    sum_x = [0.0] * k
    sum_y = [0.0] * k
    counts = [0] * k
    for (x, y), a in zip(coords, assignments):
        sum_x[a] += x
        sum_y[a] += y
        counts[a] += 1

    out: list[Coord] = []
    for i in range(k):
        if counts[i] == 0:
            # Empty clusters hold their position.
            out.append(centroids[i])
        else:
            out.append((sum_x[i] / counts[i], sum_y[i] / counts[i]))
    return out


def cluster(
    points: Sequence[GeoPoint],
    k: int,
    max_iterations: int,
    rng: random.Random,
) -> tuple[GeoPoint, ...]:
    """Reduce ``points`` to ``k`` cluster points with a coarse K-means.

    Coordinates are treated as a flat (longitude, latitude) plane. The run
    stops after ``max_iterations`` refinement passes or as soon as no point
    changes cluster, so small iteration counts give a fast approximation
    rather than a converged clustering.

    Every centroid is emitted, including ones that ended up with no
    members; those are labelled as holding one point.
    """

    if k < 0:
        raise ComputeFailure(f"Cluster count must be >= 0, got {k}")
    if max_iterations < 0:
        raise ComputeFailure(f"Max iterations must be >= 0, got {max_iterations}")
    if not points or k == 0:
        return ()

    coords: list[Coord] = [(p.longitude, p.latitude) for p in points]
    k = min(k, len(coords))

    centroids = _seed_centroids(coords, k, rng)
    assignments = _assign(coords, centroids)

    for _ in range(max_iterations):
        centroids = _recompute(coords, assignments, centroids)
        updated = _assign(coords, centroids)
        changed = updated != assignments
        assignments = updated
        if not changed:
            break

    counts = [0] * k
    for a in assignments:
        counts[a] += 1

    return tuple(
        GeoPoint(
            name=f"Cluster of {max(count, 1)}",
            longitude=lon,
            latitude=lat,
        )
        for (lon, lat), count in zip(centroids, counts)
    )
