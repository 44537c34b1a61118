from __future__ import annotations

from typing import Iterable

from src.domain.models import BoundingBox, GeoPoint


def query(points: Iterable[GeoPoint], box: BoundingBox) -> tuple[GeoPoint, ...]:
    """Return the points strictly inside ``box``, in input order.

    Linear scan over the whole set; there is no spatial index.
    """

    return tuple(p for p in points if box.contains(p))
