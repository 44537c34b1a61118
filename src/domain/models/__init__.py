from .geo import BoundingBox, GeoPoint

__all__ = [
    "BoundingBox",
    "GeoPoint",
]
