from __future__ import annotations

from dataclasses import dataclass

from src.domain.exceptions import ParseError


@dataclass(frozen=True, slots=True)
class GeoPoint:
    name: str
    longitude: float
    latitude: float

    def __post_init__(self) -> None:
        if not (-90.0 <= self.latitude <= 90.0):
            raise ValueError(f"Invalid latitude: {self.latitude}")
        if not (-180.0 <= self.longitude <= 180.0):
            raise ValueError(f"Invalid longitude: {self.longitude}")


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned (longitude, latitude) rectangle.

    No ordering is enforced: an inverted box simply contains nothing.
    """

    left: float
    bottom: float
    right: float
    top: float

    def contains(self, point: GeoPoint) -> bool:
        # Strict on every side; points on the boundary are outside.
        return (
            self.left < point.longitude < self.right
            and self.bottom < point.latitude < self.top
        )

    @classmethod
    def parse(cls, raw: str) -> "BoundingBox":
        """Parse ``"left,bottom,right,top"``."""

        sides = raw.split(",")
        if len(sides) != 4:
            raise ParseError(
                f"Bounds must be 'left,bottom,right,top', got {len(sides)} value(s): {raw!r}"
            )

        # Plain float parsing: "inf" gives an open side, "nan" a box that matches nothing.
        values: list[float] = []
        for side in sides:
            try:
                values.append(float(side.strip()))
            except ValueError as exc:
                raise ParseError(f"Invalid bounds value {side.strip()!r}") from exc

        left, bottom, right, top = values
        return cls(left=left, bottom=bottom, right=right, top=top)
