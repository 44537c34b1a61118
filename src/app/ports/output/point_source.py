from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from src.domain.models import GeoPoint


class IPointSource(ABC):
    """Port for reading the point-of-interest data set at startup."""

    @abstractmethod
    def load_points(self) -> Iterable[GeoPoint]:
        """Yield every point in storage order.

        Implementations raise ``LoadError`` when the data is missing or
        malformed.
        """

    def describe(self) -> str:
        return type(self).__name__
