from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from src.app.ports.output import IPointSource
from src.domain.exceptions import LoadError
from src.domain.models import GeoPoint

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PointStore:
    """Immutable, loaded-once collection of points.

    Built once at startup and only read afterwards, so it is shared across
    request threads without locking. A store created through ``unready``
    is empty and carries the load failure that produced it.
    """

    points: tuple[GeoPoint, ...] = ()
    load_error: str | None = None

    def __post_init__(self) -> None:
        # Never hand out a caller's mutable sequence from all().
        object.__setattr__(self, "points", tuple(self.points))

    @classmethod
    def load(cls, source: IPointSource) -> PointStore:
        started = time.perf_counter()
        try:
            points = tuple(source.load_points())
        except LoadError:
            logger.exception("Unable to load points from %s", source.describe())
            raise
        except (OSError, ValueError, TypeError, KeyError) as exc:
            logger.exception("Unable to load points from %s", source.describe())
            raise LoadError(f"{source.describe()}: {exc}") from exc

        elapsed_ms = (time.perf_counter() - started) * 1000.0
        logger.info(
            "Loaded %d points of interest from %s in %.0f ms",
            len(points),
            source.describe(),
            elapsed_ms,
        )
        return cls(points=points)

    @classmethod
    def unready(cls, error: LoadError) -> PointStore:
        return cls(points=(), load_error=str(error) or type(error).__name__)

    @property
    def ready(self) -> bool:
        return self.load_error is None

    def all(self) -> tuple[GeoPoint, ...]:
        return self.points

    def count(self) -> int:
        return len(self.points)
