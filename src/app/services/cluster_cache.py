from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Callable, Iterable

from src.domain.exceptions import ClusterUnavailable
from src.domain.models import GeoPoint


@dataclass(slots=True)
class ClusterCache:
    """Single-slot, compute-once holder for the cluster view.

    The first caller runs ``compute`` while holding the lock; callers that
    arrive meanwhile block on the same lock and then read the stored value.
    If ``compute`` raises, nothing is stored and the next caller retries.

    ``timeout_s`` bounds how long a caller waits for an in-flight run;
    ``None`` waits indefinitely.
    """

    timeout_s: float | None = None
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _value: tuple[GeoPoint, ...] | None = field(default=None, repr=False)

    @property
    def is_filled(self) -> bool:
        return self._value is not None

    def get_or_compute(
        self, compute: Callable[[], Iterable[GeoPoint]]
    ) -> tuple[GeoPoint, ...]:
        value = self._value
        if value is not None:
            return value

        timeout = -1 if self.timeout_s is None else max(0.0, self.timeout_s)
        if not self._lock.acquire(timeout=timeout):
            raise ClusterUnavailable(
                f"Cluster view still being computed after {self.timeout_s}s"
            )
        try:
            if self._value is None:
                self._value = tuple(compute())
            return self._value
        finally:
            self._lock.release()
