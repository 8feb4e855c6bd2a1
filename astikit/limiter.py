"""Named counters that are reset periodically."""

from __future__ import annotations

import threading
from typing import Dict, Optional


class LimiterBucket:
    """Allows at most ``cap`` increments per ``period`` seconds."""

    def __init__(self, cap: int, period: float) -> None:
        if period <= 0:
            raise ValueError(f"period must be positive, got {period}")
        self._cap = cap
        self._period = period
        self._count = 0
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._tick, daemon=True)
        self._thread.start()

    def inc(self) -> bool:
        """Increment the count; return False if the cap was already reached."""
        with self._lock:
            if self._count >= self._cap:
                return False
            self._count += 1
            return True

    def _tick(self) -> None:
        while not self._stop.wait(self._period):
            with self._lock:
                self._count = 0

    def close(self) -> None:
        """Stop resetting the count. Safe to call more than once."""
        self._stop.set()

    def __enter__(self) -> "LimiterBucket":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False


class Limiter:
    """A set of named :class:`LimiterBucket`."""

    def __init__(self) -> None:
        self._buckets: Dict[str, LimiterBucket] = {}
        self._lock = threading.Lock()

    def add(self, name: str, cap: int, period: float) -> LimiterBucket:
        """Create the bucket ``name`` unless it exists, and return it."""
        with self._lock:
            bucket = self._buckets.get(name)
            if bucket is None:
                bucket = LimiterBucket(cap, period)
                self._buckets[name] = bucket
            return bucket

    def bucket(self, name: str) -> Optional[LimiterBucket]:
        """Return the bucket ``name``, or None if there is none."""
        with self._lock:
            return self._buckets.get(name)

    def close(self) -> None:
        """Close every bucket."""
        with self._lock:
            for bucket in self._buckets.values():
                bucket.close()

    def __enter__(self) -> "Limiter":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False