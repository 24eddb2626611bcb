import threading
import time
from collections import defaultdict, deque
from typing import Callable, Deque, Dict


class SlidingWindowRateLimiter:
    """Allows at most ``points`` requests per key within any ``duration``-second window."""

    def __init__(self, points: int = 5, duration: float = 60.0, clock: Callable[[], float] = time.monotonic):
        if points < 1:
            raise ValueError("points must be >= 1")
        if duration <= 0:
            raise ValueError("duration must be > 0")
        self.points = points
        self.duration = duration
        self.clock = clock
        self._hits: Dict[str, Deque[float]] = defaultdict(deque)
        self._lock = threading.Lock()

    def consume(self, key: str) -> bool:
        """Record one request for ``key``. Returns False if it is over the limit."""
        now = self.clock()
        with self._lock:
            self._prune(now)
            hits = self._hits[key]
            if len(hits) >= self.points:
                return False

            hits.append(now)
            return True

    def _prune(self, now: float) -> None:
        """Drop expired hits, and keys left with none, so idle clients are forgotten."""
        for key in list(self._hits):
            hits = self._hits[key]
            while hits and now - hits[0] >= self.duration:
                hits.popleft()
            if not hits:
                del self._hits[key]

    def tracked_keys(self) -> int:
        with self._lock:
            return len(self._hits)
