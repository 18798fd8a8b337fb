import threading
import time
from dataclasses import dataclass


@dataclass
class _Window:
    started_at: float
    hits: int = 0


class InMemoryRateLimiter:
    """
    Fixed-window hit counter per key, held in process memory.
    Keys are "<client ip>:<path>"; each worker process counts on its own.
    Expired windows are swept at most once per window length.
    """

    def __init__(self, clock=time.monotonic) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._windows: dict[str, _Window] = {}
        self._last_sweep = clock()

    def __len__(self) -> int:
        return len(self._windows)

    def _sweep(self, now: float, window_seconds: int) -> None:
        if now - self._last_sweep < window_seconds:
            return
        expired = [key for key, w in self._windows.items() if now - w.started_at >= window_seconds]
        for key in expired:
            del self._windows[key]
        self._last_sweep = now

    def allow(self, key: str, limit: int, window_seconds: int) -> tuple[bool, int]:
        """Count one hit. Returns (allowed, seconds until the window reopens)."""
        now = self._clock()
        with self._lock:
            self._sweep(now, window_seconds)
            window = self._windows.get(key)
            if window is None or now - window.started_at >= window_seconds:
                window = self._windows[key] = _Window(started_at=now)
            if window.hits >= limit:
                return False, max(1, int(window.started_at + window_seconds - now))
            window.hits += 1
            return True, 0

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()
            self._last_sweep = self._clock()


rate_limiter = InMemoryRateLimiter()
