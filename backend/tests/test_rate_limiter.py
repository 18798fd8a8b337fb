from jobready.core.rate_limiter import InMemoryRateLimiter


class _Clock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_rate_limiter_allows_until_limit_then_blocks():
    clock = _Clock()
    limiter = InMemoryRateLimiter(clock=clock)
    key = "127.0.0.1:/api/auth/login"
    assert limiter.allow(key, limit=2, window_seconds=60) == (True, 0)
    assert limiter.allow(key, limit=2, window_seconds=60) == (True, 0)
    clock.now += 15
    assert limiter.allow(key, limit=2, window_seconds=60) == (False, 45)


def test_rate_limiter_window_reopens():
    clock = _Clock()
    limiter = InMemoryRateLimiter(clock=clock)
    key = "127.0.0.1:/api/auth/register"
    assert limiter.allow(key, limit=1, window_seconds=60)[0] is True
    clock.now += 59.5
    allowed, retry_after = limiter.allow(key, limit=1, window_seconds=60)
    assert allowed is False
    assert retry_after == 1
    clock.now += 0.5
    assert limiter.allow(key, limit=1, window_seconds=60)[0] is True


def test_rate_limiter_keys_are_independent_and_reset_clears():
    limiter = InMemoryRateLimiter(clock=_Clock())
    assert limiter.allow("a", limit=1, window_seconds=60)[0] is True
    assert limiter.allow("b", limit=1, window_seconds=60)[0] is True
    assert limiter.allow("a", limit=1, window_seconds=60)[0] is False
    limiter.reset()
    assert limiter.allow("a", limit=1, window_seconds=60)[0] is True


def test_rate_limiter_drops_expired_windows():
    clock = _Clock()
    limiter = InMemoryRateLimiter(clock=clock)
    for i in range(5):
        limiter.allow(f"10.0.0.{i}:/api/auth/login", limit=3, window_seconds=60)
    assert len(limiter) == 5

    clock.now += 61
    limiter.allow("10.0.0.99:/api/auth/login", limit=3, window_seconds=60)
    assert len(limiter) == 1


def test_rate_limiter_keeps_live_windows_during_sweep():
    clock = _Clock()
    limiter = InMemoryRateLimiter(clock=clock)
    limiter.allow("old", limit=1, window_seconds=60)
    clock.now += 30
    limiter.allow("recent", limit=1, window_seconds=60)
    clock.now += 31
    limiter.allow("new", limit=1, window_seconds=60)
    assert len(limiter) == 2
    assert limiter.allow("recent", limit=1, window_seconds=60)[0] is False
