from careerhub.utils.rate_limit import InMemoryRateLimiter


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_sliding_window_allows_after_expiry():
    clock = FakeClock()
    limiter = InMemoryRateLimiter(clock=clock)
    assert limiter.allow('chat:1', 2, 60) == (True, 0)
    clock.now += 10
    assert limiter.allow('chat:1', 2, 60) == (True, 0)
    allowed, retry_after = limiter.allow('chat:1', 2, 60)
    assert not allowed
    assert retry_after == 50
    clock.now += 51
    assert limiter.allow('chat:1', 2, 60)[0]


def test_keys_are_independent_and_resettable():
    limiter = InMemoryRateLimiter(clock=FakeClock())
    assert limiter.allow('a', 1, 60)[0]
    assert not limiter.allow('a', 1, 60)[0]
    assert limiter.allow('b', 1, 60)[0]
    limiter.reset('a')
    assert limiter.allow('a', 1, 60)[0]
    limiter.reset()
    assert limiter.allow('b', 1, 60)[0]


def test_expired_keys_are_dropped():
    clock = FakeClock()
    limiter = InMemoryRateLimiter(clock=clock)
    limiter.allow('chat:1', 5, 60)
    limiter.allow('chat:2', 5, 60)
    assert limiter.tracked_keys() == 2
    clock.now += 61
    # the sweep removes idle keys even when only another key is used
    limiter.allow('chat:3', 5, 60)
    assert limiter.tracked_keys() == 1
