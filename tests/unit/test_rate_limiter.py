import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta

import pytest

from gymdesk.shared.utils.rate_limiter import SlidingWindowRateLimiter


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def limiter(clock):
    return SlidingWindowRateLimiter(clock=clock)


def test_admits_up_to_max_then_rejects(limiter):
    assert [limiter.try_acquire("login:1.2.3.4", 3, 60) for _ in range(3)] == [True, True, True]
    assert limiter.try_acquire("login:1.2.3.4", 3, 60) is False


def test_window_slides(limiter, clock):
    for _ in range(3):
        assert limiter.try_acquire("k", 3, timedelta(seconds=60))
    assert not limiter.try_acquire("k", 3, timedelta(seconds=60))

    clock.advance(60.5)

    assert limiter.try_acquire("k", 3, timedelta(seconds=60))


def test_event_exactly_at_window_edge_still_counts(limiter, clock):
    assert limiter.try_acquire("k", 1, 60)
    clock.advance(60)
    assert limiter.try_acquire("k", 1, 60) is False
    clock.advance(0.001)
    assert limiter.try_acquire("k", 1, 60) is True


def test_rejected_attempts_are_not_recorded(limiter, clock):
    assert limiter.try_acquire("k", 1, 10)
    clock.advance(5)
    for _ in range(20):
        assert not limiter.try_acquire("k", 1, 10)
    clock.advance(5.5)
    assert limiter.try_acquire("k", 1, 10)


@pytest.mark.parametrize("key", [None, "", "   "])
def test_blank_key_is_never_limited(limiter, key):
    assert all(limiter.try_acquire(key, 1, 60) for _ in range(10))
    assert len(limiter) == 0


@pytest.mark.parametrize("max_requests, window", [(0, 60), (-1, 60), (5, 0), (5, -10), (5, timedelta(0))])
def test_non_positive_limits_disable_limiting(limiter, max_requests, window):
    assert all(limiter.try_acquire("k", max_requests, window) for _ in range(10))


def test_keys_are_independent(limiter):
    assert limiter.try_acquire("login:a", 1, 60)
    assert not limiter.try_acquire("login:a", 1, 60)
    assert limiter.try_acquire("login:b", 1, 60)
    assert limiter.try_acquire("write:a", 1, 60)


def test_lru_cap_drops_least_recently_used(clock):
    limiter = SlidingWindowRateLimiter(max_keys=2, clock=clock)
    assert limiter.try_acquire("a", 1, 60)
    assert limiter.try_acquire("b", 1, 60)
    assert not limiter.try_acquire("a", 1, 60)  # touches "a"

    assert limiter.try_acquire("c", 1, 60)  # evicts "b"

    assert len(limiter) == 2
    assert not limiter.try_acquire("a", 1, 60)
    assert limiter.try_acquire("b", 1, 60)  # fresh window after eviction


def test_evict_stale_removes_idle_windows(limiter, clock):
    limiter.try_acquire("old", 5, 60)
    clock.advance(100)
    limiter.try_acquire("recent", 5, 60)

    assert limiter.evict_stale(60) == 1
    assert len(limiter) == 1
    assert limiter.evict_stale(60) == 0


def test_reset_forgets_everything(limiter):
    limiter.try_acquire("k", 1, 60)
    limiter.reset()
    assert len(limiter) == 0
    assert limiter.try_acquire("k", 1, 60)


def test_concurrent_callers_on_one_key_admit_exactly_max():
    limiter = SlidingWindowRateLimiter()
    start = threading.Barrier(16)

    def attempt(_):
        start.wait()
        return limiter.try_acquire("write:10.0.0.1", 50, 60)

    with ThreadPoolExecutor(max_workers=16) as pool:
        results = list(pool.map(attempt, range(16 * 10)))

    assert results.count(True) == 50


def test_concurrent_keys_do_not_affect_each_other():
    limiter = SlidingWindowRateLimiter()
    keys = [f"login:10.0.0.{i}" for i in range(8)]

    def hammer(key):
        return sum(limiter.try_acquire(key, 5, 60) for _ in range(20))

    with ThreadPoolExecutor(max_workers=len(keys)) as pool:
        admitted = list(pool.map(hammer, keys))

    assert admitted == [5] * len(keys)


def test_concurrent_access_with_small_key_cap_stays_bounded():
    limiter = SlidingWindowRateLimiter(max_keys=4)

    def hammer(i):
        for n in range(50):
            limiter.try_acquire(f"k{(i * 50 + n) % 12}", 3, 60)

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(hammer, range(8)))

    assert len(limiter) <= 4
