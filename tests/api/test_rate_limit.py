"""Tests for the sliding-window rate limiter."""

import pytest

from solairdrop.api.rate_limit import SlidingWindowRateLimiter


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_allows_up_to_points_per_window():
    clock = FakeClock()
    limiter = SlidingWindowRateLimiter(points=3, duration=60, clock=clock)

    assert [limiter.consume("1.2.3.4") for _ in range(4)] == [True, True, True, False]


def test_keys_are_independent():
    limiter = SlidingWindowRateLimiter(points=1, duration=60, clock=FakeClock())

    assert limiter.consume("a")
    assert limiter.consume("b")
    assert not limiter.consume("a")


def test_window_slides():
    clock = FakeClock()
    limiter = SlidingWindowRateLimiter(points=2, duration=60, clock=clock)

    assert limiter.consume("a")
    clock.now += 30
    assert limiter.consume("a")
    assert not limiter.consume("a")

    clock.now += 30
    assert limiter.consume("a")
    assert not limiter.consume("a")


def test_invalid_arguments():
    with pytest.raises(ValueError):
        SlidingWindowRateLimiter(points=0)
    with pytest.raises(ValueError):
        SlidingWindowRateLimiter(duration=0)


def test_idle_keys_are_forgotten():
    clock = FakeClock()
    limiter = SlidingWindowRateLimiter(points=1, duration=60, clock=clock)

    limiter.consume("a")
    limiter.consume("b")
    assert limiter.tracked_keys() == 2

    clock.now += 60
    assert limiter.consume("c")
    assert limiter.tracked_keys() == 1
