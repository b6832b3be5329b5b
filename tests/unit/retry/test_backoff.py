"""
Unit tests for the exponential backoff policy.
"""

import pytest

from axonflow.retry.backoff import BackoffPolicy
from axonflow.retry.config import RetryConfig


def make_policy(initial: float, multiplier: float, maximum: float) -> BackoffPolicy:
    return BackoffPolicy(
        RetryConfig(initial_delay=initial, multiplier=multiplier, max_delay=maximum)
    )


def test_doubling_sequence():
    """Test 1s initial, x2, 30s cap gives 1, 2, 4, 8."""
    policy = make_policy(1.0, 2.0, 30.0)

    assert policy.delay(1) == 1.0
    assert policy.delay(2) == 2.0
    assert policy.delay(3) == 4.0
    assert policy.delay(4) == 8.0


def test_delay_is_capped():
    """Test 10s initial, x2, 15s cap gives 10, 15, 15."""
    policy = make_policy(10.0, 2.0, 15.0)

    assert policy.delay(1) == 10.0
    assert policy.delay(2) == 15.0
    assert policy.delay(3) == 15.0


def test_first_attempt_returns_initial_delay_unmodified():
    policy = make_policy(0.25, 3.0, 100.0)

    assert policy.delay(1) == 0.25


def test_attempt_below_one_returns_initial_delay():
    policy = make_policy(1.5, 2.0, 30.0)

    assert policy.delay(0) == 1.5
    assert policy.delay(-3) == 1.5


@pytest.mark.parametrize(
    "initial,multiplier,maximum",
    [(1.0, 2.0, 30.0), (0.1, 1.5, 2.0), (3.0, 1.0, 3.0), (0.5, 10.0, 60.0)],
)
def test_sequence_is_non_decreasing_and_bounded(initial, multiplier, maximum):
    """Test delays never exceed max_delay and never decrease."""
    policy = make_policy(initial, multiplier, maximum)
    delays = [policy.delay(n) for n in range(1, 50)]

    assert all(d <= maximum for d in delays)
    assert all(a <= b for a, b in zip(delays, delays[1:]))


def test_once_clamped_stays_clamped():
    policy = make_policy(1.0, 2.0, 8.0)
    delays = [policy.delay(n) for n in range(4, 20)]

    assert delays == [8.0] * len(delays)


def test_huge_attempt_saturates_instead_of_overflowing():
    policy = make_policy(1.0, 10.0, 30.0)

    assert policy.delay(10_000) == 30.0
