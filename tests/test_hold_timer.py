import pytest

from src.gestures.errors import ConfigError
from src.gestures.hold_timer import HoldState, HoldTimer

HOLD = 2000


@pytest.fixture
def timer():
    return HoldTimer(HOLD)


def feed(timer, start, end, step=100):
    """Feed held frames from start to end inclusive, return the number of triggers."""
    fired = 0
    t = start
    while t <= end:
        fired += timer.update(t)
        t += step
    if t - step != end:
        fired += timer.update(end)
    return fired


def test_first_frame_starts_holding(timer):
    assert timer.update(0) is False
    assert timer.state == HoldState.HOLDING
    assert timer.started_at == 0


def test_one_ms_short_does_not_fire(timer):
    assert feed(timer, 0, HOLD - 1) == 0
    assert timer.state == HoldState.HOLDING


def test_fires_exactly_at_threshold(timer):
    feed(timer, 0, HOLD - 1)
    assert timer.update(HOLD) is True
    assert timer.state == HoldState.FIRED


def test_no_refire_while_hold_continues(timer):
    assert feed(timer, 0, HOLD) == 1
    assert feed(timer, HOLD + 100, HOLD * 3) == 0
    # Start time is kept while fired
    assert timer.started_at == 0


def test_reset_requires_full_threshold_again(timer):
    feed(timer, 0, HOLD)
    timer.reset()
    assert timer.state == HoldState.IDLE
    assert timer.started_at is None

    assert feed(timer, 5000, 5000 + HOLD - 1) == 0
    assert timer.update(5000 + HOLD) is True


def test_clock_going_back_does_not_fire(timer):
    timer.update(10000)
    assert timer.update(0) is False
    assert timer.elapsed(0) == 0.0
    assert timer.state == HoldState.HOLDING


def test_elapsed(timer):
    assert timer.elapsed(500) == 0.0
    timer.update(100)
    assert timer.elapsed(600) == 500


def test_negative_threshold_rejected():
    with pytest.raises(ConfigError):
        HoldTimer(-5)
