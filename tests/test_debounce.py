import pytest

from src.gestures.debounce import Cooldown, DebounceState, DirectionalDebouncer
from src.gestures.errors import ConfigError
from src.gestures.history import HistoryBuffer


@pytest.fixture
def cooldown():
    return Cooldown(500)


@pytest.fixture
def debouncer(cooldown):
    return DirectionalDebouncer(threshold=0.02, cooldown=cooldown, history_size=5)


def test_history_evicts_oldest():
    history = HistoryBuffer(3)
    for v in [1.0, 2.0, 3.0, 4.0]:
        history.push(v)
    assert history.values() == [2.0, 3.0, 4.0]
    assert history.last() == 4.0


def test_history_rejects_zero_capacity():
    with pytest.raises(ConfigError):
        HistoryBuffer(0)


def test_cooldown_is_strict(cooldown):
    assert cooldown.ready(0)
    cooldown.mark(1000)
    assert not cooldown.ready(1500)
    assert cooldown.ready(1501)


def test_cooldown_treats_clock_going_back_as_not_elapsed(cooldown):
    cooldown.mark(1000)
    assert not cooldown.ready(400)


def test_first_sample_is_baseline(debouncer):
    assert debouncer.state == DebounceState.WAITING_FOR_BASELINE
    assert debouncer.update(0.6, 0) == 0
    assert debouncer.state == DebounceState.ARMED


def test_fires_once_and_clears_history(debouncer, cooldown):
    debouncer.update(0.60, 0)
    assert debouncer.update(0.55, 100) == -1
    assert len(debouncer.history) == 0
    assert cooldown.last_action_at == 100


def test_sign_follows_delta(debouncer):
    debouncer.update(0.50, 0)
    assert debouncer.update(0.55, 100) == 1


def test_small_moves_do_not_fire(debouncer):
    debouncer.update(0.60, 0)
    assert debouncer.update(0.59, 100) == 0
    assert debouncer.update(0.58, 200) == 0


def test_identical_frames_never_fire(debouncer):
    fired = [debouncer.update(0.5, t * 10) for t in range(200)]
    assert not any(fired)


def test_cooldown_suppresses_second_event(debouncer):
    debouncer.update(0.70, 0)
    assert debouncer.update(0.65, 100) == -1
    debouncer.update(0.60, 200)
    assert debouncer.update(0.55, 300) == 0
    assert debouncer.update(0.50, 600) == 0  # exactly the cooldown, not past it
    assert debouncer.update(0.45, 601) == -1


def test_cooldown_is_shared_between_axes(cooldown):
    vertical = DirectionalDebouncer(0.02, cooldown, name="vertical")
    horizontal = DirectionalDebouncer(0.15, cooldown, name="horizontal")

    vertical.update(0.6, 0)
    assert vertical.update(0.5, 100) == -1

    horizontal.update(0.2, 150)
    assert horizontal.update(0.5, 200) == 0


def test_negative_threshold_rejected(cooldown):
    with pytest.raises(ConfigError):
        DirectionalDebouncer(-0.1, cooldown)


def test_negative_cooldown_rejected():
    with pytest.raises(ConfigError):
        Cooldown(-1)
