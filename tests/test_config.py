import pytest

from src.gestures.config import Config, CursorConfig, GestureConfig, load_config
from src.gestures.errors import ConfigError
from src.gestures.processor import FrameProcessor


def test_defaults():
    config = Config()
    assert config.gestures.cooldown_ms == 500
    assert config.gestures.hold_threshold_ms == 2000
    assert config.gestures.history_size == 5
    assert config.gestures.scroll_threshold == 0.02
    assert config.gestures.swipe_threshold == 0.15
    assert config.cursor.smoothing_size == 3


@pytest.mark.parametrize("kwargs", [
    {"scroll_threshold": -0.01},
    {"cooldown_ms": -1},
    {"hold_threshold_ms": -100},
    {"history_size": 0},
    {"fist_distance": 0},
])
def test_invalid_gesture_values_rejected(kwargs):
    with pytest.raises(ConfigError):
        GestureConfig(**kwargs)


def test_invalid_cursor_values_rejected():
    with pytest.raises(ConfigError):
        CursorConfig(smoothing_size=0)
    with pytest.raises(ConfigError):
        CursorConfig(mirror="yes")


def test_config_error_is_a_value_error():
    with pytest.raises(ValueError):
        GestureConfig(history_size=-3)


def test_missing_file_returns_defaults(tmp_path):
    config = load_config(tmp_path / "nope.yaml")
    assert config == Config()


def test_load_yaml_overrides(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "gestures:\n"
        "  cooldown_ms: 250\n"
        "  swipe_threshold: 0.25\n"
        "  unknown_key: 1\n"
        "cursor:\n"
        "  screen_width: 1280\n"
    )
    config = load_config(path)
    assert config.gestures.cooldown_ms == 250
    assert config.gestures.swipe_threshold == 0.25
    assert config.gestures.history_size == 5
    assert config.cursor.screen_width == 1280
    assert config.camera.device_id == 0


def test_load_yaml_rejects_bad_values(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("gestures:\n  history_size: 0\n")
    with pytest.raises(ConfigError):
        load_config(path)


def test_load_yaml_rejects_non_mapping_section(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("gestures: 5\n")
    with pytest.raises(ConfigError):
        load_config(path)


def test_processor_uses_configured_thresholds():
    config = Config(gestures=GestureConfig(cooldown_ms=100, hold_threshold_ms=300))
    processor = FrameProcessor(config)
    assert processor.cooldown.duration_ms == 100
    assert processor.hold_timer.threshold_ms == 300


@pytest.mark.parametrize("kwargs", [
    {"history_size": 2.5},
    {"history_size": True},
    {"cooldown_ms": "500"},
    {"swipe_threshold": None},
])
def test_wrong_types_rejected(kwargs):
    with pytest.raises(ConfigError):
        GestureConfig(**kwargs)


def test_cursor_sizes_must_be_integers():
    with pytest.raises(ConfigError):
        CursorConfig(smoothing_size=1.5)
    with pytest.raises(ConfigError):
        CursorConfig(screen_width="1920")


def test_load_yaml_rejects_wrong_types(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("gestures:\n  history_size: 2.5\n  cooldown_ms: \"500\"\n")
    with pytest.raises(ConfigError):
        load_config(path)
