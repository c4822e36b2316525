"""
Config loader for HandNav.
Loads YAML configuration with dataclass validation.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import yaml

from .errors import ConfigError


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise ConfigError(message)


def _require_number(obj, section: str, names, integer: bool = False) -> None:
    """Reject non-numeric values (bools included) before any range check."""
    kinds = int if integer else (int, float)
    for name in names:
        value = getattr(obj, name)
        _require(isinstance(value, kinds) and not isinstance(value, bool),
                 f"{section}.{name} must be {'an integer' if integer else 'a number'}, got {value!r}")


@dataclass
class CameraConfig:
    device_id: int = 0
    width: int = 640
    height: int = 480
    fps: int = 30

    def __post_init__(self):
        _require_number(self, "camera", ("device_id", "width", "height", "fps"), integer=True)
        _require(self.width > 0 and self.height > 0,
                 f"camera resolution must be positive, got {self.width}x{self.height}")
        _require(self.fps > 0, f"camera.fps must be positive, got {self.fps}")


@dataclass
class MediaPipeConfig:
    max_num_hands: int = 1
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5

    def __post_init__(self):
        _require_number(self, "mediapipe", ("max_num_hands",), integer=True)
        _require_number(self, "mediapipe", ("min_detection_confidence", "min_tracking_confidence"))
        _require(self.max_num_hands >= 1,
                 f"mediapipe.max_num_hands must be at least 1, got {self.max_num_hands}")
        for name in ("min_detection_confidence", "min_tracking_confidence"):
            value = getattr(self, name)
            _require(0.0 <= value <= 1.0, f"mediapipe.{name} must be within [0, 1], got {value}")


@dataclass
class GestureConfig:
    # Finger classification (normalized frame units)
    raise_margin: float = 0.02     # Tip must clear its MCP by this much to count as raised
    fist_distance: float = 0.1     # Tip-MCP distance under which a finger is folded

    # Directional debounce
    scroll_threshold: float = 0.02 # Min vertical delta between frames
    swipe_threshold: float = 0.15  # Min horizontal delta between frames
    cooldown_ms: float = 500       # Min time between two directional events
    history_size: int = 5

    # Fist hold
    hold_threshold_ms: float = 2000

    def __post_init__(self):
        numeric = ("raise_margin", "fist_distance", "scroll_threshold",
                   "swipe_threshold", "cooldown_ms", "hold_threshold_ms")
        _require_number(self, "gestures", numeric)
        _require_number(self, "gestures", ("history_size",), integer=True)
        for name in numeric:
            value = getattr(self, name)
            _require(value >= 0, f"gestures.{name} must not be negative, got {value}")
        _require(self.fist_distance > 0,
                 f"gestures.fist_distance must be positive, got {self.fist_distance}")
        _require(self.history_size >= 1,
                 f"gestures.history_size must be at least 1, got {self.history_size}")


@dataclass
class CursorConfig:
    sensitivity: float = 1.5       # Gain around the frame center
    smoothing_size: int = 3        # Samples averaged per axis
    mirror: bool = True            # Selfie view: flip x
    screen_width: int = 1920
    screen_height: int = 1080

    def __post_init__(self):
        _require_number(self, "cursor", ("sensitivity",))
        _require_number(self, "cursor", ("smoothing_size", "screen_width", "screen_height"), integer=True)
        _require(self.sensitivity > 0, f"cursor.sensitivity must be positive, got {self.sensitivity}")
        _require(self.smoothing_size >= 1,
                 f"cursor.smoothing_size must be at least 1, got {self.smoothing_size}")
        _require(self.screen_width > 0 and self.screen_height > 0,
                 f"cursor screen size must be positive, got {self.screen_width}x{self.screen_height}")
        _require(isinstance(self.mirror, bool), f"cursor.mirror must be a boolean, got {self.mirror!r}")


@dataclass
class Config:
    camera: CameraConfig = field(default_factory=CameraConfig)
    mediapipe: MediaPipeConfig = field(default_factory=MediaPipeConfig)
    gestures: GestureConfig = field(default_factory=GestureConfig)
    cursor: CursorConfig = field(default_factory=CursorConfig)


def _dict_to_dataclass(cls, data: Optional[dict]):
    """Convert a dict to a dataclass, ignoring unknown keys."""
    if data is None:
        return cls()
    if not isinstance(data, dict):
        raise ConfigError(f"Section for {cls.__name__} must be a mapping, got {type(data).__name__}")
    field_names = {f.name for f in cls.__dataclass_fields__.values()}
    filtered = {k: v for k, v in data.items() if k in field_names}
    return cls(**filtered)


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses config.yaml
                    in project root.

    Returns:
        Config dataclass with all settings.

    Raises:
        ConfigError: If a value is out of range.
    """
    if config_path is None:
        config_path = Path(__file__).parent.parent.parent / "config.yaml"

    config_path = Path(config_path)

    if not config_path.exists():
        # Return defaults if no config file
        return Config()

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a mapping at the top level")

    return Config(
        camera=_dict_to_dataclass(CameraConfig, data.get('camera')),
        mediapipe=_dict_to_dataclass(MediaPipeConfig, data.get('mediapipe')),
        gestures=_dict_to_dataclass(GestureConfig, data.get('gestures')),
        cursor=_dict_to_dataclass(CursorConfig, data.get('cursor')),
    )
