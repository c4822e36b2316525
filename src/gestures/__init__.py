"""
HandNav Gesture Module

Turns per-frame hand landmarks into scroll, page, capture and cursor events.
"""
from .config import Config, load_config
from .classifier import Gesture, classify_gesture
from .errors import GestureError, MalformedFrameError, ConfigError
from .events import EventType, GestureEvent
from .fingers import FingerState, classify_fingers
from .landmarks import HandLandmarks
from .processor import FrameProcessor, FrameResult

__all__ = [
    'Config',
    'load_config',
    'Gesture',
    'classify_gesture',
    'GestureError',
    'MalformedFrameError',
    'ConfigError',
    'EventType',
    'GestureEvent',
    'FingerState',
    'classify_fingers',
    'HandLandmarks',
    'FrameProcessor',
    'FrameResult',
]
