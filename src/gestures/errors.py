"""
Exceptions raised by the gesture engine.
"""


class GestureError(Exception):
    """Base class for gesture engine errors."""


class MalformedFrameError(GestureError):
    """A landmark frame is missing points or carries unusable coordinates."""


class ConfigError(GestureError, ValueError):
    """A configuration value is out of its allowed range."""
