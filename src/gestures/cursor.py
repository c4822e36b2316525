"""
Pointer smoothing from the index fingertip to screen pixels.
"""
from typing import Tuple

from .errors import ConfigError
from .history import HistoryBuffer


class CursorSmoother:
    """
    Maps a normalized fingertip position to a screen coordinate.

    Steps per sample:
    1. Mirror x (selfie view) so moving the hand right moves the cursor right
    2. Apply sensitivity gain around the frame center
    3. Scale to pixels and clamp to the screen
    4. Average over the last few samples
    """

    def __init__(
        self,
        width: int = 1920,
        height: int = 1080,
        sensitivity: float = 1.5,
        buffer_size: int = 3,
        mirror: bool = True,
    ):
        if width < 1 or height < 1:
            raise ConfigError(f"Screen size must be positive, got {width}x{height}")
        if sensitivity <= 0:
            raise ConfigError(f"Cursor sensitivity must be positive, got {sensitivity}")
        self.width = width
        self.height = height
        self.sensitivity = sensitivity
        self.mirror = mirror
        self._xs = HistoryBuffer(buffer_size)
        self._ys = HistoryBuffer(buffer_size)

    def _to_screen(self, coord: float, dimension: int) -> float:
        scaled = (coord - 0.5) * self.sensitivity + 0.5
        return max(0.0, min(float(dimension - 1), scaled * dimension))

    def update(self, x_norm: float, y_norm: float) -> Tuple[float, float]:
        """
        Push one fingertip sample.

        Returns:
            Smoothed (x, y) in pixels, within [0, width-1] x [0, height-1].
        """
        if self.mirror:
            x_norm = 1.0 - x_norm

        self._xs.push(self._to_screen(x_norm, self.width))
        self._ys.push(self._to_screen(y_norm, self.height))
        return self._xs.mean(), self._ys.mean()

    @property
    def position(self):
        """Last smoothed position, or None before the first sample."""
        if len(self._xs) == 0:
            return None
        return self._xs.mean(), self._ys.mean()

    def reset(self) -> None:
        self._xs.clear()
        self._ys.clear()
