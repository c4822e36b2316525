"""
One-shot trigger for a sustained gesture.
"""
from enum import Enum, auto
from typing import Optional

from .errors import ConfigError


class HoldState(Enum):
    IDLE = auto()
    HOLDING = auto()
    FIRED = auto()


class HoldTimer:
    """
    Fires once per continuous hold.

    IDLE -> HOLDING on the first held frame, HOLDING -> FIRED once the hold
    reaches ``threshold_ms``. FIRED keeps its start time and suppresses
    re-firing until reset() is called when the gesture ends.
    """

    def __init__(self, threshold_ms: float = 2000):
        if threshold_ms < 0:
            raise ConfigError(f"Hold threshold must not be negative, got {threshold_ms}")
        self.threshold_ms = threshold_ms
        self._state = HoldState.IDLE
        self._started_at: Optional[float] = None

    @property
    def state(self) -> HoldState:
        return self._state

    @property
    def started_at(self) -> Optional[float]:
        return self._started_at

    def elapsed(self, now: float) -> float:
        """Hold duration so far in ms (0 when idle or when the clock went back)."""
        if self._started_at is None:
            return 0.0
        return max(0.0, now - self._started_at)

    def update(self, now: float) -> bool:
        """
        Register one held frame.

        Returns:
            True exactly on the frame the threshold is reached.
        """
        if self._state == HoldState.IDLE:
            self._state = HoldState.HOLDING
            self._started_at = now

        if self._state == HoldState.HOLDING:
            elapsed = now - self._started_at
            if elapsed >= 0 and elapsed >= self.threshold_ms:
                self._state = HoldState.FIRED
                return True

        return False

    def reset(self) -> None:
        self._state = HoldState.IDLE
        self._started_at = None
