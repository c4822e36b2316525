"""
Debouncing of continuous hand motion into discrete directional events.

Raw per-frame deltas are noisy, so an event needs a threshold-crossing
change against the previous sample *and* an elapsed cooldown since the
last event of the session. Firing clears the history, forcing a fresh
baseline for the next gesture.
"""
from enum import Enum, auto
from typing import Optional
import logging

from .errors import ConfigError
from .history import HistoryBuffer

logger = logging.getLogger(__name__)


class Cooldown:
    """
    Minimum time between two emitted actions.

    One instance is shared by every debouncer of a session so the
    last-action timestamp is global. Times are in milliseconds.
    """

    def __init__(self, duration_ms: float = 500):
        if duration_ms < 0:
            raise ConfigError(f"Cooldown must not be negative, got {duration_ms}")
        self.duration_ms = duration_ms
        self.last_action_at: Optional[float] = None

    def ready(self, now: float) -> bool:
        """True once strictly more than ``duration_ms`` passed since the last action."""
        if self.last_action_at is None:
            return True
        elapsed = now - self.last_action_at
        # Clock moved backwards: not elapsed yet
        if elapsed < 0:
            return False
        return elapsed > self.duration_ms

    def mark(self, now: float) -> None:
        self.last_action_at = now

    def reset(self) -> None:
        self.last_action_at = None


class DebounceState(Enum):
    WAITING_FOR_BASELINE = auto()
    ARMED = auto()


class DirectionalDebouncer:
    """
    Turns a stream of positions on one axis into at most one signed
    step per cooldown window.
    """

    def __init__(
        self,
        threshold: float,
        cooldown: Cooldown,
        history_size: int = 5,
        name: str = "axis",
    ):
        """
        Args:
            threshold: Minimum absolute delta (normalized units) between samples
            cooldown: Session-wide cooldown shared with other debouncers
            history_size: Capacity of the position history
            name: Label used in log messages
        """
        if threshold < 0:
            raise ConfigError(f"Movement threshold must not be negative, got {threshold}")
        self.threshold = threshold
        self.name = name
        self._cooldown = cooldown
        self._history = HistoryBuffer(history_size)

    @property
    def history(self) -> HistoryBuffer:
        return self._history

    @property
    def state(self) -> DebounceState:
        if len(self._history) == 0:
            return DebounceState.WAITING_FOR_BASELINE
        return DebounceState.ARMED

    def update(self, value: float, now: float) -> int:
        """
        Feed one sample.

        Returns:
            -1 or +1 when a step fires (sign of the delta), 0 otherwise.
        """
        previous = self._history.last()
        self._history.push(value)

        if previous is None:
            logger.debug("%s: baseline %.4f", self.name, value)
            return 0

        delta = value - previous
        if abs(delta) <= self.threshold:
            return 0
        if not self._cooldown.ready(now):
            logger.debug("%s: delta %.4f suppressed by cooldown", self.name, delta)
            return 0

        self._cooldown.mark(now)
        self._history.clear()
        return 1 if delta > 0 else -1

    def reset(self) -> None:
        """Drop the history; the next sample becomes a new baseline."""
        self._history.clear()
