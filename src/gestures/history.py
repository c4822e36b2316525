"""
Bounded position history for one axis.
"""
from collections import deque
from typing import Deque, List, Optional

from .errors import ConfigError


class HistoryBuffer:
    """
    Fixed-capacity FIFO of recent scalar positions.
    Insertion order is temporal; the oldest value is evicted when full.
    """

    def __init__(self, capacity: int = 5):
        if capacity < 1:
            raise ConfigError(f"History capacity must be at least 1, got {capacity}")
        self._values: Deque[float] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._values.maxlen

    def push(self, value: float) -> None:
        self._values.append(value)

    def last(self) -> Optional[float]:
        """Most recent value, or None when empty."""
        if not self._values:
            return None
        return self._values[-1]

    def clear(self) -> None:
        self._values.clear()

    def values(self) -> List[float]:
        return list(self._values)

    def mean(self) -> Optional[float]:
        if not self._values:
            return None
        return sum(self._values) / len(self._values)

    def __len__(self) -> int:
        return len(self._values)
