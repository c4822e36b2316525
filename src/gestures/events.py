"""
Output events handed to the action layer.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class EventType(Enum):
    SCROLL_UP = "scroll_up"
    SCROLL_DOWN = "scroll_down"
    PREV_PAGE = "prev_page"
    NEXT_PAGE = "next_page"
    TRIGGER_CAPTURE = "trigger_capture"
    CURSOR_MOVED = "cursor_moved"


DISCRETE_EVENTS = frozenset({
    EventType.SCROLL_UP,
    EventType.SCROLL_DOWN,
    EventType.PREV_PAGE,
    EventType.NEXT_PAGE,
    EventType.TRIGGER_CAPTURE,
})


@dataclass(frozen=True)
class GestureEvent:
    """
    One emitted event.

    ``x``/``y`` are screen pixels and only set for CURSOR_MOVED.
    ``timestamp`` is the frame time in milliseconds.
    """
    type: EventType
    timestamp: float
    x: Optional[float] = None
    y: Optional[float] = None

    @property
    def is_discrete(self) -> bool:
        return self.type in DISCRETE_EVENTS
