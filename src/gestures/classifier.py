"""
Gesture classification from a finger state vector.
"""
from enum import Enum, auto
from typing import Optional, Tuple

from .fingers import FingerState


class Gesture(Enum):
    """Detected gesture categories."""
    NONE = auto()
    SCROLL_UP = auto()    # Index finger only
    SCROLL_DOWN = auto()  # Index + middle
    SWIPE = auto()        # All four fingers
    FIST = auto()         # All four folded


# Ordered (index, middle, ring, pinky) patterns; the first match wins.
GESTURE_PATTERNS: Tuple[Tuple[Tuple[bool, bool, bool, bool], Gesture], ...] = (
    ((True, False, False, False), Gesture.SCROLL_UP),
    ((True, True, False, False), Gesture.SCROLL_DOWN),
    ((True, True, True, True), Gesture.SWIPE),
)


def match_pattern(state: FingerState) -> Optional[Gesture]:
    """Return the first table gesture whose raised-finger pattern matches, else None."""
    for pattern, gesture in GESTURE_PATTERNS:
        if state.raised == pattern:
            return gesture
    return None


def classify_gesture(state: FingerState) -> Gesture:
    """
    Map a finger state to exactly one gesture.

    Raised-finger patterns take priority over the fist flag; anything that
    matches nothing is NONE.
    """
    gesture = match_pattern(state)
    if gesture is not None:
        return gesture
    if state.is_fist:
        return Gesture.FIST
    return Gesture.NONE
