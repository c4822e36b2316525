"""
Finger state classification from a single landmark frame.
"""
from dataclasses import dataclass
from typing import Tuple
import math

from .landmarks import HandLandmarks

# (tip, MCP) for the four non-thumb fingers
FINGER_JOINTS = {
    "index": (HandLandmarks.INDEX_TIP, HandLandmarks.INDEX_MCP),
    "middle": (HandLandmarks.MIDDLE_TIP, HandLandmarks.MIDDLE_MCP),
    "ring": (HandLandmarks.RING_TIP, HandLandmarks.RING_MCP),
    "pinky": (HandLandmarks.PINKY_TIP, HandLandmarks.PINKY_MCP),
}


@dataclass(frozen=True)
class FingerState:
    """Raised/folded state of the four fingers for one frame."""
    index_up: bool = False
    middle_up: bool = False
    ring_up: bool = False
    pinky_up: bool = False
    is_fist: bool = False

    @property
    def raised(self) -> Tuple[bool, bool, bool, bool]:
        return (self.index_up, self.middle_up, self.ring_up, self.pinky_up)

    @property
    def raised_count(self) -> int:
        return sum(self.raised)


def _distance_2d(p1, p2) -> float:
    """2D distance between two landmarks (ignoring z)."""
    dx = p1[0] - p2[0]
    dy = p1[1] - p2[1]
    return math.sqrt(dx*dx + dy*dy)


def is_raised(hand: HandLandmarks, finger: str, margin: float) -> bool:
    """
    A finger is raised when its tip sits above its MCP joint by more than
    ``margin`` (image y grows downwards).
    """
    tip_idx, mcp_idx = FINGER_JOINTS[finger]
    return hand.get(tip_idx)[1] < hand.get(mcp_idx)[1] - margin


def is_folded(hand: HandLandmarks, finger: str, max_distance: float) -> bool:
    """A finger is folded when its tip is within ``max_distance`` of its MCP."""
    tip_idx, mcp_idx = FINGER_JOINTS[finger]
    return _distance_2d(hand.get(tip_idx), hand.get(mcp_idx)) < max_distance


def classify_fingers(
    hand: HandLandmarks,
    raise_margin: float = 0.02,
    fist_distance: float = 0.1,
) -> FingerState:
    """
    Classify which fingers are raised and whether the hand is a fist.

    The fist test is geometric and independent of the raised flags: all
    four tips must be close to their knuckles.

    Args:
        hand: Landmark frame
        raise_margin: Normalized distance a tip must clear its MCP by
        fist_distance: Normalized tip-MCP distance under which a finger is folded

    Raises:
        MalformedFrameError: If the frame does not hold 21 finite points.
    """
    hand.validate()

    return FingerState(
        index_up=is_raised(hand, "index", raise_margin),
        middle_up=is_raised(hand, "middle", raise_margin),
        ring_up=is_raised(hand, "ring", raise_margin),
        pinky_up=is_raised(hand, "pinky", raise_margin),
        is_fist=all(is_folded(hand, f, fist_distance) for f in FINGER_JOINTS),
    )
