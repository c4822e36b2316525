"""
Landmark frame produced once per video frame by the hand detector.
"""
from dataclasses import dataclass
from typing import List, Sequence, Tuple
import math

from .errors import MalformedFrameError

NUM_LANDMARKS = 21

Point = Tuple[float, float, float]


@dataclass(frozen=True)
class HandLandmarks:
    """
    Normalized hand landmarks for one detected hand.

    Attributes:
        landmarks: 21 (x, y, z) tuples, normalized 0-1 relative to the frame
        handedness: 'Left' or 'Right'
        confidence: Detection confidence 0-1
    """
    landmarks: Tuple[Point, ...]
    handedness: str = "Unknown"
    confidence: float = 1.0

    # MediaPipe landmark indices
    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_MCP = 5
    INDEX_PIP = 6
    INDEX_DIP = 7
    INDEX_TIP = 8
    MIDDLE_MCP = 9
    MIDDLE_PIP = 10
    MIDDLE_DIP = 11
    MIDDLE_TIP = 12
    RING_MCP = 13
    RING_PIP = 14
    RING_DIP = 15
    RING_TIP = 16
    PINKY_MCP = 17
    PINKY_PIP = 18
    PINKY_DIP = 19
    PINKY_TIP = 20

    @classmethod
    def from_points(
        cls,
        points: Sequence[Sequence[float]],
        handedness: str = "Unknown",
        confidence: float = 1.0,
    ) -> "HandLandmarks":
        """
        Build a frame from raw (x, y) or (x, y, z) sequences.

        Missing z defaults to 0.0. The result is not validated here so that
        detectors can hand over whatever they produced; the classifier
        validates before reading.
        """
        landmarks: List[Point] = []
        for p in points:
            if len(p) >= 3:
                landmarks.append((float(p[0]), float(p[1]), float(p[2])))
            elif len(p) == 2:
                landmarks.append((float(p[0]), float(p[1]), 0.0))
            else:
                raise MalformedFrameError(f"Landmark needs at least x and y, got {p!r}")
        return cls(tuple(landmarks), handedness, confidence)

    def validate(self) -> None:
        """Raise MalformedFrameError unless all 21 points are present and finite."""
        try:
            count = len(self.landmarks)
            if count != NUM_LANDMARKS:
                raise MalformedFrameError(f"Expected {NUM_LANDMARKS} landmarks, got {count}")
            for i, p in enumerate(self.landmarks):
                if isinstance(p, str) or len(p) < 2:
                    raise MalformedFrameError(f"Landmark {i} has no x/y: {p!r}")
                if not (math.isfinite(p[0]) and math.isfinite(p[1])):
                    raise MalformedFrameError(f"Landmark {i} is not a finite point: {p!r}")
        except (TypeError, LookupError) as e:
            raise MalformedFrameError(f"Landmarks are not a sequence of points: {e}") from e

    def get(self, index: int) -> Point:
        """Get landmark by index."""
        return self.landmarks[index]

    @property
    def index_tip(self) -> Point:
        return self.landmarks[self.INDEX_TIP]

    @property
    def middle_tip(self) -> Point:
        return self.landmarks[self.MIDDLE_TIP]


# Hand connections for drawing (same as MediaPipe's HAND_CONNECTIONS)
HAND_CONNECTIONS = [
    (0, 1), (1, 2), (2, 3), (3, 4),      # Thumb
    (0, 5), (5, 6), (6, 7), (7, 8),      # Index
    (0, 9), (9, 10), (10, 11), (11, 12), # Middle
    (0, 13), (13, 14), (14, 15), (15, 16), # Ring
    (0, 17), (17, 18), (18, 19), (19, 20), # Pinky
    (5, 9), (9, 13), (13, 17),           # Palm
]
