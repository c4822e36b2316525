import math
import pytest

from src.gestures.errors import MalformedFrameError
from src.gestures.fingers import classify_fingers
from src.gestures.landmarks import HandLandmarks
from hands import make_hand, MCP_Y


def test_single_raised_finger():
    state = classify_fingers(make_hand(index=True))
    assert state.raised == (True, False, False, False)
    assert state.is_fist is False


def test_raise_margin_rejects_jitter_near_knuckle():
    # Tip just above the knuckle, inside the margin
    hand = make_hand(index_tip=(0.45, MCP_Y - 0.01))
    assert classify_fingers(hand, raise_margin=0.02).index_up is False

    hand = make_hand(index_tip=(0.45, MCP_Y - 0.03))
    assert classify_fingers(hand, raise_margin=0.02).index_up is True


def test_fist_when_all_tips_fold_onto_knuckles():
    state = classify_fingers(make_hand(fist=True))
    assert state.is_fist is True
    assert state.raised_count == 0


def test_curled_fingers_are_not_a_fist():
    # Nothing raised, but tips are far from the knuckles
    state = classify_fingers(make_hand())
    assert state.raised_count == 0
    assert state.is_fist is False


def test_one_loose_finger_breaks_the_fist():
    hand = make_hand(fist=True, index_tip=(0.45, 0.97))
    assert classify_fingers(hand).is_fist is False


def test_fist_is_independent_of_raised_flags():
    # Tips slightly above the knuckles but still very close to them
    hand = make_hand(fist=True, index_tip=(0.45, MCP_Y - 0.05))
    state = classify_fingers(hand, raise_margin=0.02, fist_distance=0.1)
    assert state.index_up is True
    assert state.is_fist is True


def test_wrong_landmark_count_is_malformed():
    hand = HandLandmarks(landmarks=tuple((0.5, 0.5, 0.0) for _ in range(20)))
    with pytest.raises(MalformedFrameError):
        classify_fingers(hand)


def test_non_finite_coordinates_are_malformed():
    points = list(make_hand(index=True).landmarks)
    points[8] = (math.nan, 0.5, 0.0)
    with pytest.raises(MalformedFrameError):
        classify_fingers(HandLandmarks(landmarks=tuple(points)))


def test_from_points_accepts_2d_points():
    hand = HandLandmarks.from_points([(0.1, 0.2)] * 21)
    assert hand.get(0) == (0.1, 0.2, 0.0)


def test_from_points_rejects_points_without_y():
    with pytest.raises(MalformedFrameError):
        HandLandmarks.from_points([(0.1,)] * 21)
