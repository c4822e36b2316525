"""
Per-frame orchestration of gesture recognition.

The FrameProcessor owns every piece of session state (history buffers,
cooldown, hold timer, cursor smoothing) and turns each landmark frame into
zero or more GestureEvents. One instance per detection session, confined
to a single thread.
"""
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple
import logging
import time

from .classifier import Gesture, classify_gesture
from .config import Config
from .cursor import CursorSmoother
from .debounce import Cooldown, DirectionalDebouncer
from .errors import MalformedFrameError
from .events import EventType, GestureEvent
from .fingers import FingerState, classify_fingers
from .hold_timer import HoldTimer
from .landmarks import HandLandmarks

logger = logging.getLogger(__name__)

EventCallback = Callable[[GestureEvent], None]


@dataclass
class FrameResult:
    """Outcome of processing one frame."""
    gesture: Gesture = Gesture.NONE
    fingers: Optional[FingerState] = None
    events: List[GestureEvent] = field(default_factory=list)
    cursor: Optional[Tuple[float, float]] = None
    hold_elapsed_ms: float = 0.0
    hand_detected: bool = False


class FrameProcessor:
    """
    Drives classification, debouncing, hold timing and cursor smoothing.

    Routing per gesture:
    - SCROLL_UP (index only): vertical debounce on the index tip + cursor
    - SCROLL_DOWN (index + middle): vertical debounce on the mean tip height
    - SWIPE (four fingers): horizontal debounce on the mirrored index tip
    - FIST: hold timer
    - NONE / no hand / malformed frame: full reset
    """

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize processor.

        Args:
            config: HandNav configuration; defaults when omitted
        """
        self._config = config or Config()
        gestures = self._config.gestures
        cursor = self._config.cursor

        self._cooldown = Cooldown(gestures.cooldown_ms)
        self._vertical = DirectionalDebouncer(
            gestures.scroll_threshold, self._cooldown, gestures.history_size, name="vertical"
        )
        self._horizontal = DirectionalDebouncer(
            gestures.swipe_threshold, self._cooldown, gestures.history_size, name="horizontal"
        )
        self._hold = HoldTimer(gestures.hold_threshold_ms)
        self._cursor = CursorSmoother(
            width=cursor.screen_width,
            height=cursor.screen_height,
            sensitivity=cursor.sensitivity,
            buffer_size=cursor.smoothing_size,
            mirror=cursor.mirror,
        )

        self._handlers: Dict[Gesture, Callable[[HandLandmarks, float, Gesture], List[GestureEvent]]] = {
            Gesture.SCROLL_UP: self._handle_vertical,
            Gesture.SCROLL_DOWN: self._handle_vertical,
            Gesture.SWIPE: self._handle_swipe,
            Gesture.FIST: self._handle_fist,
        }

        self._active_gesture = Gesture.NONE
        self._callbacks: List[EventCallback] = []
        self._is_running = True

    # ------------------------------------------------------------------
    # Public API

    def register_callback(self, callback: EventCallback) -> None:
        """Register a callback invoked for every emitted event, in order."""
        self._callbacks.append(callback)

    def process(
        self,
        hand: Optional[HandLandmarks],
        timestamp_ms: Optional[float] = None,
    ) -> FrameResult:
        """
        Process one frame.

        Args:
            hand: Landmarks of the detected hand, or None when no hand is visible
            timestamp_ms: Frame time in milliseconds; defaults to a monotonic clock

        Returns:
            FrameResult with the gesture and any events emitted for this frame.
        """
        if not self._is_running:
            return FrameResult()

        now = timestamp_ms if timestamp_ms is not None else time.perf_counter() * 1000

        if hand is None:
            self._lose_hand()
            return FrameResult()

        try:
            fingers = classify_fingers(
                hand,
                raise_margin=self._config.gestures.raise_margin,
                fist_distance=self._config.gestures.fist_distance,
            )
        except MalformedFrameError as e:
            logger.warning("Dropping malformed frame: %s", e)
            self._lose_hand()
            return FrameResult()

        gesture = classify_gesture(fingers)

        if gesture == Gesture.NONE:
            self._lose_hand()
            return FrameResult(gesture=gesture, fingers=fingers, hand_detected=True)

        if gesture != self._active_gesture:
            logger.debug("Gesture %s -> %s", self._active_gesture.name, gesture.name)
            self._reset_gesture_state()
            self._active_gesture = gesture

        events = self._handlers[gesture](hand, now, gesture)

        result = FrameResult(
            gesture=gesture,
            fingers=fingers,
            events=events,
            cursor=self._cursor.position if gesture == Gesture.SCROLL_UP else None,
            hold_elapsed_ms=self._hold.elapsed(now) if gesture == Gesture.FIST else 0.0,
            hand_detected=True,
        )
        self._dispatch(events)
        return result

    def reset(self) -> None:
        """Clear all session state, as if the hand had just been lost."""
        self._lose_hand()
        self._cursor.reset()

    def stop(self) -> None:
        """Tear down the session; later frames are ignored."""
        self.reset()
        self._is_running = False
        logger.info("Frame processor stopped")

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def active_gesture(self) -> Gesture:
        return self._active_gesture

    @property
    def vertical_history(self):
        return self._vertical.history

    @property
    def horizontal_history(self):
        return self._horizontal.history

    @property
    def hold_timer(self) -> HoldTimer:
        return self._hold

    @property
    def cooldown(self) -> Cooldown:
        return self._cooldown

    # ------------------------------------------------------------------
    # Gesture handlers

    def _handle_vertical(self, hand: HandLandmarks, now: float, gesture: Gesture) -> List[GestureEvent]:
        events: List[GestureEvent] = []

        if gesture == Gesture.SCROLL_DOWN:
            y = (hand.index_tip[1] + hand.middle_tip[1]) / 2
        else:
            y = hand.index_tip[1]

        # Hand moving up the frame (y decreasing) scrolls up
        step = self._vertical.update(y, now)
        if step < 0:
            events.append(self._event(EventType.SCROLL_UP, now))
        elif step > 0:
            events.append(self._event(EventType.SCROLL_DOWN, now))

        if gesture == Gesture.SCROLL_UP:
            x, y_px = self._cursor.update(hand.index_tip[0], hand.index_tip[1])
            events.append(GestureEvent(EventType.CURSOR_MOVED, now, x=x, y=y_px))

        return events

    def _handle_swipe(self, hand: HandLandmarks, now: float, gesture: Gesture) -> List[GestureEvent]:
        x_norm = 1.0 - hand.index_tip[0]
        step = self._horizontal.update(x_norm, now)
        if step > 0:
            return [self._event(EventType.PREV_PAGE, now)]
        if step < 0:
            return [self._event(EventType.NEXT_PAGE, now)]
        return []

    def _handle_fist(self, hand: HandLandmarks, now: float, gesture: Gesture) -> List[GestureEvent]:
        if self._hold.update(now):
            return [self._event(EventType.TRIGGER_CAPTURE, now)]
        return []

    # ------------------------------------------------------------------
    # State management

    def _event(self, event_type: EventType, now: float) -> GestureEvent:
        logger.info("Event %s at %.0fms", event_type.value, now)
        return GestureEvent(event_type, now)

    def _reset_gesture_state(self) -> None:
        """Clear everything tied to the previous gesture."""
        self._vertical.reset()
        self._horizontal.reset()
        self._hold.reset()

    def _lose_hand(self) -> None:
        """Hand gone or no recognizable gesture: back to a clean session."""
        self._reset_gesture_state()
        self._cooldown.reset()
        self._active_gesture = Gesture.NONE

    def _dispatch(self, events: List[GestureEvent]) -> None:
        for event in events:
            for callback in self._callbacks:
                try:
                    callback(event)
                except Exception as e:
                    logger.warning("Event callback failed for %s: %s", event.type.value, e)
