"""
Background worker for hand tracking and gesture processing.
Runs in a separate QThread; the FrameProcessor never leaves that thread.
"""
from typing import Optional
import logging
import time
from PyQt5.QtCore import QObject, pyqtSignal

from ..gestures.classifier import Gesture
from ..gestures.config import Config
from ..gestures.events import EventType
from ..gestures.landmarks import HandLandmarks
from ..gestures.processor import FrameProcessor, FrameResult
from .hand_tracker import HandTracker

logger = logging.getLogger(__name__)


class WebcamWorker(QObject):
    """
    Worker class that handles the capture/process loop.
    Emits signals for the action layer and any UI.
    """
    # Signals
    action_triggered = pyqtSignal(object)   # Emits GestureEvent (discrete events only)
    cursor_moved = pyqtSignal(float, float) # Screen pixels
    gesture_changed = pyqtSignal(object)    # Emits Gesture
    hand_lost = pyqtSignal()
    frame_ready = pyqtSignal(object)        # BGR frame with landmarks (preview only)
    error = pyqtSignal(str)

    def __init__(self, config: Config, tracker: Optional[HandTracker] = None,
                 show_preview: bool = False, parent=None):
        super().__init__(parent)
        self._config = config
        self._tracker = tracker
        self._processor: Optional[FrameProcessor] = None
        self._show_preview = show_preview
        self._is_running = False
        self._last_gesture = Gesture.NONE
        self._had_hand = False

    def process_frame(self, landmarks: Optional[HandLandmarks],
                      timestamp_ms: Optional[float] = None) -> FrameResult:
        """Run one frame through the processor and emit the resulting signals."""
        if self._processor is None:
            self._processor = FrameProcessor(self._config)

        result = self._processor.process(landmarks, timestamp_ms)

        if result.gesture != self._last_gesture:
            self._last_gesture = result.gesture
            self.gesture_changed.emit(result.gesture)

        if self._had_hand and not result.hand_detected:
            self.hand_lost.emit()
        self._had_hand = result.hand_detected

        for event in result.events:
            if event.type == EventType.CURSOR_MOVED:
                self.cursor_moved.emit(event.x, event.y)
            else:
                self.action_triggered.emit(event)

        return result

    def start_process(self):
        """Main processing loop. Runs in worker thread."""
        if self._tracker is None:
            self._tracker = HandTracker(self._config)
        self._processor = FrameProcessor(self._config)

        if not self._tracker.start():
            self.error.emit("Could not start hand tracker (camera or model missing)")
            return

        self._is_running = True
        frame_interval = 1.0 / 5  # Low FPS for the landmark preview
        last_frame_time = 0.0

        try:
            while self._is_running:
                landmarks = self._tracker.get_landmarks()
                self.process_frame(landmarks)

                if self._show_preview:
                    now = time.perf_counter()
                    if now - last_frame_time >= frame_interval:
                        frame = self._tracker.get_frame_with_landmarks(landmarks)
                        if frame is not None:
                            self.frame_ready.emit(frame)
                        last_frame_time = now
        except Exception as e:
            logger.exception("Worker loop failed")
            self.error.emit(f"Worker Exception: {e}")
        finally:
            self._is_running = False
            self._processor.stop()
            self._tracker.stop()

    def stop_process(self):
        """Signal the loop to stop; resources are released in the worker thread."""
        self._is_running = False

    @property
    def is_running(self) -> bool:
        return self._is_running
