"""
MediaPipe Hand Tracker wrapper using the Tasks API.
Supplies one HandLandmarks frame per camera read.
"""
from pathlib import Path
from typing import Optional
import logging
import time
import cv2
import numpy as np
import mediapipe as mp

from ..gestures.config import Config, CameraConfig, MediaPipeConfig
from ..gestures.landmarks import HandLandmarks, HAND_CONNECTIONS

logger = logging.getLogger(__name__)

# MediaPipe Tasks API imports
BaseOptions = mp.tasks.BaseOptions
HandLandmarker = mp.tasks.vision.HandLandmarker
HandLandmarkerOptions = mp.tasks.vision.HandLandmarkerOptions
VisionRunningMode = mp.tasks.vision.RunningMode

MODEL_URL = "https://storage.googleapis.com/mediapipe-models/hand_landmarker/hand_landmarker/float16/1/hand_landmarker.task"


class HandTracker:
    """
    Camera capture plus MediaPipe hand landmark detection.

    Detection runs on the raw camera frame, so landmark x follows the
    camera, not the user. The gesture engine applies the selfie mirror
    once; only the preview image is flipped here.
    """

    # Default model path relative to project root
    DEFAULT_MODEL_PATH = Path(__file__).parent.parent.parent / "models" / "hand_landmarker.task"

    def __init__(self, config: Config, model_path: Optional[Path] = None):
        """
        Initialize hand tracker.

        Args:
            config: HandNav configuration
            model_path: Path to hand_landmarker.task model file
        """
        self._camera_config: CameraConfig = config.camera
        self._mp_config: MediaPipeConfig = config.mediapipe
        self._model_path = Path(model_path) if model_path else self.DEFAULT_MODEL_PATH

        # Lazy initialization
        self._cap: Optional[cv2.VideoCapture] = None
        self._landmarker: Optional[HandLandmarker] = None

        self._is_running = False
        self._last_frame: Optional[np.ndarray] = None
        self._frame_count = 0
        self._start_perf: float = 0
        self._last_timestamp_ms: int = -1

    def start(self) -> bool:
        """
        Start camera capture and MediaPipe.

        Returns:
            True if started successfully, False otherwise.
        """
        if self._is_running:
            return True

        if not self._model_path.exists():
            logger.error("Model file not found: %s (download from %s)", self._model_path, MODEL_URL)
            return False

        self._cap = cv2.VideoCapture(self._camera_config.device_id)
        if not self._cap.isOpened():
            logger.error("Could not open camera %d", self._camera_config.device_id)
            self._cap = None
            return False

        self._cap.set(cv2.CAP_PROP_FRAME_WIDTH, self._camera_config.width)
        self._cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self._camera_config.height)
        self._cap.set(cv2.CAP_PROP_FPS, self._camera_config.fps)

        options = HandLandmarkerOptions(
            base_options=BaseOptions(model_asset_path=str(self._model_path)),
            running_mode=VisionRunningMode.VIDEO,
            num_hands=self._mp_config.max_num_hands,
            min_hand_detection_confidence=self._mp_config.min_detection_confidence,
            min_tracking_confidence=self._mp_config.min_tracking_confidence,
        )

        self._landmarker = HandLandmarker.create_from_options(options)
        self._start_perf = time.perf_counter()
        self._last_timestamp_ms = -1
        self._is_running = True
        logger.info("Hand tracker started on camera %d", self._camera_config.device_id)
        return True

    def stop(self) -> None:
        """Stop camera capture and release resources."""
        self._is_running = False

        if self._landmarker:
            self._landmarker.close()
            self._landmarker = None

        if self._cap:
            self._cap.release()
            self._cap = None

        self._last_frame = None

    def get_landmarks(self) -> Optional[HandLandmarks]:
        """
        Capture a frame and detect the first hand.

        Returns:
            HandLandmarks, or None when no frame or no hand is available.
        """
        if not self._is_running or self._cap is None or self._landmarker is None:
            return None

        ret, frame = self._cap.read()
        if not ret:
            return None

        self._frame_count += 1

        self._last_frame = frame

        rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        rgb_frame.flags.writeable = False
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb_frame)

        # VIDEO mode needs strictly increasing timestamps
        timestamp_ms = int((time.perf_counter() - self._start_perf) * 1000)
        if timestamp_ms <= self._last_timestamp_ms:
            timestamp_ms = self._last_timestamp_ms + 1
        self._last_timestamp_ms = timestamp_ms

        result = self._landmarker.detect_for_video(mp_image, timestamp_ms)

        if not result.hand_landmarks:
            return None

        handedness = result.handedness[0][0]
        return HandLandmarks.from_points(
            [(lm.x, lm.y, lm.z) for lm in result.hand_landmarks[0]],
            handedness=handedness.category_name,
            confidence=handedness.score,
        )

    def get_frame_with_landmarks(
        self,
        landmarks: Optional[HandLandmarks] = None,
    ) -> Optional[np.ndarray]:
        """
        Get last frame with optional skeleton overlay for debugging.

        Returns:
            Frame with landmarks drawn, or None if no frame available.
        """
        if self._last_frame is None:
            return None

        frame = self._last_frame.copy()

        if landmarks is not None:
            h, w = frame.shape[:2]
            points = [(int(p[0] * w), int(p[1] * h)) for p in landmarks.landmarks]
            for start_idx, end_idx in HAND_CONNECTIONS:
                cv2.line(frame, points[start_idx], points[end_idx], (0, 255, 0), 2)
            for point in points:
                cv2.circle(frame, point, 4, (0, 0, 255), -1)

        # Selfie view for display only
        return cv2.flip(frame, 1)

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def frame_count(self) -> int:
        return self._frame_count
