"""
Camera capture plus MediaPipe hand-landmark detection.

``HandTracker`` owns the video capture device and the MediaPipe Hands
graph for the lifetime of tracking mode.  ``open`` reports readiness as a
boolean instead of raising, and releases anything it acquired when it
fails; ``close`` (or leaving the ``with`` block) releases everything.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import cv2
import mediapipe as mp

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LandmarkSnapshot:
    """Landmarks detected in one new video frame.

    Attributes:
        frame_index: Monotonic index of the frame this snapshot came from.
        landmarks: 21 normalized ``(x, y)`` points, or empty when no hand.
        frame_size: ``(width, height)`` of the source frame.
    """

    frame_index: int
    landmarks: Tuple[Tuple[float, float], ...] = field(default_factory=tuple)
    frame_size: Tuple[int, int] = (0, 0)

    @property
    def has_hand(self) -> bool:
        return len(self.landmarks) > 0


class HandTracker:
    """Reads camera frames and extracts one hand's landmarks per frame.

    Example:
        with HandTracker(camera_index=0) as tracker:
            if tracker.ready:
                snapshot = tracker.read_snapshot()
    """

    def __init__(
        self,
        camera_index: int = 0,
        frame_width: int = 640,
        frame_height: int = 480,
        min_detection_confidence: float = 0.5,
        min_tracking_confidence: float = 0.5,
    ):
        """Initialize the tracker without touching the camera.

        Args:
            camera_index: OpenCV capture device index.
            frame_width: Requested capture width.
            frame_height: Requested capture height.
            min_detection_confidence: MediaPipe detection threshold.
            min_tracking_confidence: MediaPipe tracking threshold.
        """
        self.camera_index = camera_index
        self.frame_width = frame_width
        self.frame_height = frame_height
        self.min_detection_confidence = min_detection_confidence
        self.min_tracking_confidence = min_tracking_confidence

        self.cap: Optional[cv2.VideoCapture] = None
        self.hands = None
        self._frame_index = 0

    @property
    def ready(self) -> bool:
        return self.cap is not None and self.hands is not None

    def open(self) -> bool:
        """Open the camera and load the hand model.

        Returns:
            *True* when tracking is ready, *False* if the camera or the
            model could not be initialised.
        """
        if self.ready:
            return True
        try:
            logger.info(f"Opening camera index: {self.camera_index}")
            self.cap = cv2.VideoCapture(self.camera_index)
            if not self.cap.isOpened():
                logger.error("Failed to open camera source")
                self.close()
                return False
            self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.frame_width)
            self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.frame_height)

            self.hands = mp.solutions.hands.Hands(
                static_image_mode=False,
                max_num_hands=1,
                model_complexity=1,
                min_detection_confidence=self.min_detection_confidence,
                min_tracking_confidence=self.min_tracking_confidence,
            )
        except Exception as e:
            logger.error(f"Failed to initialize hand tracking: {e}")
            self.close()
            return False

        logger.info("Hand tracking ready")
        return True

    def close(self) -> None:
        """Release the camera and the MediaPipe graph."""
        if self.cap is not None:
            self.cap.release()
            self.cap = None
        if self.hands is not None:
            self.hands.close()
            self.hands = None

    def read_snapshot(self) -> Optional[LandmarkSnapshot]:
        """Grab the next frame and detect landmarks in it.

        Returns:
            A ``LandmarkSnapshot`` for a new frame, or None when no new
            frame is available (not ready, or the grab failed).
        """
        if not self.ready:
            return None
        ok, frame = self.cap.read()
        if not ok or frame is None or frame.size == 0:
            return None
        self._frame_index += 1

        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        results = self.hands.process(rgb)
        h, w = frame.shape[:2]
        return LandmarkSnapshot(
            frame_index=self._frame_index,
            landmarks=self._extract_landmarks(results),
            frame_size=(w, h),
        )

    @staticmethod
    def _extract_landmarks(results) -> Tuple[Tuple[float, float], ...]:
        """Return the first detected hand's landmarks as ``(x, y)`` pairs."""
        hands: Optional[List] = getattr(results, "multi_hand_landmarks", None)
        if not hands:
            return ()
        return tuple((float(lm.x), float(lm.y)) for lm in hands[0].landmark)

    def __enter__(self) -> "HandTracker":
        self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
