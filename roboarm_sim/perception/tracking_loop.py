"""
Per-frame hand tracking loop.

Runs on its own thread at whatever rate the camera delivers frames.  For
every new frame it classifies the gesture and publishes it to the shared
session state only when it changes.  While the hand is not a closed fist
it also publishes the pointer sample (the index-finger knuckle, mirrored
so moving the hand right moves the arm right).  A closed fist freezes the
pointer at its last value, which halts arm motion.
"""

import logging
import threading
from typing import Optional

from roboarm_sim.control.shared_state import SessionState
from roboarm_sim.perception.gestures import HandGesture, classify_gesture
from roboarm_sim.perception.hand_tracker import HandTracker, LandmarkSnapshot
from roboarm_sim.utils.constants import POINTER_LANDMARK

logger = logging.getLogger(__name__)


class TrackingLoop:
    """Feeds ``HandTracker`` frames into the shared session state.

    The loop owns the tracker once started: the camera is released when
    the loop exits, whether it was stopped or failed.
    """

    def __init__(self, tracker: HandTracker, state: SessionState, idle_sleep: float = 0.005):
        """Bind the loop to a tracker and the shared cells it publishes to.

        Args:
            tracker: Unopened or opened hand tracker.
            state: Shared cells to publish into.
            idle_sleep: Pause when no new frame is available.
        """
        self.tracker = tracker
        self.state = state
        self.idle_sleep = idle_sleep
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._last_frame_index = 0
        self.frames_processed = 0

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> bool:
        """Open the tracker and start the loop thread.

        Returns:
            The vision readiness flag: *False* if the camera or model could
            not be initialised, in which case no thread is started.
        """
        ready = self.tracker.open()
        self.state.vision_ready.set(ready)
        if not ready:
            logger.warning("Vision unavailable; falling back to manual input")
            return False
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="tracking-loop", daemon=True)
        self._thread.start()
        logger.info("Tracking loop started")
        return True

    def stop(self, timeout: float = 2.0) -> None:
        """Signal the loop to exit and wait for it to release the camera."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            if self._thread.is_alive():
                # The worker closes the tracker itself once its current read returns.
                logger.warning("Tracking loop did not exit in time; camera release deferred")
                self._thread = None
                self.state.vision_ready.set(False)
                return
            self._thread = None
        # Covers a tracker that was opened but never handed to a thread.
        self.tracker.close()
        self.state.vision_ready.set(False)

    def _run(self) -> None:
        try:
            while not self._stop_event.is_set():
                try:
                    processed = self.process_snapshot(self.tracker.read_snapshot())
                except Exception as e:
                    logger.error(f"Error in tracking loop: {e}")
                    processed = False
                if not processed:
                    self._stop_event.wait(self.idle_sleep)
        finally:
            self.tracker.close()
            self.state.vision_ready.set(False)
            logger.info("Tracking loop stopped")

    def process_snapshot(self, snapshot: Optional[LandmarkSnapshot]) -> bool:
        """Publish the gesture and pointer derived from one frame.

        Args:
            snapshot: Landmarks for a frame, or None when no frame arrived.

        Returns:
            *True* if the snapshot was new and processed; *False* if it was
            missing or a frame that was already processed.
        """
        if snapshot is None or snapshot.frame_index <= self._last_frame_index:
            return False
        self._last_frame_index = snapshot.frame_index
        self.frames_processed += 1

        gesture = classify_gesture(snapshot.landmarks)
        if self.state.gesture.set_if_changed(gesture):
            logger.debug(f"Gesture changed to {gesture}")

        self.state.hand_landmarks.set(snapshot.landmarks)
        if gesture is not HandGesture.CLOSED_FIST and snapshot.has_hand:
            pointer_x, pointer_y = snapshot.landmarks[POINTER_LANDMARK]
            self.state.publish_sample(1.0 - pointer_x, pointer_y)
        return True
