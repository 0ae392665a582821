"""
Hand perception: gesture classification and camera tracking.

Provides the stateless landmark-based gesture classifier and the
MediaPipe/OpenCV tracker that feeds the arm session.  The tracker and
tracking loop are imported from their submodules so that the classifier
can be used without the camera stack installed.
"""

from roboarm_sim.perception.gestures import HandGesture, classify_gesture

__all__ = ["HandGesture", "classify_gesture"]
