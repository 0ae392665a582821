"""
Discrete hand-gesture classification from MediaPipe hand landmarks.

The classifier is a pure function of one 21-point landmark snapshot in
normalized image coordinates.  It has no history, so consecutive frames
may alternate between classes; callers wanting debounce must add it.

Classes:
    HandGesture: The four gesture states driving the arm.

Functions:
    pinch_distance: Thumb-tip to index-tip distance.
    count_folded_fingers: Fingertips curled toward the wrist.
    classify_gesture: Landmark snapshot to ``HandGesture``.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Sequence

from roboarm_sim.utils.constants import (
    FINGERTIPS,
    FIST_MIN_FOLDED,
    FOLDED_TIP_THRESHOLD,
    INDEX_TIP,
    PINCH_THRESHOLD,
    THUMB_TIP,
    WRIST,
)
from roboarm_sim.utils.helpers import distance, point_xy


class HandGesture(Enum):
    """Gesture states; NONE means no hand is currently detected."""

    NONE = "NONE"
    OPEN_PALM = "OPEN_PALM"
    PINCH = "PINCH"
    CLOSED_FIST = "CLOSED_FIST"


def pinch_distance(landmarks: Sequence) -> float:
    """Return the distance between the thumb tip and the index tip."""
    return distance(point_xy(landmarks[THUMB_TIP]), point_xy(landmarks[INDEX_TIP]))


def count_folded_fingers(
    landmarks: Sequence, threshold: float = FOLDED_TIP_THRESHOLD
) -> int:
    """Count the non-thumb fingertips lying within *threshold* of the wrist."""
    wrist = point_xy(landmarks[WRIST])
    return sum(
        1 for idx in FINGERTIPS if distance(point_xy(landmarks[idx]), wrist) < threshold
    )


def classify_gesture(landmarks: Optional[Sequence]) -> HandGesture:
    """Classify a landmark snapshot into a ``HandGesture``.

    Priority order: a closed fist (three or more folded fingers) wins over
    everything, including a simultaneous pinch; then a pinch; otherwise
    the hand is an open palm.

    Args:
        landmarks: 21 landmarks as objects with ``x``/``y`` attributes,
            ``(x, y)`` pairs, or an array with at least two columns.
            ``None`` or an empty sequence means no hand.

    Returns:
        The classified gesture.
    """
    if landmarks is None or len(landmarks) == 0:
        return HandGesture.NONE
    if count_folded_fingers(landmarks) >= FIST_MIN_FOLDED:
        return HandGesture.CLOSED_FIST
    if pinch_distance(landmarks) < PINCH_THRESHOLD:
        return HandGesture.PINCH
    return HandGesture.OPEN_PALM
