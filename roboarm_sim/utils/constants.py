"""
Shared constants and type aliases for the roboarm_sim package.

Centralizes the simulation canvas geometry, physics tuning, gesture
thresholds, MediaPipe landmark indices, and the colour palette so that the
kinematics, environment, tracker, and renderer all agree on one frame of
reference.
"""

from __future__ import annotations

from typing import Tuple

# ---------------------------------------------------------------------------
# Simulation canvas (screen units, y grows downward)
# ---------------------------------------------------------------------------
CANVAS_WIDTH: int = 600
CANVAS_HEIGHT: int = 400
BASE_X: float = 300.0
BASE_Y: float = 350.0
FLOOR_Y: float = BASE_Y

# ---------------------------------------------------------------------------
# Arm defaults (mm / degrees)
# ---------------------------------------------------------------------------
DEFAULT_SEGMENT1_LENGTH: float = 150.0
DEFAULT_SEGMENT2_LENGTH: float = 120.0
DEFAULT_BASE_ROTATION: float = 0.0
INITIAL_JOINT_ANGLES: Tuple[int, int, int, int] = (0, 90, -90, 0)
DEFAULT_INPUT_SAMPLE: Tuple[float, float] = (0.5, 0.5)

GRIPPER_OPEN: int = 0
GRIPPER_CLOSED: int = 100

# ---------------------------------------------------------------------------
# Control loop timing
# ---------------------------------------------------------------------------
CONTROL_PERIOD_S: float = 0.033
DEFAULT_FPS: int = 30

# ---------------------------------------------------------------------------
# Ball physics (per tick)
# ---------------------------------------------------------------------------
GRAVITY: float = 0.5
AIR_DRAG: float = 0.95
RESTITUTION: float = 0.6
FLOOR_FRICTION: float = 0.8
GRIP_CAPTURE_RADIUS: float = 30.0
GRIP_HANG_OFFSET: float = 15.0
BALL_RADIUS: float = 15.0

# ---------------------------------------------------------------------------
# Gesture classification (normalized image units)
# ---------------------------------------------------------------------------
PINCH_THRESHOLD: float = 0.05
FOLDED_TIP_THRESHOLD: float = 0.25
FIST_MIN_FOLDED: int = 3

# MediaPipe hand landmark indices used by the classifier and tracker
WRIST: int = 0
THUMB_TIP: int = 4
INDEX_MCP: int = 5
INDEX_TIP: int = 8
MIDDLE_TIP: int = 12
RING_TIP: int = 16
PINKY_TIP: int = 20
FINGERTIPS: Tuple[int, ...] = (INDEX_TIP, MIDDLE_TIP, RING_TIP, PINKY_TIP)
POINTER_LANDMARK: int = INDEX_MCP
NUM_HAND_LANDMARKS: int = 21

# ---------------------------------------------------------------------------
# Hardware link
# ---------------------------------------------------------------------------
SERIAL_BAUD_RATE: int = 115200

# ---------------------------------------------------------------------------
# Color palette (RGB 0-255) used by the renderer
# ---------------------------------------------------------------------------
COLOR_BACKGROUND: Tuple[int, int, int] = (15, 23, 42)
COLOR_GRID: Tuple[int, int, int] = (38, 48, 66)
COLOR_FLOOR: Tuple[int, int, int] = (148, 163, 184)
COLOR_UPPER_ARM: Tuple[int, int, int] = (14, 165, 233)
COLOR_FOREARM: Tuple[int, int, int] = (2, 132, 199)
COLOR_JOINT: Tuple[int, int, int] = (226, 232, 240)
COLOR_GRIPPER: Tuple[int, int, int] = (56, 189, 248)
COLOR_TARGET: Tuple[int, int, int] = (219, 68, 55)
COLOR_TEXT: Tuple[int, int, int] = (203, 213, 225)
COLOR_SUCCESS: Tuple[int, int, int] = (16, 185, 129)
COLOR_WARNING: Tuple[int, int, int] = (245, 158, 11)

BALL_RED: Tuple[int, int, int] = (239, 68, 68)
BALL_BLUE: Tuple[int, int, int] = (59, 130, 246)
BALL_GREEN: Tuple[int, int, int] = (16, 185, 129)
BALL_AMBER: Tuple[int, int, int] = (245, 158, 11)

# MediaPipe hand skeleton edges, used to draw the tracked hand overlay
HAND_CONNECTIONS: Tuple[Tuple[int, int], ...] = (
    (0, 1), (1, 2), (2, 3), (3, 4),
    (0, 5), (5, 6), (6, 7), (7, 8),
    (0, 9), (9, 10), (10, 11), (11, 12),
    (0, 13), (13, 14), (14, 15), (15, 16),
    (0, 17), (17, 18), (18, 19), (19, 20),
)
