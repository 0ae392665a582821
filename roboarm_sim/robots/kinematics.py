"""
Input mapping and analytical inverse kinematics for the planar arm.

``map_input_to_coordinates`` places a normalized pointer sample on the
simulation canvas and expresses it in the arm frame.  ``solve_ik`` turns
that target into joint angles with the law of cosines.  Only the
elbow-down branch is ever produced.

Both functions are total: every finite input yields a finite output.
Targets beyond full reach are projected onto the reach circle, and the
cosine term is clamped so targets inside the inner dead zone still solve.

Functions:
    map_input_to_coordinates: Normalized sample to arm-frame coordinates.
    solve_ik_exact: Unrounded IK solution in degrees.
    solve_ik: Integer joint angles for one control tick.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from roboarm_sim.robots.planar_arm import ArmConfig, JointAngles, WorkspaceCoordinates
from roboarm_sim.utils.constants import (
    BASE_X,
    BASE_Y,
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    GRIPPER_OPEN,
)
from roboarm_sim.utils.helpers import clamp, finite_or


def map_input_to_coordinates(
    sample_x: float, sample_y: float, config: ArmConfig
) -> WorkspaceCoordinates:
    """Map a normalized input sample to arm-frame workspace coordinates.

    The sample is clamped to [0, 1], scaled to the canvas, and shifted so
    the arm base is the origin.  Screen y grows downward while arm y grows
    upward, so the vertical axis is inverted.

    Args:
        sample_x: Horizontal sample in [0, 1] (0 = left edge).
        sample_y: Vertical sample in [0, 1] (0 = top edge).
        config: Current arm configuration.

    Returns:
        ``WorkspaceCoordinates`` with ``z = 0``.
    """
    clamped_x = clamp(finite_or(sample_x), 0.0, 1.0)
    clamped_y = clamp(finite_or(sample_y), 0.0, 1.0)
    screen_x = clamped_x * CANVAS_WIDTH
    screen_y = clamped_y * CANVAS_HEIGHT
    return WorkspaceCoordinates(x=screen_x - BASE_X, y=BASE_Y - screen_y, z=0.0)


@dataclass(frozen=True)
class IKSolution:
    """Unrounded IK result.

    Attributes:
        base: Base angle in degrees.
        shoulder: Shoulder angle in degrees.
        elbow: Relative elbow angle in degrees (always <= 0).
        reach_x: x of the point actually solved for (after reach clamping).
        reach_y: y of the point actually solved for (after reach clamping).
    """

    base: float
    shoulder: float
    elbow: float
    reach_x: float
    reach_y: float


def _clamp_to_reach(x: float, y: float, max_reach: float) -> tuple:
    """Project (x, y) onto the reach circle when it lies outside it."""
    dist = math.hypot(x, y)
    if dist > max_reach:
        ratio = max_reach / dist
        return x * ratio, y * ratio
    # Inside |l1 - l2| the cosine clamp in _elbow_angle keeps the solve defined.
    return x, y


def _elbow_angle(x: float, y: float, l1: float, l2: float) -> float:
    """Return the elbow-down relative elbow angle in radians."""
    cos_elbow = (x * x + y * y - l1 * l1 - l2 * l2) / (2.0 * l1 * l2)
    return -math.acos(clamp(cos_elbow, -1.0, 1.0))


def solve_ik_exact(target: WorkspaceCoordinates, config: ArmConfig) -> IKSolution:
    """Solve the two-link IK without rounding.

    Args:
        target: Desired gripper position in the arm frame.
        config: Arm configuration supplying the segment lengths.

    Returns:
        An ``IKSolution`` in degrees.
    """
    x = finite_or(target.x)
    y = finite_or(target.y)
    z = finite_or(target.z)
    l1 = config.segment1_length
    l2 = config.segment2_length

    base_rad = math.atan2(x, z)
    ax, ay = _clamp_to_reach(x, y, config.max_reach)
    elbow_rad = _elbow_angle(ax, ay, l1, l2)
    k1 = l1 + l2 * math.cos(elbow_rad)
    k2 = l2 * math.sin(elbow_rad)
    shoulder_rad = math.atan2(ay, ax) - math.atan2(k2, k1)

    return IKSolution(
        base=math.degrees(base_rad),
        shoulder=math.degrees(shoulder_rad),
        elbow=math.degrees(elbow_rad),
        reach_x=ax,
        reach_y=ay,
    )


def solve_ik(target: WorkspaceCoordinates, config: ArmConfig) -> JointAngles:
    """Solve IK and floor every angle to integer degrees.

    The gripper field is left open; the control loop sets it from the
    current gesture.

    Args:
        target: Desired gripper position in the arm frame.
        config: Arm configuration supplying the segment lengths.

    Returns:
        ``JointAngles`` with ``gripper = 0``.
    """
    solution = solve_ik_exact(target, config)
    return JointAngles(
        base=math.floor(solution.base),
        shoulder=math.floor(solution.shoulder),
        elbow=math.floor(solution.elbow),
        gripper=GRIPPER_OPEN,
    )
