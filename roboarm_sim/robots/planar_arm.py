"""
Simulated 2-DOF planar robot arm: data model and forward kinematics.

Defines the arm configuration, the arm-frame target coordinates, and the
joint-angle command produced every control tick.  ``PlanarArm`` computes
joint positions from joint angles so the renderer and the tests can
reconstruct where the arm actually is.

Classes:
    ArmConfig: Segment lengths and base rotation set by the operator.
    WorkspaceCoordinates: Target position in the arm's planar frame.
    JointAngles: Integer joint command (degrees plus gripper closure).
    PlanarArm: Forward kinematics for a two-link planar chain.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Tuple

import numpy as np

from roboarm_sim.utils.constants import (
    BASE_X,
    BASE_Y,
    DEFAULT_BASE_ROTATION,
    DEFAULT_SEGMENT1_LENGTH,
    DEFAULT_SEGMENT2_LENGTH,
    GRIPPER_CLOSED,
    GRIPPER_OPEN,
    INITIAL_JOINT_ANGLES,
)
from roboarm_sim.utils.exceptions import ConfigError
from roboarm_sim.utils.helpers import clamp


@dataclass(frozen=True)
class ArmConfig:
    """Physical configuration of the two-link arm.

    Attributes:
        segment1_length: Shoulder-to-elbow length (mm), must be positive.
        segment2_length: Elbow-to-gripper length (mm), must be positive.
        base_rotation: Base yaw offset in degrees.
    """

    segment1_length: float = DEFAULT_SEGMENT1_LENGTH
    segment2_length: float = DEFAULT_SEGMENT2_LENGTH
    base_rotation: float = DEFAULT_BASE_ROTATION

    def __post_init__(self) -> None:
        """Reject non-positive or non-finite segment lengths.

        Raises:
            ConfigError: When either segment length is invalid.
        """
        for name in ("segment1_length", "segment2_length"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise ConfigError(f"{name} must be a positive length, got {value!r}")
        if not math.isfinite(self.base_rotation):
            raise ConfigError(f"base_rotation must be finite, got {self.base_rotation!r}")

    @property
    def max_reach(self) -> float:
        """Return the fully extended reach ``l1 + l2``."""
        return self.segment1_length + self.segment2_length

    @property
    def min_reach(self) -> float:
        """Return the inner dead-zone radius ``|l1 - l2|``."""
        return abs(self.segment1_length - self.segment2_length)

    def with_changes(self, **changes: float) -> "ArmConfig":
        """Return a validated copy with the given fields replaced.

        Args:
            **changes: Field names mapped to new values.

        Returns:
            A new ``ArmConfig``.

        Raises:
            ConfigError: If the resulting configuration is invalid.
        """
        return replace(self, **changes)


@dataclass(frozen=True)
class WorkspaceCoordinates:
    """Position in the arm frame: origin at the base, x reach, y up."""

    x: float
    y: float
    z: float = 0.0


@dataclass(frozen=True)
class JointAngles:
    """One control tick's joint command.

    Attributes:
        base: Base rotation in degrees.
        shoulder: Shoulder angle in degrees from the +x axis, CCW positive.
        elbow: Elbow angle in degrees relative to the upper arm.
        gripper: Closure from 0 (open) to 100 (closed).
    """

    base: int
    shoulder: int
    elbow: int
    gripper: int = GRIPPER_OPEN

    @classmethod
    def initial(cls) -> "JointAngles":
        """Return the resting pose shown before the first control tick."""
        return cls(*INITIAL_JOINT_ANGLES)

    def with_gripper(self, gripper: int) -> "JointAngles":
        """Return a copy with the gripper closure clamped to [0, 100]."""
        value = int(clamp(gripper, GRIPPER_OPEN, GRIPPER_CLOSED))
        return replace(self, gripper=value)

    def to_command(self) -> str:
        """Format the angles as a newline-terminated hardware command line."""
        return f"{self.base},{self.shoulder},{self.elbow},{self.gripper}\n"


@dataclass
class PlanarArm:
    """Forward kinematics for the two-link planar arm.

    Attributes:
        config: Current arm configuration.
        base_position: Canvas position of the shoulder joint.
    """

    config: ArmConfig
    base_position: Tuple[float, float] = (BASE_X, BASE_Y)

    # ------------------------------------------------------------------
    # Forward kinematics helpers
    # ------------------------------------------------------------------

    def _cumulative_angles(self, shoulder_deg: float, elbow_deg: float) -> np.ndarray:
        """Return absolute link angles in radians for the serial chain."""
        return np.cumsum(np.radians([shoulder_deg, elbow_deg]))

    def _link_lengths(self) -> np.ndarray:
        return np.array([self.config.segment1_length, self.config.segment2_length])

    def joint_positions(self, shoulder_deg: float, elbow_deg: float) -> np.ndarray:
        """Compute arm-frame positions of the shoulder, elbow, and gripper tip.

        Args:
            shoulder_deg: Shoulder angle in degrees.
            elbow_deg: Elbow angle in degrees, relative to the upper arm.

        Returns:
            Array of shape ``(3, 2)`` with rows [shoulder, elbow, tip].
        """
        cum_angles = self._cumulative_angles(shoulder_deg, elbow_deg)
        offsets = np.stack([np.cos(cum_angles), np.sin(cum_angles)], axis=1)
        links = offsets * self._link_lengths()[:, np.newaxis]
        return np.vstack([np.zeros(2), np.cumsum(links, axis=0)])

    def end_effector(self, angles: JointAngles) -> WorkspaceCoordinates:
        """Return the arm-frame gripper position for *angles*."""
        tip = self.joint_positions(angles.shoulder, angles.elbow)[-1]
        return WorkspaceCoordinates(x=float(tip[0]), y=float(tip[1]), z=0.0)

    def to_canvas(self, point: np.ndarray) -> Tuple[float, float]:
        """Convert an arm-frame point to canvas coordinates (y down)."""
        bx, by = self.base_position
        return bx + float(point[0]), by - float(point[1])

    def canvas_joint_positions(self, angles: JointAngles) -> Tuple[Tuple[float, float], ...]:
        """Return canvas positions of [shoulder, elbow, tip] for rendering."""
        points = self.joint_positions(angles.shoulder, angles.elbow)
        return tuple(self.to_canvas(p) for p in points)
