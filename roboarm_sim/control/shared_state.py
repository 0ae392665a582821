"""
Last-value-wins state shared between the tracking and control loops.

The tracking loop (and the manual fallback) write the latest pointer
sample and gesture; the fixed-rate control loop reads them and publishes
a render snapshot.  Every value lives in a ``LatestValue`` cell: a single
lock-guarded slot where writers overwrite and readers never wait for a
new write, so staleness is tolerated by construction.

Classes:
    LatestValue: Thread-safe single-slot cell.
    NormalizedInputSample: Pointer position in [0, 1] x [0, 1].
    RenderSnapshot: Everything a renderer needs for one frame.
    SessionState: The cells shared by one arm session.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Generic, Optional, Tuple, TypeVar

from roboarm_sim.envs.ball_physics import Ball
from roboarm_sim.perception.gestures import HandGesture
from roboarm_sim.robots.planar_arm import ArmConfig, JointAngles, WorkspaceCoordinates
from roboarm_sim.utils.constants import DEFAULT_INPUT_SAMPLE
from roboarm_sim.utils.helpers import clamp, finite_or

T = TypeVar("T")


class LatestValue(Generic[T]):
    """A single-slot cell with last-write-wins semantics.

    Attributes:
        version: Number of writes so far; readers can use it to detect
            whether anything new arrived since their last look.
    """

    def __init__(self, initial: T) -> None:
        self._lock = threading.Lock()
        self._value = initial
        self._version = 0

    def get(self) -> T:
        """Return the most recently written value."""
        with self._lock:
            return self._value

    def set(self, value: T) -> None:
        """Overwrite the stored value."""
        with self._lock:
            self._value = value
            self._version += 1

    def set_if_changed(self, value: T) -> bool:
        """Write *value* only if it differs from the stored one.

        Returns:
            *True* if the value was written.
        """
        with self._lock:
            if self._value == value:
                return False
            self._value = value
            self._version += 1
            return True

    @property
    def version(self) -> int:
        with self._lock:
            return self._version


@dataclass(frozen=True)
class NormalizedInputSample:
    """Latest pointer position, both axes in [0, 1]."""

    x: float
    y: float

    @classmethod
    def clamped(cls, x: float, y: float) -> "NormalizedInputSample":
        """Build a sample with both coordinates clamped into [0, 1]."""
        return cls(clamp(finite_or(x), 0.0, 1.0), clamp(finite_or(y), 0.0, 1.0))


@dataclass(frozen=True)
class RenderSnapshot:
    """Immutable view of one control tick for the renderer.

    Attributes:
        angles: Joint command produced this tick.
        config: Arm geometry used this tick.
        target: Arm-frame target the IK solved for.
        balls: Detached copies of every ball.
        gesture: Gesture in effect this tick.
        vision_ready: Whether camera tracking is live.
        tick: Control tick counter.
    """

    angles: JointAngles
    config: ArmConfig
    target: WorkspaceCoordinates
    balls: Tuple[Ball, ...]
    gesture: HandGesture
    vision_ready: bool
    tick: int


@dataclass
class SessionState:
    """Cells shared by the tracking loop, control loop, and renderer."""

    sample: LatestValue[NormalizedInputSample] = field(
        default_factory=lambda: LatestValue(NormalizedInputSample(*DEFAULT_INPUT_SAMPLE))
    )
    gesture: LatestValue[HandGesture] = field(
        default_factory=lambda: LatestValue(HandGesture.OPEN_PALM)
    )
    config: LatestValue[ArmConfig] = field(default_factory=lambda: LatestValue(ArmConfig()))
    vision_ready: LatestValue[bool] = field(default_factory=lambda: LatestValue(False))
    hand_landmarks: LatestValue[Tuple[Tuple[float, float], ...]] = field(
        default_factory=lambda: LatestValue(())
    )
    snapshot: LatestValue[Optional[RenderSnapshot]] = field(
        default_factory=lambda: LatestValue(None)
    )

    def publish_sample(self, x: float, y: float) -> None:
        """Store a new pointer sample, clamped into [0, 1]."""
        self.sample.set(NormalizedInputSample.clamped(x, y))

    def update_config(self, **changes: float) -> ArmConfig:
        """Apply operator changes to the arm configuration.

        Args:
            **changes: ``ArmConfig`` field names mapped to new values.

        Returns:
            The new configuration.

        Raises:
            ConfigError: If the change would make the configuration invalid;
                the stored configuration is left untouched.
        """
        new_config = self.config.get().with_changes(**changes)
        self.config.set(new_config)
        return new_config
