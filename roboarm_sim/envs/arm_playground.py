"""
2-D arm playground simulation environment (Gymnasium-compatible).

A 2-DOF planar arm follows a normalized pointer sample and can pick up
and drop balls with its gripper.  One ``step`` is one control tick: the
sample is mapped into the arm frame, solved with analytical IK, the
gripper closes when the grip flag is set, and every ball advances by one
physics tick.

Classes:
    ArmPlaygroundEnv: Gymnasium environment for the pick-and-drop playground.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, List, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from roboarm_sim.envs.ball_physics import Ball, initial_balls, step_ball
from roboarm_sim.envs.configs import PlaygroundSimConfig
from roboarm_sim.robots.kinematics import map_input_to_coordinates, solve_ik
from roboarm_sim.robots.planar_arm import (
    ArmConfig,
    JointAngles,
    PlanarArm,
    WorkspaceCoordinates,
)
from roboarm_sim.utils.constants import (
    BASE_X,
    BASE_Y,
    CANVAS_HEIGHT,
    COLOR_BACKGROUND,
    COLOR_FLOOR,
    COLOR_FOREARM,
    COLOR_GRIPPER,
    COLOR_TARGET,
    COLOR_UPPER_ARM,
    DEFAULT_INPUT_SAMPLE,
    GRIPPER_CLOSED,
    GRIPPER_OPEN,
)

STATE_DIM = 8
BALL_FEATURES = 5


class ArmPlaygroundEnv(gym.Env):
    """Gymnasium environment for the hand-driven arm playground.

    The action is ``(sample_x, sample_y, grip)`` with all entries in
    [0, 1]; ``grip > 0.5`` closes the gripper.  The observation holds the
    joint command, the arm-frame target, the gripper canvas position, and
    one row per ball.

    Attributes:
        metadata: Gymnasium metadata with supported render modes.
        cfg: ``PlaygroundSimConfig`` controlling timing, physics, etc.
    """

    metadata: Dict[str, Any] = {"render_modes": ["rgb_array", "human"]}

    def __init__(
        self,
        cfg: PlaygroundSimConfig | None = None,
        arm_config: ArmConfig | None = None,
    ) -> None:
        """Initialise the playground.

        Args:
            cfg: Optional configuration; a default ``PlaygroundSimConfig`` is
                used when *None*.
            arm_config: Optional arm geometry; defaults to ``ArmConfig()``.
        """
        super().__init__()
        self.cfg = cfg or PlaygroundSimConfig()
        self._arm = PlanarArm(config=arm_config or ArmConfig())
        self._step_count = 0
        self._init_spaces()
        self._init_entities()

    # ------------------------------------------------------------------
    # Initialisation helpers
    # ------------------------------------------------------------------

    def _init_spaces(self) -> None:
        """Define action and observation Gymnasium spaces."""
        self.action_space = spaces.Box(low=0.0, high=1.0, shape=(3,), dtype=np.float32)
        obs_dict: Dict[str, spaces.Space] = {}
        obs_dict["agent_pos"] = spaces.Box(
            low=-np.inf, high=np.inf, shape=(STATE_DIM,), dtype=np.float32
        )
        obs_dict["balls"] = spaces.Box(
            low=-np.inf,
            high=np.inf,
            shape=(len(initial_balls()), BALL_FEATURES),
            dtype=np.float32,
        )
        if "pixels" in self.cfg.obs_type:
            h, w = self.cfg.observation_height, self.cfg.observation_width
            obs_dict["pixels"] = spaces.Box(low=0, high=255, shape=(h, w, 3), dtype=np.uint8)
        self.observation_space = spaces.Dict(obs_dict)

    def _init_entities(self) -> None:
        """Place the arm at rest and create the initial ball set."""
        self._balls: List[Ball] = initial_balls()
        self._angles = JointAngles.initial()
        self._target = map_input_to_coordinates(*DEFAULT_INPUT_SAMPLE, self.arm_config)
        self._is_gripping = False

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def arm(self) -> PlanarArm:
        return self._arm

    @property
    def arm_config(self) -> ArmConfig:
        return self._arm.config

    @property
    def angles(self) -> JointAngles:
        return self._angles

    @property
    def target(self) -> WorkspaceCoordinates:
        return self._target

    @property
    def balls(self) -> List[Ball]:
        return self._balls

    @property
    def gripper_position(self) -> Tuple[float, float]:
        """Canvas position of the gripper, derived from the current target."""
        return BASE_X + self._target.x, BASE_Y - self._target.y

    def ball_snapshot(self) -> Tuple[Ball, ...]:
        """Return detached copies of the balls for consumers on other threads."""
        return tuple(replace(ball) for ball in self._balls)

    def set_arm_config(self, config: ArmConfig) -> None:
        """Swap the arm geometry used from the next step on."""
        self._arm.config = config

    # ------------------------------------------------------------------
    # Gymnasium API
    # ------------------------------------------------------------------

    def reset(
        self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """Reset the arm and balls and return the initial observation.

        Args:
            seed: Optional RNG seed.
            options: Unused; for Gymnasium compatibility.

        Returns:
            Tuple of (observation dict, info dict).
        """
        super().reset(seed=seed)
        self._step_count = 0
        self._init_entities()
        return self._build_observation(), self._build_info()

    def _apply_input(self, sample_x: float, sample_y: float, grip: float) -> None:
        """Map the sample to a target, solve IK, and set the gripper."""
        self._target = map_input_to_coordinates(sample_x, sample_y, self.arm_config)
        angles = solve_ik(self._target, self.arm_config)
        self._is_gripping = bool(grip > 0.5)
        self._angles = angles.with_gripper(GRIPPER_CLOSED if self._is_gripping else GRIPPER_OPEN)

    def _advance_balls(self) -> None:
        """Advance every ball one physics tick against the gripper."""
        gripper_pos = self.gripper_position
        for ball in self._balls:
            step_ball(ball, gripper_pos, self._is_gripping, self.cfg.physics)

    def step(
        self, action: np.ndarray
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """Advance the playground by one control tick.

        Args:
            action: 3-D array ``(sample_x, sample_y, grip)``.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
            The playground has no task, so reward is always ``0.0`` and
            ``terminated`` is always *False*.
        """
        action = np.asarray(action, dtype=np.float64)
        self._apply_input(float(action[0]), float(action[1]), float(action[2]))
        self._advance_balls()
        self._step_count += 1
        limit = self.cfg.episode_length
        truncated = bool(limit) and self._step_count >= limit
        return self._build_observation(), 0.0, False, truncated, self._build_info()

    # ------------------------------------------------------------------
    # Observation builder
    # ------------------------------------------------------------------

    def _build_state_vector(self) -> np.ndarray:
        """Concatenate joint command, target, and gripper canvas position."""
        a = self._angles
        gx, gy = self.gripper_position
        return np.array(
            [a.base, a.shoulder, a.elbow, a.gripper, self._target.x, self._target.y, gx, gy],
            dtype=np.float32,
        )

    def _build_ball_matrix(self) -> np.ndarray:
        """Return one ``[x, y, vx, vy, gripped]`` row per ball."""
        rows = [[b.x, b.y, b.vx, b.vy, float(b.is_gripped)] for b in self._balls]
        return np.array(rows, dtype=np.float32).reshape(len(self._balls), BALL_FEATURES)

    def _build_observation(self) -> Dict[str, np.ndarray]:
        """Assemble the observation dictionary.

        Returns:
            Dictionary with ``'agent_pos'``, ``'balls'``, and optionally ``'pixels'``.
        """
        obs: Dict[str, np.ndarray] = {
            "agent_pos": self._build_state_vector(),
            "balls": self._build_ball_matrix(),
        }
        if "pixels" in self.cfg.obs_type:
            obs["pixels"] = self.render()
        return obs

    def _build_info(self) -> Dict[str, Any]:
        return {
            "angles": self._angles,
            "target": self._target,
            "gripper_position": self.gripper_position,
            "is_gripping": self._is_gripping,
            "held_ball_ids": [b.id for b in self._balls if b.is_gripped],
            "step": self._step_count,
        }

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _canvas_scale(self, canvas: np.ndarray) -> Tuple[float, float]:
        h, w = canvas.shape[:2]
        return w / self.cfg.physics.width, h / float(CANVAS_HEIGHT)

    def _draw_background(self, canvas: np.ndarray) -> None:
        """Fill the canvas and draw the floor line.

        Args:
            canvas: Mutable (H, W, 3) uint8 array.
        """
        canvas[:] = COLOR_BACKGROUND
        _, sy = self._canvas_scale(canvas)
        floor_row = int(self.cfg.physics.floor_y * sy)
        canvas[max(floor_row - 1, 0) : floor_row + 1, :] = COLOR_FLOOR

    def _draw_circle(
        self,
        canvas: np.ndarray,
        pos: Tuple[float, float],
        colour: Tuple[int, int, int],
        radius: float,
    ) -> None:
        """Draw a filled circle at a canvas position.

        Args:
            canvas: Mutable (H, W, 3) uint8 array.
            pos: Simulation canvas position (x, y).
            colour: RGB colour tuple.
            radius: Radius in simulation units.
        """
        h, w = canvas.shape[:2]
        sx, sy = self._canvas_scale(canvas)
        cx, cy = pos[0] * sx, pos[1] * sy
        rr, cc = np.ogrid[:h, :w]
        mask = (rr - cy) ** 2 + (cc - cx) ** 2 < (radius * sx) ** 2
        canvas[mask] = colour

    def _draw_segment(
        self,
        canvas: np.ndarray,
        start: Tuple[float, float],
        end: Tuple[float, float],
        colour: Tuple[int, int, int],
        thickness: float,
    ) -> None:
        """Draw a thick line segment between two canvas positions.

        Args:
            canvas: Mutable (H, W, 3) uint8 array.
            start: Segment start (x, y).
            end: Segment end (x, y).
            colour: RGB colour tuple.
            thickness: Full line width in simulation units.
        """
        h, w = canvas.shape[:2]
        sx, sy = self._canvas_scale(canvas)
        p0 = np.array([start[0] * sx, start[1] * sy])
        p1 = np.array([end[0] * sx, end[1] * sy])
        rr, cc = np.mgrid[:h, :w]
        seg = p1 - p0
        seg_len_sq = max(float(seg @ seg), 1e-9)
        t = np.clip(((cc - p0[0]) * seg[0] + (rr - p0[1]) * seg[1]) / seg_len_sq, 0.0, 1.0)
        dx = cc - (p0[0] + t * seg[0])
        dy = rr - (p0[1] + t * seg[1])
        mask = dx**2 + dy**2 < (0.5 * thickness * sx) ** 2
        canvas[mask] = colour

    def render(self) -> np.ndarray:
        """Render the current scene as an RGB image.

        Returns:
            (H, W, 3) uint8 NumPy array.
        """
        h, w = self.cfg.observation_height, self.cfg.observation_width
        canvas = np.zeros((h, w, 3), dtype=np.uint8)
        self._draw_background(canvas)
        for ball in self._balls:
            self._draw_circle(canvas, (ball.x, ball.y), ball.color, ball.radius)
        shoulder, elbow, tip = self._arm.canvas_joint_positions(self._angles)
        self._draw_segment(canvas, shoulder, elbow, COLOR_UPPER_ARM, 14)
        self._draw_segment(canvas, elbow, tip, COLOR_FOREARM, 12)
        self._draw_circle(canvas, tip, COLOR_GRIPPER, 7)
        self._draw_circle(canvas, self.gripper_position, COLOR_TARGET, 3)
        return canvas
