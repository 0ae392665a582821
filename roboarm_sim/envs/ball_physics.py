"""
Rigid-ball physics and gripper interaction for the arm playground.

Each ball is either FREE (falls under gravity, bounces on the floor and
walls) or GRIPPED (rigidly attached just below the gripper).  Capture is
distance-gated; release happens as soon as gripping stops.  Balls never
interact with each other, so every ball is updated independently.

Classes:
    PhysicsParams: Per-tick physics constants.
    Ball: A circular body with velocity and a gripped flag.

Functions:
    initial_balls: The fixed ball set created at session start.
    step_ball: Advance one ball by one control tick.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Tuple

from roboarm_sim.utils.constants import (
    AIR_DRAG,
    BALL_AMBER,
    BALL_BLUE,
    BALL_GREEN,
    BALL_RADIUS,
    BALL_RED,
    BASE_X,
    BASE_Y,
    CANVAS_WIDTH,
    FLOOR_FRICTION,
    FLOOR_Y,
    GRAVITY,
    GRIP_CAPTURE_RADIUS,
    GRIP_HANG_OFFSET,
    RESTITUTION,
)


@dataclass(frozen=True)
class PhysicsParams:
    """Physics constants applied once per control tick.

    Attributes:
        gravity: Downward velocity added per tick (screen y grows down).
        air_drag: Multiplier applied to horizontal velocity per tick.
        restitution: Fraction of vertical speed kept after a floor bounce.
        floor_friction: Multiplier on horizontal velocity at a floor bounce.
        capture_radius: Maximum gripper-to-ball distance for a capture.
        hang_offset: How far below the gripper a held ball hangs.
        floor_y: Canvas y of the floor.
        width: Canvas width; balls bounce off x = 0 and x = width.
    """

    gravity: float = GRAVITY
    air_drag: float = AIR_DRAG
    restitution: float = RESTITUTION
    floor_friction: float = FLOOR_FRICTION
    capture_radius: float = GRIP_CAPTURE_RADIUS
    hang_offset: float = GRIP_HANG_OFFSET
    floor_y: float = FLOOR_Y
    width: float = float(CANVAS_WIDTH)


@dataclass
class Ball:
    """A circular rigid body in canvas coordinates.

    Attributes:
        id: Stable identifier for the session.
        x: Canvas x of the centre.
        y: Canvas y of the centre (grows downward).
        vx: Horizontal velocity per tick.
        vy: Vertical velocity per tick.
        radius: Ball radius.
        color: RGB colour used by the renderer.
        is_gripped: Whether the ball is attached to the gripper.
    """

    id: int
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    radius: float = BALL_RADIUS
    color: Tuple[int, int, int] = BALL_RED
    is_gripped: bool = False

    def distance_to(self, point: Tuple[float, float]) -> float:
        """Return the distance from the ball centre to *point*."""
        return math.hypot(self.x - point[0], self.y - point[1])


def initial_balls() -> List[Ball]:
    """Return the four balls placed at session start."""
    return [
        Ball(id=1, x=BASE_X - 100, y=BASE_Y - 20, color=BALL_RED),
        Ball(id=2, x=BASE_X + 120, y=BASE_Y - 20, color=BALL_BLUE),
        Ball(id=3, x=BASE_X - 150, y=BASE_Y - 20, color=BALL_GREEN),
        Ball(id=4, x=BASE_X + 80, y=BASE_Y - 80, color=BALL_AMBER),
    ]


# ------------------------------------------------------------------
# Per-tick update (in call order)
# ------------------------------------------------------------------


def _update_grip(
    ball: Ball, gripper_pos: Tuple[float, float], is_gripping: bool, params: PhysicsParams
) -> None:
    """Apply the FREE/GRIPPED transition for one tick."""
    if is_gripping and ball.distance_to(gripper_pos) < params.capture_radius:
        ball.is_gripped = True
    if not is_gripping:
        ball.is_gripped = False


def _attach_to_gripper(
    ball: Ball, gripper_pos: Tuple[float, float], params: PhysicsParams
) -> None:
    """Snap a held ball just below the gripper and stop it."""
    ball.x = gripper_pos[0]
    ball.y = gripper_pos[1] + params.hang_offset
    ball.vx = 0.0
    ball.vy = 0.0


def _integrate_free(ball: Ball, params: PhysicsParams) -> None:
    """Apply gravity and drag, then move the ball by its velocity."""
    ball.vy += params.gravity
    ball.vx *= params.air_drag
    ball.y += ball.vy
    ball.x += ball.vx


def _resolve_collisions(ball: Ball, params: PhysicsParams) -> None:
    """Bounce off the floor and the side walls."""
    floor_limit = params.floor_y - ball.radius
    if ball.y > floor_limit:
        ball.y = floor_limit
        ball.vy *= -params.restitution
        ball.vx *= params.floor_friction
    if ball.x < 0 or ball.x > params.width:
        ball.vx *= -1


def step_ball(
    ball: Ball,
    gripper_pos: Tuple[float, float],
    is_gripping: bool,
    params: PhysicsParams | None = None,
) -> Ball:
    """Advance *ball* by one control tick, in place.

    Args:
        ball: The ball to update.
        gripper_pos: Canvas position of the gripper this tick.
        is_gripping: Whether the gripper is closed this tick.
        params: Physics constants; defaults to ``PhysicsParams()``.

    Returns:
        The same ``Ball`` instance, for chaining.
    """
    params = params or PhysicsParams()
    _update_grip(ball, gripper_pos, is_gripping, params)
    if ball.is_gripped:
        _attach_to_gripper(ball, gripper_pos, params)
    else:
        _integrate_free(ball, params)
        _resolve_collisions(ball, params)
    return ball
