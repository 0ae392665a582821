"""
Dataclass configuration for the arm playground simulation.

Follows the Gymnasium ``EnvConfig`` pattern: one dataclass describes the
canvas, timing, episode, and physics settings read by ``ArmPlaygroundEnv``
and the control loop.

Classes:
    PlaygroundSimConfig: Configuration for ``ArmPlaygroundEnv``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from roboarm_sim.envs.ball_physics import PhysicsParams
from roboarm_sim.utils.constants import (
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    CONTROL_PERIOD_S,
    DEFAULT_FPS,
)
from roboarm_sim.utils.exceptions import ConfigError


@dataclass
class PlaygroundSimConfig:
    """Configuration for the 2-D arm playground.

    The agent commands a normalized pointer sample plus a grip flag; the
    environment maps it through IK and advances the ball physics one tick.

    Attributes:
        fps: Nominal control rate shown to renderers.
        control_period: Seconds between control ticks.
        episode_length: Steps before truncation; ``0`` never truncates.
        obs_type: ``'state'`` or ``'pixels_state'``.
        observation_height: Pixel height of rendered observations.
        observation_width: Pixel width of rendered observations.
        seed: Random seed for reproducibility.
        physics: Per-tick ball physics constants.
    """

    fps: int = DEFAULT_FPS
    control_period: float = CONTROL_PERIOD_S
    episode_length: int = 0
    obs_type: str = "state"
    observation_height: int = CANVAS_HEIGHT
    observation_width: int = CANVAS_WIDTH
    seed: int = 42
    physics: PhysicsParams = field(default_factory=PhysicsParams)

    def __post_init__(self) -> None:
        """Validate timing and observation settings.

        Raises:
            ConfigError: On a non-positive period or unknown ``obs_type``.
        """
        if self.control_period <= 0:
            raise ConfigError(f"control_period must be positive, got {self.control_period}")
        if self.episode_length < 0:
            raise ConfigError("episode_length must be >= 0")
        if self.obs_type not in ("state", "pixels_state"):
            raise ConfigError(f"Unknown obs_type '{self.obs_type}'")
