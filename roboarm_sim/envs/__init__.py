"""
Gymnasium-compatible simulation environment for the planar arm.

Provides the arm playground, where a 2-DOF arm driven by a pointer sample
and a grip flag picks up and drops balls under simple physics.
"""

from roboarm_sim.envs.arm_playground import ArmPlaygroundEnv
from roboarm_sim.envs.ball_physics import Ball, PhysicsParams, initial_balls, step_ball
from roboarm_sim.envs.configs import PlaygroundSimConfig

__all__ = [
    "ArmPlaygroundEnv",
    "Ball",
    "PhysicsParams",
    "PlaygroundSimConfig",
    "initial_balls",
    "step_ball",
]
