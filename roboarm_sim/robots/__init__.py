"""
Simulated planar robot arm kinematics.

Provides the 2-DOF arm data model, forward kinematics for rendering, the
normalized-input-to-workspace mapping, and the analytical IK solver.
"""

from roboarm_sim.robots.kinematics import (
    IKSolution,
    map_input_to_coordinates,
    solve_ik,
    solve_ik_exact,
)
from roboarm_sim.robots.planar_arm import (
    ArmConfig,
    JointAngles,
    PlanarArm,
    WorkspaceCoordinates,
)

__all__ = [
    "ArmConfig",
    "IKSolution",
    "JointAngles",
    "PlanarArm",
    "WorkspaceCoordinates",
    "map_input_to_coordinates",
    "solve_ik",
    "solve_ik_exact",
]
