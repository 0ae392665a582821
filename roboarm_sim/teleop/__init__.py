"""
Manual teleoperation fallback.

Provides mouse-driven pointer and grip input that feeds the same shared
session cells as camera hand tracking.
"""

from roboarm_sim.teleop.mouse_teleop import MouseTeleop

__all__ = ["MouseTeleop"]
