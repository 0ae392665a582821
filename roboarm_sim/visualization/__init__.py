"""
Real-time rendering of the arm playground.

Provides a Pygame-based renderer that draws control-loop snapshots: arm,
gripper, balls, target, and a telemetry HUD.
"""
