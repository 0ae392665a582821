"""
Hardware transport for joint commands.

Provides a best-effort serial line sink that streams one
``base,shoulder,elbow,gripper`` line per control tick.
"""

from roboarm_sim.hardware.serial_link import SerialCommandSink

__all__ = ["SerialCommandSink"]
