"""
RoboArm Sim: a hand-driven 2-DOF planar arm playground.

A camera hand tracker (or the mouse) supplies a pointer and a gesture; a
fixed-rate control loop solves inverse kinematics, runs ball physics, and
streams joint commands to a renderer and, optionally, to real servos over
a serial line.  A Gemini-backed generator can emit matching host and
firmware code for the configured arm.

Modules:
    robots: Arm configuration, forward and inverse kinematics.
    perception: Gesture classification and camera hand tracking.
    envs: Ball physics and the Gymnasium playground environment.
    control: Shared session state and the fixed-rate control loop.
    teleop: Mouse fallback input.
    visualization: Pygame renderer.
    hardware: Serial command sink.
    codegen: Gemini code generation.
    utils: Shared constants, helpers, and exceptions.
"""

__version__ = "0.1.0"
