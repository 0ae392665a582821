"""
Shared session state and the fixed-rate control loop.

Provides last-value-wins cells shared between the tracking loop and the
control loop, and the 30 Hz loop that turns the latest input into joint
commands and ball physics.
"""

from roboarm_sim.control.shared_state import (
    LatestValue,
    NormalizedInputSample,
    RenderSnapshot,
    SessionState,
)

__all__ = ["LatestValue", "NormalizedInputSample", "RenderSnapshot", "SessionState"]
