"""
One interactive arm session: tracking, control, rendering, and teardown.

``ArmSession`` wires the shared state, the playground environment, the
control loop, the optional camera tracking loop, the optional serial
sink, the mouse fallback, and the renderer.  ``stop`` releases the
camera, the serial port, and the window on every exit path.

Classes:
    ArmSession: Owns the lifetime of every collaborator in a session.
"""

from __future__ import annotations

import logging
from typing import Optional

from roboarm_sim.control.control_loop import ControlLoop
from roboarm_sim.control.shared_state import SessionState
from roboarm_sim.envs.arm_playground import ArmPlaygroundEnv
from roboarm_sim.envs.configs import PlaygroundSimConfig
from roboarm_sim.hardware.serial_link import SerialCommandSink
from roboarm_sim.robots.planar_arm import ArmConfig
from roboarm_sim.teleop.mouse_teleop import MouseTeleop
from roboarm_sim.visualization.visualizer import ArmVisualizer

logger = logging.getLogger(__name__)


class ArmSession:
    """Runs the tracking and control loops and renders their output.

    Example:
        with ArmSession(ArmConfig(), camera_index=0) as session:
            session.run()
    """

    def __init__(
        self,
        arm_config: Optional[ArmConfig] = None,
        camera_index: Optional[int] = 0,
        serial_port: Optional[str] = None,
        sim_cfg: Optional[PlaygroundSimConfig] = None,
        visualizer: Optional[ArmVisualizer] = None,
    ):
        """Build every collaborator; nothing is opened until ``start``.

        Args:
            arm_config: Starting arm geometry; defaults to ``ArmConfig()``.
            camera_index: Camera device for hand tracking; None runs the
                session on manual mouse input only.
            serial_port: Optional serial device receiving joint commands.
            sim_cfg: Playground settings (timing, physics).
            visualizer: Renderer; a default window is created when None.
        """
        self.sim_cfg = sim_cfg or PlaygroundSimConfig()
        self.state = SessionState()
        if arm_config is not None:
            self.state.config.set(arm_config)
        self.env = ArmPlaygroundEnv(self.sim_cfg, arm_config=self.state.config.get())
        self.sink = SerialCommandSink(serial_port) if serial_port else None
        self.control = ControlLoop(self.env, self.state, sink=self.sink)
        self.tracking = self._build_tracking(camera_index)
        self.teleop = MouseTeleop(self.state)
        self.visualizer = visualizer or ArmVisualizer(fps=self.sim_cfg.fps)
        if self.visualizer.event_handler is None:
            self.visualizer.event_handler = self.teleop.handle_event
        self._started = False

    def _build_tracking(self, camera_index: Optional[int]):
        if camera_index is None:
            return None
        # Imported here so manual-only sessions do not load OpenCV/MediaPipe.
        from roboarm_sim.perception.hand_tracker import HandTracker
        from roboarm_sim.perception.tracking_loop import TrackingLoop

        return TrackingLoop(HandTracker(camera_index=camera_index), self.state)

    @property
    def vision_ready(self) -> bool:
        return self.state.vision_ready.get()

    def start(self) -> bool:
        """Connect the sink, start tracking (if any), and start control.

        Returns:
            Whether camera tracking is live.  On *False* the session keeps
            running on mouse input.
        """
        if self._started:
            return self.vision_ready
        self._started = True
        try:
            if self.sink is not None and not self.sink.connect():
                logger.warning("Continuing without hardware output")
            ready = self.tracking.start() if self.tracking is not None else False
            self.control.start()
        except Exception:
            logger.error("Session failed to start; releasing resources")
            self.stop()
            raise
        mode = "hand tracking" if ready else "manual mouse input"
        logger.info(f"Session started with {mode}")
        return ready

    def render_once(self) -> bool:
        """Render the latest snapshot; returns *False* once the user quits."""
        return self.visualizer.render_snapshot(
            self.state.snapshot.get(), self.state.hand_landmarks.get()
        )

    def run(self, max_frames: Optional[int] = None) -> int:
        """Start (if needed) and render until the window closes.

        Args:
            max_frames: Optional frame limit.

        Returns:
            Number of frames rendered.
        """
        frames = 0
        try:
            self.start()
            while max_frames is None or frames < max_frames:
                frames += 1
                if not self.render_once():
                    break
        except KeyboardInterrupt:
            logger.info("Interrupted by user")
        finally:
            self.stop()
        return frames

    def stop(self) -> None:
        """Stop both loops and release the camera, serial port, and window."""
        try:
            if self.tracking is not None:
                self.tracking.stop()
        finally:
            try:
                self.control.stop()
            finally:
                self._release_outputs()

    def _release_outputs(self) -> None:
        try:
            if self.sink is not None:
                self.sink.close()
        finally:
            self.visualizer.close()
            self._started = False

    def __enter__(self) -> "ArmSession":
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()
