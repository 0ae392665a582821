"""
Fixed-rate control loop driving the arm playground.

Every period (33 ms by default) the loop reads the latest pointer sample,
gesture, and arm configuration from the shared session state, steps the
playground environment once, publishes a ``RenderSnapshot``, and streams
the joint command to the hardware sink when one is attached.  It never
waits for new sensor data; whatever sample is current is used.
"""

import logging
import threading
import time
from typing import Optional

import numpy as np

from roboarm_sim.control.shared_state import RenderSnapshot, SessionState
from roboarm_sim.envs.arm_playground import ArmPlaygroundEnv
from roboarm_sim.hardware.serial_link import SerialCommandSink
from roboarm_sim.perception.gestures import HandGesture

logger = logging.getLogger(__name__)


class ControlLoop:
    """Runs one playground step per control period on a background thread."""

    def __init__(
        self,
        env: ArmPlaygroundEnv,
        state: SessionState,
        sink: Optional[SerialCommandSink] = None,
        period: Optional[float] = None,
    ):
        """Set up the loop without starting its thread.

        Args:
            env: Playground environment to step.
            state: Shared cells to read inputs from and publish snapshots to.
            sink: Optional hardware sink receiving one command line per tick.
            period: Seconds between ticks; defaults to ``env.cfg.control_period``.
        """
        self.env = env
        self.state = state
        self.sink = sink
        self.period = period if period is not None else env.cfg.control_period
        self.tick_count = 0
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Reset the playground and start ticking."""
        if self.running:
            return
        self.env.set_arm_config(self.state.config.get())
        self.env.reset(seed=self.env.cfg.seed)
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="control-loop", daemon=True)
        self._thread.start()
        logger.info(f"Control loop started ({1.0 / self.period:.1f} Hz)")

    def stop(self, timeout: float = 2.0) -> None:
        """Stop ticking and wait for the thread to exit."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None
            logger.info(f"Control loop stopped after {self.tick_count} ticks")

    def _run(self) -> None:
        next_tick = time.monotonic()
        while not self._stop_event.is_set():
            try:
                self.tick()
            except Exception as e:
                logger.error(f"Error in control loop: {e}", exc_info=True)
            next_tick += self.period
            delay = next_tick - time.monotonic()
            if delay < 0:
                # Fell behind; drop the missed ticks instead of bursting.
                next_tick = time.monotonic()
                delay = 0.0
            self._stop_event.wait(delay)

    def tick(self) -> RenderSnapshot:
        """Run one control tick and publish its snapshot.

        Returns:
            The snapshot published for this tick.
        """
        sample = self.state.sample.get()
        gesture = self.state.gesture.get()
        config = self.state.config.get()
        if config is not self.env.arm_config:
            self.env.set_arm_config(config)

        grip = 1.0 if gesture is HandGesture.PINCH else 0.0
        _, _, _, _, info = self.env.step(np.array([sample.x, sample.y, grip]))
        self.tick_count += 1

        snapshot = RenderSnapshot(
            angles=info["angles"],
            config=config,
            target=info["target"],
            balls=self.env.ball_snapshot(),
            gesture=gesture,
            vision_ready=self.state.vision_ready.get(),
            tick=self.tick_count,
        )
        self.state.snapshot.set(snapshot)
        if self.sink is not None:
            self.sink.send_angles(snapshot.angles)
        return snapshot
