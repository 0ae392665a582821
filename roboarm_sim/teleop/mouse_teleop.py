"""
Mouse teleoperation fallback for when camera tracking is unavailable.

Translates Pygame mouse motion into the normalized pointer sample and a
mouse button press/release into PINCH/OPEN_PALM, feeding the same shared
cells as the hand tracking loop.  Arrow keys let the operator resize the
arm segments at runtime.

Classes:
    MouseTeleop: Maps mouse and key events to session input.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict

from roboarm_sim.control.shared_state import SessionState
from roboarm_sim.perception.gestures import HandGesture
from roboarm_sim.utils.constants import CANVAS_HEIGHT, CANVAS_WIDTH
from roboarm_sim.utils.exceptions import ConfigError

logger = logging.getLogger(__name__)


@dataclass
class MouseTeleop:
    """Maps mouse input to the pointer sample and grip gesture.

    Mouse input only drives the arm while vision is not ready, and motion
    is ignored while the gesture is CLOSED_FIST so a fist lock is never
    overridden.

    Attributes:
        state: Shared session cells to write into.
        window_width: Window width in pixels, used to normalize x.
        window_height: Window height in pixels, used to normalize y.
        length_step: Segment length change per arrow-key press (mm).
    """

    state: SessionState
    window_width: int = CANVAS_WIDTH
    window_height: int = CANVAS_HEIGHT
    length_step: float = 10.0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def active(self) -> bool:
        """Whether mouse input currently drives the arm."""
        return not self.state.vision_ready.get()

    def handle_motion(self, px: float, py: float) -> bool:
        """Publish a pointer sample from window pixel coordinates.

        Args:
            px: Mouse x in window pixels.
            py: Mouse y in window pixels.

        Returns:
            *True* if a sample was published.
        """
        if not self.active or self.state.gesture.get() is HandGesture.CLOSED_FIST:
            return False
        self.state.publish_sample(px / self.window_width, py / self.window_height)
        return True

    def handle_button(self, pressed: bool) -> bool:
        """Publish PINCH on press and OPEN_PALM on release.

        Returns:
            *True* if the gesture was published.
        """
        if not self.active:
            return False
        self.state.gesture.set(HandGesture.PINCH if pressed else HandGesture.OPEN_PALM)
        return True

    def adjust_segment(self, field_name: str, delta: float) -> bool:
        """Grow or shrink one arm segment, rejecting invalid lengths.

        Args:
            field_name: ``'segment1_length'`` or ``'segment2_length'``.
            delta: Change in mm.

        Returns:
            *True* if the configuration was updated.
        """
        current = getattr(self.state.config.get(), field_name)
        try:
            new_config = self.state.update_config(**{field_name: current + delta})
        except ConfigError as exc:
            logger.info(f"Ignoring segment change: {exc}")
            return False
        logger.info(
            f"Arm segments now {new_config.segment1_length:g} / "
            f"{new_config.segment2_length:g} mm"
        )
        return True

    def handle_event(self, event: Any, pygame_module: Any) -> bool:
        """Dispatch one Pygame event.

        Args:
            event: Pygame event object.
            pygame_module: The ``pygame`` module (passed to avoid re-import).

        Returns:
            *False* if the event asks the application to quit.
        """
        pg = pygame_module
        if event.type == pg.QUIT:
            return False
        if event.type == pg.MOUSEMOTION:
            self.handle_motion(*event.pos)
        elif event.type == pg.MOUSEBUTTONDOWN and event.button == 1:
            self.handle_button(True)
        elif event.type == pg.MOUSEBUTTONUP and event.button == 1:
            self.handle_button(False)
        elif event.type == pg.KEYDOWN:
            return self._handle_key(event.key, pg)
        return True

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _handle_key(self, key: int, pg: Any) -> bool:
        """Apply a key binding; Escape and ``q`` quit."""
        if key in (pg.K_ESCAPE, pg.K_q):
            return False
        bindings: Dict[int, tuple] = {
            pg.K_UP: ("segment1_length", self.length_step),
            pg.K_DOWN: ("segment1_length", -self.length_step),
            pg.K_RIGHT: ("segment2_length", self.length_step),
            pg.K_LEFT: ("segment2_length", -self.length_step),
        }
        if key in bindings:
            self.adjust_segment(*bindings[key])
        return True
