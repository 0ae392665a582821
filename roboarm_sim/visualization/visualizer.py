"""
Real-time Pygame renderer for the arm playground.

Draws each ``RenderSnapshot`` published by the control loop: the grid and
floor, the balls, the two arm segments from forward kinematics, the
gripper jaws, the target marker, a telemetry HUD, and a small overlay of
the tracked hand skeleton.  The renderer is a pure consumer; it never
mutates session state itself and forwards window events to an optional
handler (the mouse teleop).

Classes:
    ArmVisualizer: Live rendering of render snapshots.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from roboarm_sim.control.shared_state import RenderSnapshot
from roboarm_sim.perception.gestures import HandGesture
from roboarm_sim.robots.planar_arm import PlanarArm
from roboarm_sim.utils.constants import (
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    COLOR_BACKGROUND,
    COLOR_FLOOR,
    COLOR_FOREARM,
    COLOR_GRID,
    COLOR_GRIPPER,
    COLOR_JOINT,
    COLOR_SUCCESS,
    COLOR_TARGET,
    COLOR_TEXT,
    COLOR_UPPER_ARM,
    COLOR_WARNING,
    DEFAULT_FPS,
    FLOOR_Y,
    HAND_CONNECTIONS,
)

# Gesture -> (HUD label, sub-label, colour)
GESTURE_LABELS: Dict[HandGesture, Tuple[str, str, Tuple[int, int, int]]] = {
    HandGesture.CLOSED_FIST: ("SAFETY LOCK", "Movement Halted", COLOR_WARNING),
    HandGesture.PINCH: ("GRIP ACTIVE", "Pinch to Hold", COLOR_SUCCESS),
    HandGesture.OPEN_PALM: ("TRACKING", "Open Palm", COLOR_GRIPPER),
    HandGesture.NONE: ("SEARCHING", "No Hand Detected", COLOR_FLOOR),
}

GRID_SPACING = 40
HAND_OVERLAY_SIZE = (160, 120)


@dataclass
class ArmVisualizer:
    """Pygame-based renderer for arm playground snapshots.

    Call ``render_snapshot`` once per frame with the latest snapshot; the
    visualizer draws it, pumps window events through ``event_handler``,
    and ticks the clock at ``fps``.

    Attributes:
        width: Window width in pixels.
        height: Window height in pixels.
        fps: Target frames per second.
        window_title: Caption displayed in the title bar.
        event_handler: Optional callable receiving ``(event, pygame)`` and
            returning *False* to request quit.
    """

    width: int = CANVAS_WIDTH
    height: int = CANVAS_HEIGHT
    fps: int = DEFAULT_FPS
    window_title: str = "RoboArm Sim"
    event_handler: Optional[Callable[[Any, Any], bool]] = None
    _screen: Optional[Any] = None
    _clock: Optional[Any] = None
    _font: Optional[Any] = None

    # ------------------------------------------------------------------
    # Initialisation / teardown
    # ------------------------------------------------------------------

    def init_display(self) -> None:
        """Create the Pygame window, clock, and HUD font.

        Raises:
            ImportError: If Pygame is not installed.
        """
        try:
            import pygame
        except ImportError as exc:
            raise ImportError("Pygame required: pip install pygame") from exc
        pygame.init()
        self._screen = pygame.display.set_mode((self.width, self.height))
        pygame.display.set_caption(self.window_title)
        self._clock = pygame.time.Clock()
        self._font = pygame.font.SysFont("monospace", 14)

    def close(self) -> None:
        """Destroy the Pygame window and quit Pygame."""
        if self._screen is None:
            return
        import pygame

        pygame.quit()
        self._screen = None

    # ------------------------------------------------------------------
    # Scene drawing
    # ------------------------------------------------------------------

    def _scale(self, point: Tuple[float, float]) -> Tuple[int, int]:
        """Map a simulation canvas point to window pixels."""
        return (
            int(point[0] * self.width / CANVAS_WIDTH),
            int(point[1] * self.height / CANVAS_HEIGHT),
        )

    def _draw_grid(self, pg: Any) -> None:
        self._screen.fill(COLOR_BACKGROUND)
        for x in range(0, self.width, GRID_SPACING):
            pg.draw.line(self._screen, COLOR_GRID, (x, 0), (x, self.height))
        for y in range(0, self.height, GRID_SPACING):
            pg.draw.line(self._screen, COLOR_GRID, (0, y), (self.width, y))
        floor = self._scale((0, FLOOR_Y))[1]
        pg.draw.line(self._screen, COLOR_FLOOR, (0, floor), (self.width, floor), 2)

    def _draw_balls(self, pg: Any, snapshot: RenderSnapshot) -> None:
        for ball in snapshot.balls:
            pg.draw.circle(self._screen, ball.color, self._scale((ball.x, ball.y)), int(ball.radius))

    def _draw_arm(self, pg: Any, snapshot: RenderSnapshot) -> None:
        """Draw both segments, the joints, and the gripper jaws."""
        arm = PlanarArm(config=snapshot.config)
        shoulder, elbow, tip = (self._scale(p) for p in arm.canvas_joint_positions(snapshot.angles))
        pg.draw.line(self._screen, COLOR_UPPER_ARM, shoulder, elbow, 14)
        pg.draw.line(self._screen, COLOR_FOREARM, elbow, tip, 12)
        for point, radius in ((shoulder, 10), (elbow, 8), (tip, 7)):
            pg.draw.circle(self._screen, COLOR_JOINT, point, radius)
        self._draw_gripper(pg, tip, snapshot.angles.shoulder + snapshot.angles.elbow,
                           closed=snapshot.angles.gripper >= 50)

    def _draw_gripper(self, pg: Any, tip: Tuple[int, int], heading_deg: float, closed: bool) -> None:
        """Draw two jaws along the forearm heading; open jaws spread wider."""
        heading = math.radians(heading_deg)
        forward = (math.cos(heading), -math.sin(heading))
        normal = (-forward[1], forward[0])
        spread = 4 if closed else 12
        for side in (-1, 1):
            root = (tip[0] + forward[0] * 10 + normal[0] * 6 * side,
                    tip[1] + forward[1] * 10 + normal[1] * 6 * side)
            end = (tip[0] + forward[0] * 25 + normal[0] * spread * side,
                   tip[1] + forward[1] * 25 + normal[1] * spread * side)
            pg.draw.line(self._screen, COLOR_GRIPPER, root, end, 4)

    def _draw_target(self, pg: Any, snapshot: RenderSnapshot) -> None:
        origin = PlanarArm(config=snapshot.config).base_position
        point = self._scale((origin[0] + snapshot.target.x, origin[1] - snapshot.target.y))
        pg.draw.circle(self._screen, COLOR_TARGET, point, 5, 1)

    def _draw_hand_overlay(self, pg: Any, landmarks: Sequence[Tuple[float, float]]) -> None:
        """Draw the tracked hand skeleton in the bottom-right corner."""
        if not landmarks:
            return
        w, h = HAND_OVERLAY_SIZE
        left, top = self.width - w - 8, self.height - h - 8
        pg.draw.rect(self._screen, COLOR_GRID, (left, top, w, h), 1)
        points = [(left + int(x * w), top + int(y * h)) for x, y in landmarks]
        for i, j in HAND_CONNECTIONS:
            if i < len(points) and j < len(points):
                pg.draw.line(self._screen, COLOR_TEXT, points[i], points[j], 1)
        for point in points:
            pg.draw.circle(self._screen, COLOR_GRIPPER, point, 2)

    # ------------------------------------------------------------------
    # HUD
    # ------------------------------------------------------------------

    def _draw_hud_text(self, text: str, pos: Tuple[int, int], colour=COLOR_TEXT) -> None:
        rendered = self._font.render(text, True, colour)
        self._screen.blit(rendered, pos)

    def _draw_hud(self, snapshot: RenderSnapshot) -> None:
        """Draw joint telemetry, gesture status, vision status, and target."""
        a = snapshot.angles
        self._draw_hud_text(f"BASE: {a.base}", (8, 4))
        self._draw_hud_text(f"SHLDR: {a.shoulder}", (8, 20))
        self._draw_hud_text(f"ELBOW: {a.elbow}", (8, 36))
        self._draw_hud_text(f"GRIP: {'CLOSED' if a.gripper > 50 else 'OPEN'}", (8, 52))

        label, sub, colour = GESTURE_LABELS[snapshot.gesture]
        right = self.width - 200
        vision = "VISION ONLINE" if snapshot.vision_ready else "MANUAL INPUT"
        self._draw_hud_text(vision, (right, 4), COLOR_SUCCESS if snapshot.vision_ready else COLOR_WARNING)
        self._draw_hud_text(label, (right, 20), colour)
        self._draw_hud_text(sub, (right, 36))
        self._draw_hud_text(
            f"X: {snapshot.target.x:.0f}  Y: {snapshot.target.y:.0f}", (right, 52)
        )

    # ------------------------------------------------------------------
    # Live rendering
    # ------------------------------------------------------------------

    def render_snapshot(
        self,
        snapshot: Optional[RenderSnapshot],
        hand_landmarks: Sequence[Tuple[float, float]] = (),
    ) -> bool:
        """Draw one snapshot and flip the display.

        Args:
            snapshot: Latest control tick snapshot; None draws an empty scene.
            hand_landmarks: Latest tracked landmarks for the overlay.

        Returns:
            True if still running, False if the user closed the window.
        """
        if self._screen is None:
            self.init_display()
        import pygame

        self._draw_grid(pygame)
        if snapshot is not None:
            self._draw_balls(pygame, snapshot)
            self._draw_target(pygame, snapshot)
            self._draw_arm(pygame, snapshot)
            self._draw_hud(snapshot)
        self._draw_hand_overlay(pygame, hand_landmarks)
        return self._flip_display()

    def _pump_events(self) -> bool:
        """Process Pygame events and return False if user quit.

        Returns:
            True if the window should stay open, False on quit.
        """
        import pygame

        alive = True
        for event in pygame.event.get():
            if self.event_handler is not None:
                alive = self.event_handler(event, pygame) and alive
            elif event.type == pygame.QUIT:
                alive = False
        return alive

    def _flip_display(self) -> bool:
        """Update the Pygame display, pump events, and tick the clock.

        Returns:
            True if still running, False if user closed the window.
        """
        import pygame

        pygame.display.flip()
        alive = self._pump_events()
        if self._clock is not None:
            self._clock.tick(self.fps)
        return alive
