"""Tests for per-tick ball physics and gripper capture."""
import pytest

from roboarm_sim.envs.ball_physics import Ball, PhysicsParams, initial_balls, step_ball
from roboarm_sim.utils.constants import BASE_X, BASE_Y, FLOOR_Y


class TestFreeBall:
    """Gravity, drag, floor and wall collisions."""

    def test_gravity_after_one_tick(self):
        ball = Ball(id=1, x=100.0, y=100.0)
        step_ball(ball, (500.0, 0.0), is_gripping=False)
        assert ball.vy == pytest.approx(0.5)
        assert ball.y == pytest.approx(100.5)

    def test_air_drag_on_horizontal_velocity(self):
        ball = Ball(id=1, x=100.0, y=100.0, vx=10.0)
        step_ball(ball, (500.0, 0.0), is_gripping=False)
        assert ball.vx == pytest.approx(9.5)
        assert ball.x == pytest.approx(109.5)

    def test_floor_bounce_from_rest(self):
        ball = Ball(id=1, x=100.0, y=FLOOR_Y - 15, vx=2.0)
        step_ball(ball, (500.0, 0.0), is_gripping=False)
        assert ball.y == pytest.approx(FLOOR_Y - ball.radius)
        assert ball.vy == pytest.approx(-0.3)
        assert ball.vx == pytest.approx(2.0 * 0.95 * 0.8)

    def test_never_ends_tick_below_floor(self):
        ball = Ball(id=1, x=100.0, y=50.0)
        for _ in range(500):
            step_ball(ball, (500.0, 0.0), is_gripping=False)
            assert ball.y <= FLOOR_Y - ball.radius

    @pytest.mark.parametrize("x, vx", [(1.0, -5.0), (598.0, 5.0)])
    def test_wall_reverses_horizontal_velocity(self, x, vx):
        ball = Ball(id=1, x=x, y=100.0, vx=vx)
        step_ball(ball, (300.0, 0.0), is_gripping=False)
        assert ball.vx == pytest.approx(-vx * 0.95)

    def test_custom_params(self):
        params = PhysicsParams(gravity=1.0)
        ball = Ball(id=1, x=100.0, y=100.0)
        step_ball(ball, (500.0, 0.0), False, params)
        assert ball.vy == pytest.approx(1.0)


class TestGripperInteraction:
    """Capture, carry, and release."""

    def test_capture_within_radius(self):
        ball = Ball(id=1, x=200.0, y=300.0, vx=3.0, vy=-2.0)
        step_ball(ball, (210.0, 300.0), is_gripping=True)
        assert ball.is_gripped
        assert (ball.x, ball.y) == pytest.approx((210.0, 315.0))
        assert (ball.vx, ball.vy) == (0.0, 0.0)

    def test_no_capture_outside_radius(self):
        ball = Ball(id=1, x=200.0, y=300.0)
        step_ball(ball, (240.0, 300.0), is_gripping=True)
        assert not ball.is_gripped

    def test_no_capture_without_gripping(self):
        ball = Ball(id=1, x=200.0, y=300.0)
        step_ball(ball, (200.0, 300.0), is_gripping=False)
        assert not ball.is_gripped

    def test_held_ball_follows_gripper_beyond_radius(self):
        ball = Ball(id=1, x=200.0, y=300.0)
        step_ball(ball, (200.0, 300.0), is_gripping=True)
        step_ball(ball, (400.0, 100.0), is_gripping=True)
        assert ball.is_gripped
        assert (ball.x, ball.y) == pytest.approx((400.0, 115.0))

    def test_release_when_gripping_stops(self):
        ball = Ball(id=1, x=200.0, y=300.0)
        step_ball(ball, (200.0, 300.0), is_gripping=True)
        step_ball(ball, (500.0, 50.0), is_gripping=False)
        assert not ball.is_gripped
        assert ball.vy == pytest.approx(0.5)


class TestInitialBalls:

    def test_layout(self):
        balls = initial_balls()
        assert [b.id for b in balls] == [1, 2, 3, 4]
        assert (balls[0].x, balls[0].y) == (BASE_X - 100, BASE_Y - 20)
        assert (balls[3].x, balls[3].y) == (BASE_X + 80, BASE_Y - 80)
        assert all(b.radius == 15 and not b.is_gripped for b in balls)

    def test_fresh_instances(self):
        first, second = initial_balls(), initial_balls()
        first[0].x = 0.0
        assert second[0].x == BASE_X - 100
