"""Tests for the coordinate mapper, IK solver, and forward kinematics."""
import math

import numpy as np
import pytest

from roboarm_sim.robots.kinematics import (
    map_input_to_coordinates,
    solve_ik,
    solve_ik_exact,
)
from roboarm_sim.robots.planar_arm import (
    ArmConfig,
    JointAngles,
    PlanarArm,
    WorkspaceCoordinates,
)
from roboarm_sim.utils.exceptions import ConfigError


class TestCoordinateMapper:
    """Normalized sample to arm-frame coordinates."""

    def test_centre_sample(self, arm_config):
        target = map_input_to_coordinates(0.5, 0.5, arm_config)
        assert target.x == pytest.approx(0.0)
        assert target.y == pytest.approx(150.0)
        assert target.z == 0.0

    def test_corners(self, arm_config):
        top_left = map_input_to_coordinates(0.0, 0.0, arm_config)
        bottom_right = map_input_to_coordinates(1.0, 1.0, arm_config)
        assert (top_left.x, top_left.y) == pytest.approx((-300.0, 350.0))
        assert (bottom_right.x, bottom_right.y) == pytest.approx((300.0, -50.0))

    def test_bottom_edge_sample_maps_below_base(self, arm_config):
        target = map_input_to_coordinates(0.5, 1.0, arm_config)
        assert target.y == pytest.approx(350.0 - 400.0)

    def test_vertical_axis_is_inverted(self, arm_config):
        high = map_input_to_coordinates(0.5, 0.1, arm_config)
        low = map_input_to_coordinates(0.5, 0.9, arm_config)
        assert high.y > low.y

    def test_out_of_range_input_is_clamped(self, arm_config):
        clamped = map_input_to_coordinates(-1.0, 2.0, arm_config)
        edge = map_input_to_coordinates(0.0, 1.0, arm_config)
        assert clamped == edge

    def test_non_finite_input_is_treated_as_zero(self, arm_config):
        target = map_input_to_coordinates(float("nan"), float("inf"), arm_config)
        assert math.isfinite(target.x) and math.isfinite(target.y)
        assert target == map_input_to_coordinates(0.0, 0.0, arm_config)


class TestInverseKinematics:
    """Analytical two-link IK."""

    @pytest.mark.parametrize("x, y", [(120.0, 150.0), (-80.0, 60.0), (200.0, -30.0), (0.0, 150.0)])
    def test_forward_kinematics_round_trip(self, arm_config, x, y):
        solution = solve_ik_exact(WorkspaceCoordinates(x, y), arm_config)
        tip = PlanarArm(arm_config).joint_positions(solution.shoulder, solution.elbow)[-1]
        assert tip[0] == pytest.approx(x, abs=1e-6)
        assert tip[1] == pytest.approx(y, abs=1e-6)

    def test_elbow_down_branch_only(self, arm_config):
        for x, y in [(100.0, 100.0), (-150.0, 20.0), (50.0, 200.0)]:
            assert solve_ik_exact(WorkspaceCoordinates(x, y), arm_config).elbow <= 0.0

    def test_unreachable_target_is_projected_onto_reach_circle(self, arm_config):
        solution = solve_ik_exact(WorkspaceCoordinates(1000.0, 0.0), arm_config)
        assert solution.reach_x == pytest.approx(arm_config.max_reach)
        assert solution.reach_y == pytest.approx(0.0)
        assert solution.elbow == pytest.approx(0.0)
        assert solution.shoulder == pytest.approx(0.0)

    def test_projected_target_keeps_direction(self, arm_config):
        solution = solve_ik_exact(WorkspaceCoordinates(300.0, 400.0), arm_config)
        assert math.hypot(solution.reach_x, solution.reach_y) == pytest.approx(270.0)
        assert solution.reach_y / solution.reach_x == pytest.approx(400.0 / 300.0)

    def test_target_at_origin_is_finite(self, arm_config):
        angles = solve_ik(WorkspaceCoordinates(0.0, 0.0), arm_config)
        assert all(math.isfinite(v) for v in (angles.base, angles.shoulder, angles.elbow))
        assert angles.elbow <= -179

    def test_inner_dead_zone_still_solves(self):
        config = ArmConfig(segment1_length=200.0, segment2_length=50.0)
        angles = solve_ik(WorkspaceCoordinates(10.0, 10.0), config)
        assert angles.elbow <= -179

    def test_non_finite_target_is_finite(self, arm_config):
        angles = solve_ik(WorkspaceCoordinates(float("nan"), float("inf")), arm_config)
        assert all(math.isfinite(v) for v in (angles.base, angles.shoulder, angles.elbow))

    def test_angles_are_floored(self, arm_config):
        target = WorkspaceCoordinates(123.4, 98.7)
        exact = solve_ik_exact(target, arm_config)
        angles = solve_ik(target, arm_config)
        assert angles.shoulder == math.floor(exact.shoulder)
        assert angles.elbow == math.floor(exact.elbow)
        assert isinstance(angles.shoulder, int)
        assert angles.gripper == 0

    def test_base_angle_follows_horizontal_side(self, arm_config):
        assert solve_ik(WorkspaceCoordinates(50.0, 100.0), arm_config).base == 90
        assert solve_ik(WorkspaceCoordinates(-50.0, 100.0), arm_config).base == -90
        assert solve_ik(WorkspaceCoordinates(0.0, 100.0), arm_config).base == 0


class TestArmModel:
    """Config validation and joint command formatting."""

    def test_reach_limits(self, arm_config):
        assert arm_config.max_reach == 270.0
        assert arm_config.min_reach == 30.0

    @pytest.mark.parametrize("length", [0.0, -10.0, float("nan"), float("inf")])
    def test_invalid_segment_length_rejected(self, length):
        with pytest.raises(ConfigError):
            ArmConfig(segment1_length=length)

    def test_with_changes_validates(self, arm_config):
        assert arm_config.with_changes(segment2_length=90.0).segment2_length == 90.0
        with pytest.raises(ConfigError):
            arm_config.with_changes(segment2_length=-1.0)

    def test_command_line_format(self):
        assert JointAngles(90, 45, -30, 100).to_command() == "90,45,-30,100\n"

    def test_initial_pose(self):
        assert JointAngles.initial() == JointAngles(0, 90, -90, 0)

    def test_with_gripper_clamps(self):
        assert JointAngles(0, 0, 0).with_gripper(250).gripper == 100
        assert JointAngles(0, 0, 0).with_gripper(-5).gripper == 0

    def test_canvas_positions_start_at_base(self, arm_config):
        shoulder, elbow, tip = PlanarArm(arm_config).canvas_joint_positions(JointAngles(0, 90, -90))
        assert shoulder == pytest.approx((300.0, 350.0))
        assert elbow == pytest.approx((300.0, 200.0))
        assert tip == pytest.approx((420.0, 200.0))

    def test_joint_positions_shape(self, arm_config):
        points = PlanarArm(arm_config).joint_positions(30.0, -60.0)
        assert points.shape == (3, 2)
        assert np.allclose(points[0], 0.0)
