"""
Hardware Tests
==============

Unit tests for hardware abstractions using mock implementations.
"""

import math
import os
import pytest
import numpy as np

import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from dock_nav.core.config import CollisionConfig, VisionConfig
from dock_nav.core.errors import GeometryError
from dock_nav.geometry.vector import Vector
from dock_nav.hardware import (
    CameraMode,
    JerkCollisionDetector,
    LightMode,
    MockDrivetrain,
    MockGyro,
    MockVisionSensor,
    NullCollisionDetector,
    OrientationBase,
    create_collision_detector,
)


class TestMockDrivetrain:
    """Test MockDrivetrain implementation."""

    def test_turn_completes_after_ticks(self, gyro):
        drive = MockDrivetrain(turn_ticks=3, gyro=gyro)
        drive.begin_turn_to(0.0)

        drive.track_turn()
        drive.track_turn()
        assert not drive.is_turn_complete()
        drive.track_turn()
        assert drive.is_turn_complete()
        assert drive.heading_deg == 0.0
        assert gyro.yaw() == pytest.approx(90.0)

    def test_no_turn_requested(self):
        drive = MockDrivetrain()
        drive.track_turn()
        assert not drive.is_turn_complete()

    def test_heading_follows_gyro(self):
        drive = MockDrivetrain(gyro=MockGyro(yaw=90.0))
        assert drive.heading_deg == pytest.approx(0.0)
        assert MockDrivetrain().heading_deg == 90.0

    def test_straight_drive_integrates_distance(self):
        drive = MockDrivetrain(distance_per_power=2.0, deadband_power=0.3)
        drive.zero_distance()
        drive.begin_straight_drive()
        drive.drive_at_power(0.5)
        drive.drive_at_power(0.5)

        assert drive.traveled_distance() == pytest.approx(0.8)
        assert drive.position.is_close(Vector(0.0, 0.8))
        assert drive.current_power() == 0.5

    def test_deadband_stalls(self):
        drive = MockDrivetrain(distance_per_power=2.0, deadband_power=0.3)
        drive.begin_straight_drive()
        drive.drive_at_power(0.2)
        assert drive.traveled_distance() == 0.0

    def test_power_outside_straight_mode_ignored(self, caplog):
        drive = MockDrivetrain(deadband_power=0.0)
        with caplog.at_level("WARNING"):
            drive.drive_at_power(0.5)
        assert drive.traveled_distance() == 0.0
        assert "outside drive-straight mode" in caplog.text

    def test_end_straight_drive_stops(self):
        drive = MockDrivetrain()
        drive.begin_straight_drive()
        drive.drive_at_power(0.6)
        drive.end_straight_drive()

        assert drive.current_power() == 0.0
        assert not drive.straight_mode
        assert drive.get_command_history() == ["STRAIGHT", "PWR,0.600", "STOP"]

    def test_zero_distance(self):
        drive = MockDrivetrain(deadband_power=0.0)
        drive.begin_straight_drive()
        drive.drive_at_power(1.0)
        drive.zero_distance()
        assert drive.traveled_distance() == 0.0

    def test_clear_history(self):
        drive = MockDrivetrain()
        drive.begin_turn_to(45.0)
        drive.clear_command_history()
        assert drive.get_command_history() == []


class TestMockGyro:
    """Test orientation sources."""

    def test_heading_vector(self, gyro):
        assert gyro.current_heading().is_close(Vector(0.0, 1.0))
        gyro.set_yaw(-90.0)
        assert gyro.current_heading().is_close(Vector(-1.0, 0.0))

    def test_default_linear_accel(self):
        class FixedYaw(OrientationBase):
            def yaw(self):
                return 0.0

        assert FixedYaw().world_linear_accel() == (0.0, 0.0)

    def test_set_linear_accel(self, gyro):
        gyro.set_linear_accel(0.1, -0.2)
        assert gyro.world_linear_accel() == (0.1, -0.2)


class TestMockVisionSensor:
    """Test the vision distance model and mode control."""

    def test_distance_at_45_degrees(self, vision):
        """Camera tilted 20 deg, target 25 deg above crosshair: 18 units away."""
        vision.set_reading(True, tx=0.0, ty=25.0)
        assert vision.distance(28.5) == pytest.approx(18.0)

    def test_distance_requires_target(self, vision):
        vision.set_reading(False, tx=0.0, ty=25.0)
        with pytest.raises(GeometryError):
            vision.distance(28.5)

    @pytest.mark.parametrize("ty", [-20.0, -25.0])
    def test_distance_at_or_below_horizon(self, vision, ty):
        vision.set_reading(True, tx=0.0, ty=ty)
        with pytest.raises(GeometryError):
            vision.distance(28.5)

    def test_geometry_error_is_value_error(self, vision):
        with pytest.raises(ValueError):
            vision.distance(28.5)

    def test_sighting_vector_straight_ahead(self, vision):
        vision.set_reading(True, tx=0.0, ty=25.0)
        sighting = vision.sighting_vector(Vector(0.0, 1.0), 28.5)
        assert sighting.is_close(Vector(0.0, 18.0))

    def test_positive_tx_is_clockwise(self, vision):
        vision.set_reading(True, tx=10.0, ty=25.0)
        sighting = vision.sighting_vector(Vector(0.0, 1.0), 28.5)
        assert sighting.theta == pytest.approx(math.radians(80.0))
        assert sighting.x > 0

    def test_lateral_offset(self, vision):
        assert vision.lateral_offset_vector(Vector(0.0, 1.0)).is_close(Vector(7.0, 0.0))

    def test_detection_and_normal_modes(self):
        vision = MockVisionSensor(VisionConfig(vision_pipeline=2, drive_pipeline=5))

        vision.enter_detection_mode()
        assert vision.led_mode == LightMode.ON
        assert vision.camera_mode == CameraMode.VISION
        assert vision.pipeline == 2
        assert vision.in_detection_mode

        vision.enter_normal_mode()
        assert vision.led_mode == LightMode.OFF
        assert vision.camera_mode == CameraMode.DRIVER
        assert vision.pipeline == 5
        assert not vision.in_detection_mode

    def test_status(self, vision):
        vision.set_reading(True, tx=1.5, ty=2.5)
        status = vision.status()
        assert status['tv'] is True
        assert status['tx'] == 1.5
        assert status['camera_mode'] == 'DRIVER'

    def test_clear_target(self, vision):
        vision.set_reading(True, tx=1.0, ty=2.0)
        vision.clear_target()
        assert not vision.has_target()


class TestObserve:
    """Test readings derived from a simulated target."""

    def test_hidden_outside_detection_mode(self, vision):
        assert not vision.observe(Vector(0.0, 0.0), Vector(0.0, 1.0), Vector(0.0, 18.0), 28.5)
        assert not vision.has_target()

    def test_target_ahead(self, vision):
        vision.enter_detection_mode()
        assert vision.observe(Vector(0.0, 0.0), Vector(0.0, 1.0), Vector(0.0, 18.0), 28.5)
        assert vision.tx() == pytest.approx(0.0)
        assert vision.ty() == pytest.approx(25.0)

    def test_target_outside_fov(self, vision):
        vision.enter_detection_mode()
        assert not vision.observe(Vector(0.0, 0.0), Vector(0.0, 1.0), Vector(100.0, 1.0), 28.5)

    def test_observe_inverts_sighting(self, vision):
        """Readings from observe() reproduce the lens-to-target vector."""
        vision.enter_detection_mode()
        rng = np.random.default_rng(7)
        for _ in range(100):
            lens = Vector(float(rng.uniform(-50, 50)), float(rng.uniform(-50, 50)))
            heading = Vector.make_polar(1.0, float(rng.uniform(-math.pi, math.pi)))
            bearing = heading.theta + math.radians(float(rng.uniform(-25.0, 25.0)))
            target = lens + Vector.make_polar(float(rng.uniform(10.0, 150.0)), bearing)

            assert vision.observe(lens, heading, target, 28.5)
            sighting = vision.sighting_vector(heading, 28.5)
            assert sighting.is_close(target - lens, tol=1e-6)


class TestCollisionDetectors:
    """Test collision hooks and the factory."""

    def test_null_detector(self):
        detector = NullCollisionDetector()
        assert not detector.check()
        assert not detector.collision_detected

    def test_first_check_sets_baseline(self, gyro):
        gyro.set_linear_accel(3.0, 0.0)
        detector = JerkCollisionDetector(gyro, jerk_threshold=0.5)
        assert not detector.check()

    def test_jerk_spike_latches(self, gyro):
        detector = JerkCollisionDetector(gyro, jerk_threshold=0.5)
        detector.check()
        gyro.set_linear_accel(0.3, 0.0)
        assert not detector.check()
        gyro.set_linear_accel(0.3, 1.4)
        assert detector.check()

        gyro.set_linear_accel(0.3, 1.4)
        assert detector.check()
        assert detector.collision_detected

        detector.reinitialize_baseline()
        assert not detector.collision_detected
        assert not detector.check()

    def test_factory(self, gyro):
        assert isinstance(create_collision_detector(gyro), JerkCollisionDetector)
        assert isinstance(
            create_collision_detector(gyro, CollisionConfig(detector_type='none')),
            NullCollisionDetector,
        )
        assert isinstance(
            create_collision_detector(gyro, CollisionConfig(detector_type='Null')),
            NullCollisionDetector,
        )
        detector = create_collision_detector(gyro, CollisionConfig(jerk_threshold=1.5))
        assert detector.jerk_threshold == 1.5

    def test_factory_rejects_unknown(self, gyro):
        with pytest.raises(ValueError):
            create_collision_detector(gyro, CollisionConfig(detector_type='lidar'))
