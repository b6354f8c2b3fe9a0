"""
Executor Tests
==============

Unit tests for the turn-then-drive motion profile state machine.
"""

import math
import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from dock_nav.core.events import EventType
from dock_nav.geometry.vector import Vector
from dock_nav.hardware import JerkCollisionDetector
from dock_nav.nav import CalibrationModel, MotionPhase, MotionProfileExecutor


def power_commands(drivetrain):
    return [float(c.split(",")[1]) for c in drivetrain.get_command_history() if c.startswith("PWR")]


@pytest.fixture
def leg():
    return Vector.make_polar(10.0, math.pi / 2)


class TestPhases:
    """Test phase sequencing for a full leg."""

    def test_initial_state(self, executor):
        assert executor.is_done()
        assert executor.phase == MotionPhase.DONE
        assert executor.active_vector is None

    def test_start_begins_turn(self, executor, drivetrain, leg, event_bus):
        executor.start(leg, 4.0)
        assert executor.phase == MotionPhase.TURN
        assert executor.active_vector == leg
        assert drivetrain.get_command_history() == ["TURN,90.00"]
        assert len(event_bus.get_history(EventType.LEG_STARTED)) == 1

    def test_turn_angle_in_degrees(self, executor, drivetrain):
        executor.start(Vector(-3.0, 0.0), 4.0)
        assert drivetrain.get_command_history() == ["TURN,180.00"]

    def test_full_phase_sequence(self, executor, leg, run_until_done):
        executor.start(leg, 4.0)
        run_until_done(executor)
        assert executor.get_phase_history() == [
            MotionPhase.TURN,
            MotionPhase.INIT_DRIVE,
            MotionPhase.ACCEL,
            MotionPhase.RUN,
            MotionPhase.DECEL,
            MotionPhase.DONE,
        ]

    def test_init_drive_sizes_ramp(self, executor, drivetrain, leg):
        executor.start(leg, 4.0)
        executor.tick()
        assert executor.phase == MotionPhase.INIT_DRIVE
        executor.tick()
        assert executor.phase == MotionPhase.ACCEL
        assert executor.accel_steps == 8
        assert executor.run_steps in (115, 116)
        assert executor.plan.accel_distance == pytest.approx(0.36)
        assert drivetrain.straight_mode
        assert drivetrain.traveled_distance() == 0.0

    def test_leg_completes_at_full_distance(self, executor, drivetrain, leg, run_until_done, event_bus):
        executor.start(leg, 4.0)
        run_until_done(executor)
        assert drivetrain.traveled_distance() >= 10.0
        assert drivetrain.traveled_distance() < 10.1
        assert drivetrain.get_command_history()[-1] == "STOP"
        assert not drivetrain.straight_mode
        assert executor.active_vector is None

        completed = event_bus.get_history(EventType.LEG_COMPLETED)
        assert len(completed) == 1
        assert completed[0].data['vector'] == leg

    def test_zero_length_leg_finishes(self, executor, run_until_done):
        executor.start(Vector(0.0, 0.0), 4.0)
        ticks = run_until_done(executor, max_ticks=10)
        assert ticks <= 6

    def test_zero_length_leg_turns_to_its_angle(self, executor, drivetrain, run_until_done):
        executor.start(Vector.make_polar(0.0, math.pi), 4.0)
        assert drivetrain.get_command_history() == ["TURN,180.00"]
        run_until_done(executor, max_ticks=10)


class TestPowerRamp:
    """Test power commands across ACCEL, RUN and DECEL."""

    def test_accel_ramp_values(self, executor, drivetrain, leg):
        """First ramp step is start power plus one increment."""
        executor.start(leg, 4.0)
        for _ in range(2 + 8):
            executor.tick()
        assert executor.phase == MotionPhase.RUN
        assert executor.accel_step_count == 8
        expected = [0.35, 0.40, 0.45, 0.50, 0.55, 0.60, 0.65, 0.70]
        assert power_commands(drivetrain) == pytest.approx(expected)

    def test_run_holds_power(self, executor, drivetrain, leg):
        executor.start(leg, 4.0)
        for _ in range(2 + 8 + 20):
            executor.tick()
        assert executor.phase == MotionPhase.RUN
        assert executor.run_step_count == 20
        assert power_commands(drivetrain)[8:] == pytest.approx([0.70] * 20)

    def test_decel_stops_at_floor(self, executor, drivetrain, leg, run_until_done, calibration):
        executor.start(leg, 4.0)
        run_until_done(executor)
        powers = power_commands(drivetrain)
        assert min(powers) >= calibration.decel_floor_power - 1e-9
        assert powers[-1] == pytest.approx(calibration.decel_floor_power)
        assert powers[-2] == pytest.approx(calibration.decel_floor_power)

    def test_power_clamped_to_one(self, drivetrain, leg, run_until_done):
        cal = CalibrationModel(
            max_velocity=6.0, velocity_per_step=0.5, sec_per_step=0.02,
            start_power=0.9, power_per_step=0.05,
        )
        executor = MotionProfileExecutor(drivetrain, cal)
        executor.start(leg, 4.0)
        run_until_done(executor)
        powers = power_commands(drivetrain)
        assert max(powers) <= 1.0
        assert powers[:3] == pytest.approx([0.95, 1.0, 1.0])


class TestReset:
    """Test aborting a leg."""

    def test_reset_when_idle_is_noop(self, executor, drivetrain):
        executor.reset()
        executor.reset()
        assert executor.is_done()
        assert executor.active_vector is None
        assert executor.accel_step_count == 0
        assert executor.run_step_count == 0
        assert drivetrain.get_command_history() == []

    def test_reset_mid_accel_stops_drive(self, executor, drivetrain, leg, event_bus):
        executor.start(leg, 4.0)
        for _ in range(4):
            executor.tick()
        assert executor.phase == MotionPhase.ACCEL

        executor.reset()
        assert executor.is_done()
        assert executor.active_vector is None
        assert executor.accel_step_count == 0
        assert drivetrain.get_command_history()[-1] == "STOP"
        assert not drivetrain.straight_mode
        assert event_bus.get_history(EventType.LEG_COMPLETED) == []

        history_len = len(drivetrain.get_command_history())
        executor.reset()
        assert len(drivetrain.get_command_history()) == history_len

    def test_reset_during_turn(self, executor, drivetrain, leg):
        executor.start(leg, 4.0)
        executor.reset()
        assert executor.is_done()
        assert drivetrain.get_command_history() == ["TURN,90.00", "STOP"]

    def test_tick_after_reset_does_nothing(self, executor, drivetrain, leg):
        executor.start(leg, 4.0)
        executor.reset()
        drivetrain.clear_command_history()
        for _ in range(5):
            executor.tick()
        assert drivetrain.get_command_history() == []

    def test_restart_after_finish(self, executor, leg, run_until_done):
        executor.start(leg, 4.0)
        run_until_done(executor)
        executor.start(Vector.make_polar(5.0, 0.0), 3.0)
        assert executor.phase == MotionPhase.TURN
        run_until_done(executor)


class TestInvalidVelocity:
    """Test legs requested at an unusable velocity."""

    @pytest.mark.parametrize("max_vel", [0.0, -2.0, 7.0])
    def test_leg_skipped(self, executor, drivetrain, leg, max_vel, event_bus):
        executor.start(leg, max_vel)
        executor.tick()
        assert executor.phase == MotionPhase.INIT_DRIVE
        executor.tick()

        assert executor.is_done()
        assert executor.active_vector is None
        assert drivetrain.get_command_history() == ["TURN,90.00"]
        assert not drivetrain.straight_mode

        skipped = event_bus.get_history(EventType.LEG_SKIPPED)
        assert len(skipped) == 1
        assert "max velocity" in skipped[0].data['reason']
        assert event_bus.get_history(EventType.LEG_COMPLETED) == []

    def test_skip_is_logged(self, executor, leg, caplog):
        executor.start(leg, 0.0)
        with caplog.at_level("WARNING"):
            executor.tick()
            executor.tick()
        assert "skipping leg" in caplog.text


class TestCollision:
    """Test collision flagging during a leg."""

    def test_collision_flagged_without_abort(self, drivetrain, calibration, gyro, leg,
                                             run_until_done, event_bus):
        detector = JerkCollisionDetector(gyro, jerk_threshold=0.5)
        executor = MotionProfileExecutor(drivetrain, calibration, detector)
        executor.start(leg, 4.0)
        for _ in range(3):
            executor.tick()
        assert executor.phase == MotionPhase.ACCEL
        assert not executor.collision_detected

        gyro.set_linear_accel(2.0, 0.0)
        executor.tick()
        assert executor.collision_detected
        assert not executor.is_done()

        run_until_done(executor)
        assert drivetrain.traveled_distance() >= 10.0

        collisions = event_bus.get_history(EventType.COLLISION_DETECTED)
        assert len(collisions) == 1
        assert collisions[0].data['phase'] == "ACCEL"

    def test_next_leg_clears_flag(self, drivetrain, calibration, gyro, leg, run_until_done):
        detector = JerkCollisionDetector(gyro, jerk_threshold=0.5)
        executor = MotionProfileExecutor(drivetrain, calibration, detector)
        executor.start(leg, 4.0)
        for _ in range(3):
            executor.tick()
        gyro.set_linear_accel(2.0, 0.0)
        executor.tick()
        assert executor.collision_detected
        run_until_done(executor)

        executor.start(leg, 4.0)
        executor.tick()
        executor.tick()
        assert executor.phase == MotionPhase.ACCEL
        assert not executor.collision_detected

    def test_start_clears_flag(self, drivetrain, calibration, gyro, leg):
        """A flag left by an aborted leg does not carry into the next one."""
        detector = JerkCollisionDetector(gyro, jerk_threshold=0.5)
        executor = MotionProfileExecutor(drivetrain, calibration, detector)
        executor.start(leg, 4.0)
        for _ in range(3):
            executor.tick()
        gyro.set_linear_accel(2.0, 0.0)
        executor.tick()
        assert executor.collision_detected
        executor.reset()

        executor.start(leg, 4.0)
        assert not executor.collision_detected
        executor.tick()
        assert executor.phase == MotionPhase.INIT_DRIVE
        assert not executor.collision_detected
