"""
Motion Profile Executor
=======================

Drives one leg of a route: turn to the leg's field angle, then drive
straight for its length under an open-loop power ramp.

Phases:
    TURN        keep the drivetrain's turn-to-angle controller running
    INIT_DRIVE  size the ramp (one tick), zero encoders, enter drive-straight
    ACCEL       raise power by power_per_step for accel_steps ticks
    RUN         hold power for run_steps ticks
    DECEL       lower power until the encoders report the full leg length
    DONE        idle

tick() makes one collision check and never blocks. Each ACCEL, RUN and
DECEL tick sets the drive power once; the tick that reaches the leg length
follows that power command with the stop. start() commands the next turn on
its own, so an owner that starts a new leg on the finishing tick adds a third.
Collisions are only reported; the owner decides whether to reset().
"""

import logging
import math
from enum import Enum, auto
from typing import Callable, Dict, List, Optional

from ..core.events import EventType, get_event_bus
from ..geometry.vector import Vector
from ..hardware.collision import CollisionDetectorBase, NullCollisionDetector
from ..hardware.drivetrain import DrivetrainBase
from .motion_profile import MAX_POWER, CalibrationModel, ProfilePlan, plan_profile

logger = logging.getLogger(__name__)


class MotionPhase(Enum):
    """Executor phases."""
    DONE = auto()
    TURN = auto()
    INIT_DRIVE = auto()
    ACCEL = auto()
    RUN = auto()
    DECEL = auto()


class MotionProfileExecutor:
    """
    Turn-then-drive state machine for a single vector.

    Usage:
        executor = MotionProfileExecutor(drivetrain, calibration, collision)
        executor.start(Vector.make_polar(48.0, math.pi / 2), max_vel=30.0)

        # Every scheduler tick:
        executor.tick()
        if executor.is_done():
            ...
    """

    name = "executor"

    def __init__(
        self,
        drivetrain: DrivetrainBase,
        calibration: Optional[CalibrationModel] = None,
        collision: Optional[CollisionDetectorBase] = None,
    ):
        self._drive = drivetrain
        self.calibration = calibration or CalibrationModel()
        self._collision = collision or NullCollisionDetector()

        self._phase = MotionPhase.DONE
        self._vector: Optional[Vector] = None
        self._max_vel = 0.0
        self._plan: Optional[ProfilePlan] = None
        self._accel_steps = 0
        self._run_steps = 0
        self._n_accel_steps = 0
        self._n_run_steps = 0
        self._collision_reported = False
        self._phase_history: List[MotionPhase] = []

        self._handlers: Dict[MotionPhase, Callable[[], None]] = {
            MotionPhase.DONE: lambda: None,
            MotionPhase.TURN: self._tick_turn,
            MotionPhase.INIT_DRIVE: self._tick_init_drive,
            MotionPhase.ACCEL: self._tick_accel,
            MotionPhase.RUN: self._tick_run,
            MotionPhase.DECEL: self._tick_decel,
        }

    # -- Introspection -----------------------------------------------------

    @property
    def phase(self) -> MotionPhase:
        return self._phase

    @property
    def active_vector(self) -> Optional[Vector]:
        return self._vector

    @property
    def plan(self) -> Optional[ProfilePlan]:
        """Ramp sizing for the current leg, once INIT_DRIVE has run."""
        return self._plan

    @property
    def accel_steps(self) -> int:
        return self._accel_steps

    @property
    def run_steps(self) -> int:
        return self._run_steps

    @property
    def accel_step_count(self) -> int:
        return self._n_accel_steps

    @property
    def run_step_count(self) -> int:
        return self._n_run_steps

    @property
    def collision_detected(self) -> bool:
        return self._collision.collision_detected

    def get_phase_history(self) -> List[MotionPhase]:
        return self._phase_history.copy()

    def is_done(self) -> bool:
        return self._phase == MotionPhase.DONE

    # -- Control -----------------------------------------------------------

    def start(self, vector: Vector, max_vel: float) -> None:
        """Begin driving a leg: turn to its angle, then drive its length."""
        self._vector = vector
        self._max_vel = max_vel
        self._plan = None
        self._collision.reinitialize_baseline()
        self._collision_reported = False
        self._transition_to(MotionPhase.TURN)
        self._drive.begin_turn_to(math.degrees(vector.theta))
        logger.info(f"Starting leg {vector.to_polar_string()} at max velocity {max_vel}")
        get_event_bus().emit(
            EventType.LEG_STARTED, source=self.name, vector=vector, max_vel=max_vel
        )

    def tick(self) -> None:
        """Advance the state machine by one control period."""
        if self._phase != MotionPhase.DONE:
            self._check_collision()
        self._handlers[self._phase]()

    def reset(self) -> None:
        """Abort the current leg from any phase. No effect when already done."""
        if self._phase == MotionPhase.DONE and self._vector is None:
            return
        logger.info(f"Executor reset during {self._phase.name}")
        self._finish()

    # -- Phase handlers ----------------------------------------------------

    def _tick_turn(self) -> None:
        self._drive.track_turn()
        if self._drive.is_turn_complete():
            self._transition_to(MotionPhase.INIT_DRIVE)

    def _tick_init_drive(self) -> None:
        if not self.calibration.accepts_velocity(self._max_vel):
            reason = (
                f"max velocity {self._max_vel} outside "
                f"(0, {self.calibration.max_velocity}]"
            )
            logger.warning(f"Drive straight for distance failed - {reason}; skipping leg")
            get_event_bus().emit(
                EventType.LEG_SKIPPED, source=self.name, vector=self._vector, reason=reason
            )
            self._clear()
            self._transition_to(MotionPhase.DONE)
            return

        self._plan = plan_profile(self._vector.r, self._max_vel, self.calibration)
        self._accel_steps = self._plan.accel_steps
        self._run_steps = self._plan.run_steps
        self._n_accel_steps = 0
        self._n_run_steps = 0

        self._collision.reinitialize_baseline()
        self._collision_reported = False
        self._drive.zero_distance()
        self._drive.begin_straight_drive()
        self._transition_to(MotionPhase.ACCEL)

    def _tick_accel(self) -> None:
        if self._n_accel_steps == 0:
            power = self.calibration.start_power
        else:
            power = self._drive.current_power()
        self._n_accel_steps += 1
        power = min(power + self.calibration.power_per_step, MAX_POWER)
        self._drive.drive_at_power(power)
        if self._n_accel_steps >= self._accel_steps:
            self._transition_to(MotionPhase.RUN)

    def _tick_run(self) -> None:
        power = self._drive.current_power()
        self._n_run_steps += 1
        self._drive.drive_at_power(power)
        if self._n_run_steps >= self._run_steps:
            self._transition_to(MotionPhase.DECEL)

    def _tick_decel(self) -> None:
        power = self._drive.current_power()
        floor = self.calibration.decel_floor_power
        if power > floor:
            power = max(power - self.calibration.power_per_step, floor)
        self._drive.drive_at_power(power)
        if self._drive.traveled_distance() >= self._vector.r:
            vector = self._vector
            self._finish()
            logger.info(f"Leg complete: {vector.to_polar_string()}")
            get_event_bus().emit(EventType.LEG_COMPLETED, source=self.name, vector=vector)

    # -- Helpers -----------------------------------------------------------

    def _check_collision(self) -> None:
        if self._collision.check() and not self._collision_reported:
            self._collision_reported = True
            get_event_bus().emit(
                EventType.COLLISION_DETECTED, source=self.name,
                phase=self._phase.name, vector=self._vector,
            )

    def _finish(self) -> None:
        """Leave drive-straight mode and return to DONE."""
        self._drive.end_straight_drive()
        self._clear()
        self._transition_to(MotionPhase.DONE)

    def _clear(self) -> None:
        self._vector = None
        self._accel_steps = 0
        self._run_steps = 0
        self._n_accel_steps = 0
        self._n_run_steps = 0

    def _transition_to(self, new_phase: MotionPhase) -> None:
        old_phase = self._phase
        self._phase = new_phase
        if old_phase == new_phase:
            return

        self._phase_history.append(new_phase)
        if len(self._phase_history) > 100:
            self._phase_history = self._phase_history[-50:]

        logger.debug(f"Phase transition: {old_phase.name} -> {new_phase.name}")
        get_event_bus().emit(
            EventType.PHASE_CHANGED, source=self.name,
            from_phase=old_phase, to_phase=new_phase,
        )
