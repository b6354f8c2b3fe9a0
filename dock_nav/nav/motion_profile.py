"""
Motion Profile Planning
=======================

Sizes the trapezoidal (or triangular) speed ramp for one straight leg.

Sizing is done in the velocity domain: the calibration says how much the
robot's speed rises per control step and how long a step lasts, which gives
the distance covered while ramping. Execution happens in the power domain
(see nav.executor); the two are assumed to have been calibrated against
each other on the real drivetrain.
"""

import logging
import math
from dataclasses import dataclass

from ..core.config import CalibrationConfig

logger = logging.getLogger(__name__)

MAX_POWER = 1.0


@dataclass(frozen=True)
class CalibrationModel:
    """Drivetrain calibration constants.

    Attributes:
        max_velocity: Highest velocity a leg may be driven at (units/s).
        velocity_per_step: Velocity gained per acceleration step (units/s).
        sec_per_step: Duration of one control step (s).
        start_power: Motor power on the first acceleration step.
        power_per_step: Motor power change per ramp step.
    """
    max_velocity: float = 60.0
    velocity_per_step: float = 1.0
    sec_per_step: float = 0.02
    start_power: float = 0.3
    power_per_step: float = 0.01

    @classmethod
    def from_config(cls, config: CalibrationConfig) -> 'CalibrationModel':
        return cls(
            max_velocity=config.max_velocity,
            velocity_per_step=config.velocity_per_step,
            sec_per_step=config.sec_per_step,
            start_power=config.start_power,
            power_per_step=config.power_per_step,
        )

    @property
    def decel_floor_power(self) -> float:
        """Lowest power the deceleration ramp goes down to."""
        return self.start_power + self.power_per_step

    def accepts_velocity(self, max_vel: float) -> bool:
        return 0 < max_vel <= self.max_velocity

    def accel_distance(self, steps: int) -> float:
        """Distance covered while ramping up through ``steps`` steps.

        Step i runs at i * velocity_per_step for sec_per_step seconds.
        """
        return self.velocity_per_step * self.sec_per_step * steps * (steps + 1) / 2.0

    def accel_steps(self, distance: float) -> int:
        """Largest step count whose ramp fits within ``distance``."""
        if distance <= 0:
            return 0
        per_step = self.velocity_per_step * self.sec_per_step
        steps = int((math.sqrt(1.0 + 8.0 * distance / per_step) - 1.0) / 2.0)
        # Float error can leave the closed form one step off either way
        while self.accel_distance(steps + 1) <= distance + 1e-12:
            steps += 1
        while steps > 0 and self.accel_distance(steps) > distance + 1e-12:
            steps -= 1
        return steps


@dataclass(frozen=True)
class ProfilePlan:
    """Step counts and distances for one leg."""
    total_distance: float
    accel_steps: int
    accel_distance: float
    run_velocity: float
    run_distance: float
    run_steps: int
    triangular: bool


def plan_profile(total_distance: float, max_vel: float, calibration: CalibrationModel) -> ProfilePlan:
    """Size the ramp for a straight leg.

    The robot accelerates for ``accel_steps`` steps, cruises for
    ``run_steps`` steps and then decelerates until the encoders report the
    full distance. When the leg is too short to reach ``max_vel`` and come
    back down, the profile is triangular: the ramp is resized to fit half
    the leg and there is no cruise phase.

    Raises:
        ValueError: if max_vel is not in (0, calibration.max_velocity].
    """
    if not calibration.accepts_velocity(max_vel):
        raise ValueError(
            f"Velocity {max_vel} outside (0, {calibration.max_velocity}]"
        )

    accel_steps = int(math.ceil(max_vel / calibration.velocity_per_step))
    accel_distance = calibration.accel_distance(accel_steps)

    triangular = 2.0 * accel_distance >= total_distance
    if triangular:
        # Resize the ramp to half the leg, then re-derive the distance
        # from the whole-step count
        accel_distance = math.floor(total_distance / 2.0)
        accel_steps = calibration.accel_steps(accel_distance)
        accel_distance = calibration.accel_distance(accel_steps)

    run_velocity = accel_steps * calibration.velocity_per_step
    run_distance = total_distance - 2.0 * accel_distance
    if triangular or run_velocity <= 0:
        run_steps = 0
    else:
        run_time = run_distance / run_velocity
        run_steps = max(0, int(math.floor(run_time / calibration.sec_per_step)))

    plan = ProfilePlan(
        total_distance=total_distance,
        accel_steps=accel_steps,
        accel_distance=accel_distance,
        run_velocity=run_velocity,
        run_distance=run_distance,
        run_steps=run_steps,
        triangular=triangular,
    )
    logger.debug(
        f"Profile: triangular={triangular} accel_steps={accel_steps} "
        f"accel_dist={accel_distance:.3f} run_dist={run_distance:.3f} run_steps={run_steps}"
    )
    return plan
