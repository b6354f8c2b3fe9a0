"""
Drivetrain
==========

Actuator contract used by the motion profile executor, plus a mock that
integrates commanded power into traveled distance once per tick.

The real drivetrain runs its own turn-to-angle and drive-straight PID
loops; the executor only starts/stops those modes, sets the straight-line
power and reads back encoder distance.
"""

import logging
import math
from abc import ABC, abstractmethod
from typing import List, Optional

from ..geometry.heading import field_angle_to_yaw, yaw_to_field_angle
from ..geometry.vector import Vector

logger = logging.getLogger(__name__)


class DrivetrainBase(ABC):
    """Abstract drivetrain actuator.

    Turn angles are field angles in degrees, matching the orientation
    source's convention.
    """

    @abstractmethod
    def begin_turn_to(self, angle: float) -> None:
        """Start turning toward a field angle (degrees)."""

    @abstractmethod
    def track_turn(self) -> None:
        """Run one step of the turn-to-angle controller."""

    @abstractmethod
    def is_turn_complete(self) -> bool:
        pass

    @abstractmethod
    def begin_straight_drive(self) -> None:
        """Enter drive-straight mode, holding the current heading."""

    @abstractmethod
    def end_straight_drive(self) -> None:
        """Leave drive-straight mode and stop the motors."""

    @abstractmethod
    def drive_at_power(self, power: float) -> None:
        """Drive straight at a normalized motor power in [0, 1]."""

    @abstractmethod
    def current_power(self) -> float:
        """Last commanded straight-drive power."""

    @abstractmethod
    def zero_distance(self) -> None:
        """Reset the traveled distance accumulator (encoders)."""

    @abstractmethod
    def traveled_distance(self) -> float:
        """Distance traveled since the last zero_distance()."""


class MockDrivetrain(DrivetrainBase):
    """Simulated drivetrain for tests and the simulation node.

    Each drive_at_power() call is one tick and advances the robot by
    ``(power - deadband_power) * distance_per_power``, where the deadband
    is the power needed to overcome static friction. Turns complete after
    ``turn_ticks`` calls to track_turn(). When a gyro is attached its yaw
    follows the completed turn, and the robot's field position is tracked.
    """

    def __init__(
        self,
        turn_ticks: int = 10,
        distance_per_power: float = 2.0,
        deadband_power: float = 0.3,
        gyro=None,
        position: Optional[Vector] = None,
    ):
        self.turn_ticks = turn_ticks
        self.distance_per_power = distance_per_power
        self.deadband_power = deadband_power
        self.gyro = gyro
        self.position = position or Vector(0.0, 0.0)

        self._heading_deg = yaw_to_field_angle(gyro.yaw()) if gyro is not None else 90.0
        self._turn_target: Optional[float] = None
        self._turn_count = 0
        self._straight_mode = False
        self._power = 0.0
        self._distance = 0.0
        self._commands: List[str] = []

    @property
    def heading_deg(self) -> float:
        """Current field angle of the robot (degrees)."""
        return self._heading_deg

    @property
    def straight_mode(self) -> bool:
        return self._straight_mode

    def begin_turn_to(self, angle: float) -> None:
        self._commands.append(f"TURN,{angle:.2f}")
        self._turn_target = angle
        self._turn_count = 0

    def track_turn(self) -> None:
        if self._turn_target is None:
            return
        self._turn_count += 1
        if self._turn_count >= self.turn_ticks:
            self._heading_deg = self._turn_target
            if self.gyro is not None:
                self.gyro.set_yaw(field_angle_to_yaw(self._turn_target))

    def is_turn_complete(self) -> bool:
        return self._turn_target is not None and self._turn_count >= self.turn_ticks

    def begin_straight_drive(self) -> None:
        self._commands.append("STRAIGHT")
        self._straight_mode = True

    def end_straight_drive(self) -> None:
        self._commands.append("STOP")
        self._straight_mode = False
        self._power = 0.0

    def drive_at_power(self, power: float) -> None:
        self._commands.append(f"PWR,{power:.3f}")
        self._power = power
        if not self._straight_mode:
            logger.warning("Mock drivetrain: power command outside drive-straight mode")
            return
        step = max(0.0, power - self.deadband_power) * self.distance_per_power
        self._distance += step
        self.position = self.position + Vector.make_polar(step, math.radians(self._heading_deg))

    def current_power(self) -> float:
        return self._power

    def zero_distance(self) -> None:
        self._distance = 0.0

    def traveled_distance(self) -> float:
        return self._distance

    def get_command_history(self) -> List[str]:
        return self._commands.copy()

    def clear_command_history(self) -> None:
        self._commands.clear()
