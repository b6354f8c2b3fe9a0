"""Orientation source (gyro) contract and mock."""

import logging
from abc import ABC, abstractmethod
from typing import Tuple

from ..geometry.heading import yaw_to_vector
from ..geometry.vector import Vector

logger = logging.getLogger(__name__)


class OrientationBase(ABC):
    """Gyro-backed orientation source."""

    @abstractmethod
    def yaw(self) -> float:
        """Gyro yaw in degrees, positive clockwise, 0 along the field Y axis."""

    def current_heading(self) -> Vector:
        """Field-relative unit vector in the robot's current direction."""
        return yaw_to_vector(self.yaw())

    def world_linear_accel(self) -> Tuple[float, float]:
        """World-frame linear acceleration (x, y) in g.

        Single-axis gyros cannot measure this and report zeros.
        """
        return (0.0, 0.0)


class MockGyro(OrientationBase):
    """Mock gyro with directly settable yaw and acceleration."""

    def __init__(self, yaw: float = 0.0):
        self._yaw = yaw
        self._accel = (0.0, 0.0)

    def yaw(self) -> float:
        return self._yaw

    def set_yaw(self, yaw: float) -> None:
        self._yaw = yaw

    def set_linear_accel(self, ax: float, ay: float) -> None:
        self._accel = (ax, ay)

    def world_linear_accel(self) -> Tuple[float, float]:
        return self._accel
