"""Map the robot's yaw to the approach direction of the nearest standard target.

Targets sit on faces at a small set of known field orientations. Each face
is described by the gyro yaw the robot has when driving squarely into it;
the approach direction for a docking route is the unit vector for that yaw.
"""

import logging
from typing import Iterable, List, Optional

from .heading import wrap_degrees, yaw_to_vector
from .vector import Vector

logger = logging.getLogger(__name__)

DEFAULT_FACE_YAWS = [0.0, 28.75, 90.0, 151.25, 180.0, -151.25, -90.0, -28.75]


class TargetNormalMapper:
    """Choose the standard target face the robot is most likely looking at."""

    def __init__(self, face_yaws: Optional[Iterable[float]] = None):
        yaws = list(face_yaws) if face_yaws is not None else list(DEFAULT_FACE_YAWS)
        if not yaws:
            raise ValueError("At least one target face yaw is required")
        self.face_yaws: List[float] = [wrap_degrees(y) for y in yaws]

    def nearest_face_yaw(self, robot_yaw: float) -> float:
        """Face yaw with the smallest angular distance to robot_yaw."""
        return min(self.face_yaws, key=lambda y: abs(wrap_degrees(y - robot_yaw)))

    def approach_direction(self, robot_yaw: float) -> Vector:
        """Unit vector along which the final docking leg is driven."""
        face_yaw = self.nearest_face_yaw(robot_yaw)
        logger.debug(f"Robot yaw {robot_yaw:.1f} -> target face yaw {face_yaw:.2f}")
        return yaw_to_vector(face_yaw)
