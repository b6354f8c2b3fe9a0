"""
Hardware Module
===============

Narrow contracts for the collaborators the navigation core drives, each
with a mock implementation for tests and simulation:
- Drivetrain (turn-to-angle, drive-straight, encoder distance)
- Vision sensor (target readings, mode control)
- Orientation source (gyro yaw)
- Collision hook
"""

from .drivetrain import DrivetrainBase, MockDrivetrain
from .orientation import OrientationBase, MockGyro
from .vision import VisionSensorBase, MockVisionSensor, LightMode, CameraMode
from .collision import (
    CollisionDetectorBase,
    NullCollisionDetector,
    JerkCollisionDetector,
    create_collision_detector,
)

__all__ = [
    'DrivetrainBase',
    'MockDrivetrain',
    'OrientationBase',
    'MockGyro',
    'VisionSensorBase',
    'MockVisionSensor',
    'LightMode',
    'CameraMode',
    'CollisionDetectorBase',
    'NullCollisionDetector',
    'JerkCollisionDetector',
    'create_collision_detector',
]
