"""Conversions between gyro yaw and field-relative angles.

The gyro reports yaw in degrees, positive clockwise, with 0 pointing along
the field Y axis. Field angles are degrees counter-clockwise from the field
X axis, in [-180, 180].
"""

import math

from .vector import Vector


def wrap_degrees(angle: float) -> float:
    """Wrap an angle in degrees into [-180, 180]."""
    if angle > 180.0:
        angle -= 360.0 * math.ceil((angle - 180.0) / 360.0)
    elif angle < -180.0:
        angle += 360.0 * math.ceil((-180.0 - angle) / 360.0)
    return angle


def yaw_to_field_angle(yaw: float) -> float:
    """Convert gyro yaw (degrees) to a field angle (degrees)."""
    return wrap_degrees(90.0 - yaw)


def field_angle_to_yaw(field_angle: float) -> float:
    """Inverse of yaw_to_field_angle."""
    return wrap_degrees(90.0 - field_angle)


def yaw_to_vector(yaw: float) -> Vector:
    """Field-relative unit vector for a gyro yaw."""
    return Vector.make_polar(1.0, math.radians(yaw_to_field_angle(yaw)))
