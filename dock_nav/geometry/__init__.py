"""Geometry package - vectors, heading conversions and docking routes."""

from .vector import Vector
from .heading import wrap_degrees, yaw_to_field_angle, field_angle_to_yaw, yaw_to_vector
from .docking import build_docking_route, sensor_to_center_vector
from .target_normals import TargetNormalMapper, DEFAULT_FACE_YAWS

__all__ = [
    'Vector',
    'wrap_degrees',
    'yaw_to_field_angle',
    'field_angle_to_yaw',
    'yaw_to_vector',
    'build_docking_route',
    'sensor_to_center_vector',
    'TargetNormalMapper',
    'DEFAULT_FACE_YAWS',
]
