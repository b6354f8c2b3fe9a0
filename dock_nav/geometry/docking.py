"""
Docking Geometry
================

Turns a sensor-relative target sighting into a two-leg route anchored at
the robot's rotational center.

The vision sensor is mounted off-center, so the sighting is first shifted
to the robot center. The route then ends with a fixed-length final leg
along the approach direction, which means the robot always drives the
last ``standoff_distance`` units straight into the target face no matter
where it started.

Usage:
    sensor_to_center = sensor_to_center_vector(heading, lateral_offset=-7.0)
    legs = build_docking_route(sighting, sensor_to_center, approach, 12.0)
"""

from typing import List

from .vector import Vector


def build_docking_route(
    target_from_sensor: Vector,
    sensor_to_center: Vector,
    approach_direction: Vector,
    standoff_distance: float,
) -> List[Vector]:
    """Build the [transit, final approach] legs to a target.

    Args:
        target_from_sensor: Field-relative vector from the sensor to the target.
        sensor_to_center: Field-relative vector from the sensor to the robot
            center.
        approach_direction: Unit vector giving the direction of travel for the
            final leg.
        standoff_distance: Length of the final leg. Must not exceed the
            distance from the robot center to the target for the route to
            make physical sense; this is not checked here.

    Returns:
        Two legs whose Cartesian sum is the center-to-target vector.
    """
    target_from_center = target_from_sensor - sensor_to_center
    approach_offset = approach_direction * standoff_distance
    transit = target_from_center - approach_offset
    return [transit, approach_offset]


def sensor_to_center_vector(robot_heading: Vector, lateral_offset: float) -> Vector:
    """Vector from an off-center sensor to the robot center.

    Always perpendicular to the heading. ``lateral_offset`` is the sensor's
    offset from center, positive to the right.
    """
    return robot_heading.normal() * -lateral_offset
