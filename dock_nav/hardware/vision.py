"""
Vision Sensor
=============

Camera-based target sensor. Concrete sensors only supply raw readings
(target valid flag, horizontal and vertical crosshair offsets) and mode
controls; the base class turns those into field-relative vectors.

Distance model (fixed-height camera tilted up from horizontal):
    distance = (target_height - mount_height) / tan(mount_angle + ty)

The formula degrades as the target and camera heights converge or as the
total angle approaches 90 degrees.
"""

import logging
import math
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Optional

from ..core.config import VisionConfig
from ..core.errors import GeometryError
from ..geometry.docking import sensor_to_center_vector
from ..geometry.heading import wrap_degrees
from ..geometry.vector import Vector

logger = logging.getLogger(__name__)


class LightMode(Enum):
    DEFAULT = 0
    OFF = 1
    BLINK = 2
    ON = 3


class CameraMode(Enum):
    VISION = 0
    DRIVER = 1


class VisionSensorBase(ABC):
    """Abstract vision sensor.

    Args:
        config: Mounting geometry and pipeline numbers.
    """

    def __init__(self, config: Optional[VisionConfig] = None):
        self.config = config or VisionConfig()

    @abstractmethod
    def has_target(self) -> bool:
        pass

    @abstractmethod
    def tx(self) -> float:
        """Horizontal offset from crosshair to target, degrees (+ = right)."""

    @abstractmethod
    def ty(self) -> float:
        """Vertical offset from crosshair to target, degrees (+ = up)."""

    @abstractmethod
    def set_led_mode(self, mode: LightMode) -> None:
        pass

    @abstractmethod
    def set_camera_mode(self, mode: CameraMode) -> None:
        pass

    @abstractmethod
    def set_pipeline(self, number: int) -> None:
        pass

    def distance(self, target_height: float) -> float:
        """Floor distance from the lens to the target.

        Raises:
            GeometryError: no target in view, or target at/below the horizon.
        """
        if not self.has_target():
            raise GeometryError("No target in view")
        central_y = self.ty()
        logger.debug(f"Target vertical angle: {central_y:.2f}")
        if central_y <= -self.config.angle_from_horizontal:
            raise GeometryError("Target is at or below the horizon; can't compute distance")
        angle = math.radians(central_y + self.config.angle_from_horizontal)
        return (target_height - self.config.mount_height) / math.tan(angle)

    def sighting_vector(self, heading: Vector, target_height: float) -> Vector:
        """Field-relative vector from the lens to the target.

        The bearing is the robot heading minus tx, since field angles run
        counter-clockwise and tx runs clockwise.
        """
        central_x = self.tx()
        target_distance = self.distance(target_height)
        logger.debug(f"Target horizontal angle {central_x:.2f}, distance {target_distance:.2f}")
        return Vector.make_polar(target_distance, heading.theta - math.radians(central_x))

    def lateral_offset_vector(self, heading: Vector) -> Vector:
        """Field-relative vector from the lens to the robot center."""
        return sensor_to_center_vector(heading, self.config.offset_from_center)

    def enter_detection_mode(self) -> None:
        self.set_led_mode(LightMode.ON)
        self.set_camera_mode(CameraMode.VISION)
        self.set_pipeline(self.config.vision_pipeline)

    def enter_normal_mode(self) -> None:
        self.set_led_mode(LightMode.OFF)
        self.set_camera_mode(CameraMode.DRIVER)
        self.set_pipeline(self.config.drive_pipeline)


class MockVisionSensor(VisionSensorBase):
    """Mock vision sensor with settable readings.

    Readings can be set directly with set_reading(), or derived from a
    simulated target position with observe().
    """

    def __init__(self, config: Optional[VisionConfig] = None):
        super().__init__(config)
        self._tv = False
        self._tx = 0.0
        self._ty = 0.0
        self.led_mode = LightMode.OFF
        self.camera_mode = CameraMode.DRIVER
        self.pipeline = self.config.drive_pipeline

    def has_target(self) -> bool:
        return self._tv

    def tx(self) -> float:
        return self._tx

    def ty(self) -> float:
        return self._ty

    def set_led_mode(self, mode: LightMode) -> None:
        self.led_mode = mode

    def set_camera_mode(self, mode: CameraMode) -> None:
        self.camera_mode = mode

    def set_pipeline(self, number: int) -> None:
        self.pipeline = number

    @property
    def in_detection_mode(self) -> bool:
        return self.camera_mode == CameraMode.VISION

    def set_reading(self, tv: bool, tx: float = 0.0, ty: float = 0.0) -> None:
        self._tv = tv
        self._tx = tx
        self._ty = ty

    def clear_target(self) -> None:
        self._tv = False

    def observe(
        self,
        lens_position: Vector,
        heading: Vector,
        target_position: Vector,
        target_height: float,
    ) -> bool:
        """Derive readings for a target at a field position.

        The target is reported only while in detection mode and inside the
        horizontal field of view.

        Returns:
            True if the target is visible.
        """
        to_target = target_position - lens_position
        if to_target.r == 0:
            self._tv = False
            return False
        central_x = wrap_degrees(math.degrees(heading.theta - to_target.theta))
        elevation = math.degrees(math.atan2(target_height - self.config.mount_height, to_target.r))
        visible = self.in_detection_mode and abs(central_x) <= self.config.horizontal_fov / 2.0
        self.set_reading(visible, central_x, elevation - self.config.angle_from_horizontal)
        return visible

    def status(self) -> Dict[str, object]:
        return {
            'tv': self._tv,
            'tx': self._tx,
            'ty': self._ty,
            'led_mode': self.led_mode.name,
            'camera_mode': self.camera_mode.name,
            'pipeline': self.pipeline,
        }
