"""
Target Acquisition
==================

Finds a target with the vision sensor and turns the sighting into a
two-leg docking route: a transit leg to an approach point, then a fixed
standoff leg driven straight into the target face.
"""

import logging
from typing import Optional

from ..core.config import RouteConfig
from ..core.events import EventType, get_event_bus
from ..geometry.docking import build_docking_route
from ..geometry.target_normals import TargetNormalMapper
from ..geometry.vector import Vector
from ..hardware.orientation import OrientationBase
from ..hardware.vision import VisionSensorBase
from .route import RouteSource

logger = logging.getLogger(__name__)


class TargetAcquisitionOrchestrator(RouteSource):
    """Vision-based route source.

    Args:
        vision: Vision sensor used to find the target.
        orientation: Gyro giving the robot's field heading.
        normal_mapper: Picks the approach direction for the target face.
        route_config: Default target height and standoff distance.
    """

    name = "vision_docking_route"

    def __init__(
        self,
        vision: VisionSensorBase,
        orientation: OrientationBase,
        normal_mapper: Optional[TargetNormalMapper] = None,
        route_config: Optional[RouteConfig] = None,
    ):
        super().__init__()
        self._vision = vision
        self._orientation = orientation
        self.route_config = route_config or RouteConfig()
        self._normals = normal_mapper or TargetNormalMapper(self.route_config.target_face_yaws)
        self._target_vector: Optional[Vector] = None

    @property
    def target_vector(self) -> Optional[Vector]:
        """Last sighting (sensor to target), kept while the route is live."""
        return self._target_vector

    def begin_search(self) -> None:
        """Put the vision sensor into target detection mode."""
        self._vision.enter_detection_mode()
        get_event_bus().emit(EventType.SEARCH_STARTED, source=self.name)

    def has_target(self) -> bool:
        return self._vision.has_target()

    def build_standard_route(self, target_height: float, standoff_distance: float) -> None:
        """Compute and install the route to the target currently in view.

        Call only when has_target() is true.

        Raises:
            GeometryError: from the vision sensor, if the target distance
                cannot be computed.
        """
        heading = self._orientation.current_heading()
        sighting = self._vision.sighting_vector(heading, target_height)
        sensor_to_center = self._vision.lateral_offset_vector(heading)
        approach = self._normals.approach_direction(self._orientation.yaw())

        legs = build_docking_route(sighting, sensor_to_center, approach, standoff_distance)
        self.route.set_route(legs)
        self._target_vector = sighting

        logger.info(
            f"Route to target {sighting.to_polar_string()}: "
            + ", ".join(leg.to_polar_string() for leg in legs)
        )
        bus = get_event_bus()
        bus.emit(EventType.TARGET_SIGHTED, source=self.name, sighting=sighting)
        bus.emit(EventType.ROUTE_BUILT, source=self.name, legs=legs)

    def prepare(self) -> None:
        self.build_standard_route(
            self.route_config.target_height, self.route_config.standoff_distance
        )

    def advance(self) -> None:
        super().advance()
        if not self.route.is_active():
            self._target_vector = None

    def end_search(self) -> None:
        """Return the vision sensor to normal driving mode. Keeps the route."""
        self._vision.enter_normal_mode()
        get_event_bus().emit(EventType.SEARCH_ENDED, source=self.name)

    def reset(self) -> None:
        super().reset()
        self._target_vector = None


VisionDockingRoute = TargetAcquisitionOrchestrator
