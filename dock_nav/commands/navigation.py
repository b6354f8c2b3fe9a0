"""Commands for finding a target and driving routes."""

import logging
import time
from typing import Callable, Optional

from ..core.errors import GeometryError
from ..core.events import EventType, get_event_bus
from ..nav.acquisition import TargetAcquisitionOrchestrator
from ..nav.route_driver import RouteDriver
from .base import Command, SequentialCommandGroup

logger = logging.getLogger(__name__)


class GetRouteToTarget(Command):
    """Search for a target and build the docking route to it.

    Finishes as soon as a route is built, or when the search times out.
    A sighting whose distance cannot be computed is retried next period.
    """

    def __init__(
        self,
        acquisition: TargetAcquisitionOrchestrator,
        target_height: Optional[float] = None,
        standoff_distance: Optional[float] = None,
        timeout: Optional[float] = None,
        clock: Callable[[], float] = time.time,
    ):
        route_config = acquisition.route_config
        super().__init__(
            timeout=route_config.search_timeout if timeout is None else timeout,
            clock=clock,
        )
        self.acquisition = acquisition
        self.target_height = route_config.target_height if target_height is None else target_height
        self.standoff_distance = (
            route_config.standoff_distance if standoff_distance is None else standoff_distance
        )
        self._route_built = False

    @property
    def route_built(self) -> bool:
        return self._route_built

    def initialize(self) -> None:
        self._route_built = False
        self.acquisition.begin_search()

    def execute(self) -> None:
        if self._route_built or not self.acquisition.has_target():
            return
        try:
            self.acquisition.build_standard_route(self.target_height, self.standoff_distance)
        except GeometryError as e:
            logger.warning(f"Cannot build route to target yet: {e}")
            return
        self._route_built = True
        logger.info(f"Target: {self.acquisition.target_vector.to_polar_string()}")

    def is_finished(self) -> bool:
        if self._route_built:
            return True
        if self.is_timed_out():
            logger.warning("Timed out with no target seen")
            get_event_bus().emit(
                EventType.SEARCH_TIMED_OUT, source=self.name, timeout=self.timeout
            )
            return True
        return False

    def end(self) -> None:
        self.acquisition.end_search()

    def interrupted(self) -> None:
        self.acquisition.end_search()


class DriveRoute(Command):
    """Drive every leg of a route source.

    On a collision the drive is abandoned (executor and route reset) when
    ``abort_on_collision`` is set.
    """

    def __init__(self, driver: RouteDriver, abort_on_collision: bool = True, **kwargs):
        super().__init__(**kwargs)
        self.driver = driver
        self.abort_on_collision = abort_on_collision
        self._aborted = False

    @property
    def aborted(self) -> bool:
        return self._aborted

    def initialize(self) -> None:
        self._aborted = False
        self.driver.activate()

    def execute(self) -> None:
        self.driver.tick()
        if self.abort_on_collision and self.driver.collision_detected and not self._aborted:
            logger.warning("Collision detected; abandoning route")
            self._aborted = True
            self.driver.interrupt()

    def is_finished(self) -> bool:
        return self.driver.is_finished()

    def interrupted(self) -> None:
        self.driver.interrupt()


class DriveRouteToTarget(SequentialCommandGroup):
    """Find a target, then drive the docking route to it."""

    def __init__(
        self,
        acquisition: TargetAcquisitionOrchestrator,
        driver: RouteDriver,
        clock: Callable[[], float] = time.time,
    ):
        self.get_route = GetRouteToTarget(acquisition, clock=clock)
        self.drive_route = DriveRoute(driver, clock=clock)
        super().__init__([self.get_route, self.drive_route], clock=clock)
