"""
Routes
======

A route is an ordered list of legs (vectors) plus a cursor marking the leg
currently being driven. Each leg is driven as turn-to-angle, then
drive-straight for its length.

Route sources own a Route and decide what goes in it:
    - FixedRoute:          a preset list of legs (bench and field testing)
    - VisionDockingRoute:  legs computed from a vision sighting
                           (see nav.acquisition.TargetAcquisitionOrchestrator)
"""

import logging
import math
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from ..core.errors import InvalidState
from ..core.events import EventType, get_event_bus
from ..geometry.vector import Vector

logger = logging.getLogger(__name__)


class Route:
    """Ordered legs with a monotonic cursor.

    Invariants: ``0 <= cursor <= len(legs)``; the route is active iff legs
    are set and the cursor has not run off the end.
    """

    def __init__(self):
        self._legs: Optional[List[Vector]] = None
        self._cursor = 0

    @property
    def legs(self) -> Optional[List[Vector]]:
        return None if self._legs is None else list(self._legs)

    @property
    def cursor(self) -> int:
        return self._cursor

    def set_route(self, legs: Sequence[Vector]) -> None:
        """Install a new list of legs and rewind the cursor."""
        self._legs = list(legs)
        self._cursor = 0

    def is_active(self) -> bool:
        return self._legs is not None and self._cursor < len(self._legs)

    def get_current(self) -> Vector:
        """Leg at the cursor.

        Raises:
            InvalidState: if no route is set or it has been fully driven.
        """
        if not self.is_active():
            raise InvalidState("No current drive vector")
        return self._legs[self._cursor]

    def current_angle(self) -> float:
        """Angle (radians) of the current leg. Raises InvalidState if none."""
        return self.get_current().theta

    def current_distance(self) -> float:
        """Length of the current leg. Raises InvalidState if none."""
        return self.get_current().r

    def advance(self) -> None:
        """Move to the next leg; no-op once inactive or when unset."""
        if self._legs is not None and self._cursor < len(self._legs):
            self._cursor += 1

    def reset(self) -> None:
        self._legs = None
        self._cursor = 0

    def __len__(self) -> int:
        return 0 if self._legs is None else len(self._legs)

    def __repr__(self) -> str:
        return f"Route(legs={len(self)}, cursor={self._cursor}, active={self.is_active()})"


class RouteSource(ABC):
    """Something that produces a Route for a RouteDriver to drain."""

    name = "route"

    def __init__(self):
        self.route = Route()

    @abstractmethod
    def prepare(self) -> None:
        """Populate the route with legs to drive."""

    def is_active(self) -> bool:
        return self.route.is_active()

    def current_leg(self) -> Vector:
        return self.route.get_current()

    def advance(self) -> None:
        if not self.route.is_active():
            return
        self.route.advance()
        bus = get_event_bus()
        if self.route.is_active():
            bus.emit(EventType.ROUTE_ADVANCED, source=self.name, cursor=self.route.cursor)
        else:
            bus.emit(EventType.ROUTE_COMPLETED, source=self.name, legs=len(self.route))

    def reset(self) -> None:
        was_active = self.route.is_active()
        self.route.reset()
        if was_active:
            logger.info(f"{self.name}: route cancelled")
            get_event_bus().emit(EventType.ROUTE_CANCELLED, source=self.name)


class FixedRoute(RouteSource):
    """Route source with a preset list of legs.

    The default is an out-and-back test route: 48 units along +Y, then
    48 units back along -Y.
    """

    name = "fixed_route"

    def __init__(self, legs: Optional[Sequence[Vector]] = None):
        super().__init__()
        if legs is None:
            legs = [
                Vector.make_polar(48.0, math.pi / 2.0),
                Vector.make_polar(48.0, -math.pi / 2.0),
            ]
        self._preset = list(legs)

    def prepare(self) -> None:
        self.route.set_route(self._preset)
        logger.info(f"{self.name}: installed {len(self._preset)} legs")
        get_event_bus().emit(EventType.ROUTE_BUILT, source=self.name, legs=list(self._preset))
