"""Drain a route source into the motion profile executor, one leg at a time."""

import logging

from .executor import MotionProfileExecutor
from .route import RouteSource

logger = logging.getLogger(__name__)


class RouteDriver:
    """Pairs a route source with an executor.

    The driver is the executor's only owner: the scheduler ticks the
    driver, and the driver ticks the executor exactly once per period.

    Args:
        source: Route source whose route is driven.
        executor: Executor that drives each leg.
        max_vel: Velocity every leg is driven at.
    """

    def __init__(self, source: RouteSource, executor: MotionProfileExecutor, max_vel: float):
        self.source = source
        self.executor = executor
        self.max_vel = max_vel

    @property
    def collision_detected(self) -> bool:
        return self.executor.collision_detected

    def activate(self) -> None:
        """Start driving the current leg, if there is one."""
        if not self.source.is_active():
            logger.error("RouteDriver activated with no active route")
            return
        self.executor.start(self.source.current_leg(), self.max_vel)

    def tick(self) -> None:
        """Tick the executor and hand off to the next leg when it finishes.

        The tick that completes a leg is the one exception to one actuator
        command per tick: the executor sets its last power, then stops the
        straight drive, and the next leg's turn is commanded right after it
        in the same period.
        """
        self.executor.tick()
        if self.executor.is_done() and self.source.is_active():
            self.source.advance()
            if self.source.is_active():
                self.executor.start(self.source.current_leg(), self.max_vel)

    def is_finished(self) -> bool:
        return not self.source.is_active() and self.executor.is_done()

    def interrupt(self) -> None:
        """Stop driving and drop the route."""
        self.executor.reset()
        self.source.reset()
