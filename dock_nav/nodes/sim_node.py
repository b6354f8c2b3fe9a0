#!/usr/bin/env python3
"""
Docking Simulation
==================

Runs the navigation stack against mock hardware on a fixed-period loop.

Modes:
    dock    search for a simulated target, build the docking route, drive it
    fixed   drive the preset out-and-back test route

Usage:
    dock_nav_sim --config config/dock_nav.yaml --target 20 100
    dock_nav_sim --mode fixed --velocity 20
"""

import argparse
import logging
import sys
from typing import List, Optional

from ..commands import CommandRunner, DriveRoute, DriveRouteToTarget
from ..core.config import Config, load_config
from ..core.events import Event, get_event_bus
from ..core.log import setup_logging
from ..geometry.vector import Vector
from ..hardware import MockDrivetrain, MockGyro, MockVisionSensor, create_collision_detector
from ..nav import (
    CalibrationModel,
    FixedRoute,
    MotionProfileExecutor,
    RouteDriver,
    TargetAcquisitionOrchestrator,
)

logger = logging.getLogger(__name__)


class DockingSimulation:
    """Mock hardware plus the navigation objects wired to it."""

    def __init__(self, config: Config, start_yaw: float = 0.0):
        self.config = config
        self.gyro = MockGyro(yaw=start_yaw)
        self.drivetrain = MockDrivetrain(
            turn_ticks=config.simulation.turn_ticks,
            distance_per_power=config.simulation.distance_per_power,
            deadband_power=config.simulation.deadband_power,
            gyro=self.gyro,
        )
        self.vision = MockVisionSensor(config.vision)
        self.collision = create_collision_detector(self.gyro, config.collision)
        self.executor = MotionProfileExecutor(
            self.drivetrain,
            CalibrationModel.from_config(config.calibration),
            self.collision,
        )
        self.acquisition = TargetAcquisitionOrchestrator(
            self.vision, self.gyro, route_config=config.route
        )

    def lens_position(self) -> Vector:
        heading = self.gyro.current_heading()
        return self.drivetrain.position - self.vision.lateral_offset_vector(heading)

    def run_dock(self, target: Vector, velocity: float) -> int:
        runner = CommandRunner(period=self.config.simulation.tick_period)
        driver = RouteDriver(self.acquisition, self.executor, velocity)
        command = DriveRouteToTarget(self.acquisition, driver, clock=runner.clock)

        def observe(_tick: int) -> None:
            self.vision.observe(
                self.lens_position(),
                self.gyro.current_heading(),
                target,
                self.config.route.target_height,
            )

        return runner.run(command, self.config.simulation.max_ticks, on_tick=observe)

    def run_fixed(self, velocity: float) -> int:
        runner = CommandRunner(period=self.config.simulation.tick_period)
        source = FixedRoute()
        source.prepare()
        command = DriveRoute(RouteDriver(source, self.executor, velocity), clock=runner.clock)
        return runner.run(command, self.config.simulation.max_ticks)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Docking navigation simulation")
    parser.add_argument("--config", default=None,
                        help="YAML configuration file")
    parser.add_argument("--mode", choices=["dock", "fixed"], default="dock",
                        help="Drive to a simulated target or the fixed test route")
    parser.add_argument("--target", nargs=2, type=float, default=[20.0, 100.0],
                        metavar=("X", "Y"),
                        help="Simulated target field position")
    parser.add_argument("--velocity", type=float, default=None,
                        help="Leg velocity (defaults to route.drive_velocity)")
    parser.add_argument("--yaw", type=float, default=0.0,
                        help="Starting gyro yaw in degrees")
    args = parser.parse_args(argv)

    config = load_config(args.config) if args.config else Config()
    setup_logging(config.logging)

    events: List[Event] = []
    get_event_bus().subscribe_all(events.append)

    sim = DockingSimulation(config, start_yaw=args.yaw)
    velocity = args.velocity if args.velocity is not None else config.route.drive_velocity

    if args.mode == "dock":
        target = Vector(*args.target)
        ticks = sim.run_dock(target, velocity)
        error = (target - sim.drivetrain.position).r
        logger.info(f"Docking finished after {ticks} ticks; final miss distance {error:.2f}")
    else:
        ticks = sim.run_fixed(velocity)
        logger.info(f"Fixed route finished after {ticks} ticks")

    logger.info(f"Final position {sim.drivetrain.position}, {len(events)} events")
    for event in events:
        logger.debug(f"  {event}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
