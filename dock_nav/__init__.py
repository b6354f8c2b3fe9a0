"""
Docking Navigation Package
==========================

Vision-guided docking for a differential-drive ground robot: find a
target, build a two-leg route to it from the robot's rotational center,
then drive each leg as turn-to-angle followed by an open-loop
trapezoidal (or triangular) power ramp.

Subpackages:
    - core:      Config, event bus, error types, logging setup
    - geometry:  2-D vectors, heading conversions, docking route geometry
    - nav:       Routes, target acquisition, motion profile executor, route driver
    - hardware:  Drivetrain / vision / gyro / collision contracts and mocks
    - commands:  Scheduler command lifecycle (find target, drive route)
    - nodes:     Entry points (docking simulation)

Example:
    from dock_nav.geometry import Vector, build_docking_route
    from dock_nav.nav import MotionProfileExecutor, RouteDriver, FixedRoute
"""

__version__ = '1.0.0'
