"""Navigation package - routes, docking route acquisition and leg execution."""

from .route import Route, RouteSource, FixedRoute
from .acquisition import TargetAcquisitionOrchestrator, VisionDockingRoute
from .motion_profile import CalibrationModel, ProfilePlan, plan_profile
from .executor import MotionPhase, MotionProfileExecutor
from .route_driver import RouteDriver

__all__ = [
    'Route',
    'RouteSource',
    'FixedRoute',
    'TargetAcquisitionOrchestrator',
    'VisionDockingRoute',
    'CalibrationModel',
    'ProfilePlan',
    'plan_profile',
    'MotionPhase',
    'MotionProfileExecutor',
    'RouteDriver',
]
