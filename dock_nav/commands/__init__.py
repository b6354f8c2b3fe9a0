"""Scheduler commands - find a target, drive a route, or both in sequence."""

from .base import Command, SequentialCommandGroup, CommandRunner
from .navigation import GetRouteToTarget, DriveRoute, DriveRouteToTarget

__all__ = [
    'Command',
    'SequentialCommandGroup',
    'CommandRunner',
    'GetRouteToTarget',
    'DriveRoute',
    'DriveRouteToTarget',
]
