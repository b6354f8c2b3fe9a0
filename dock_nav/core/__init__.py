"""
Core Module
===========

Contains infrastructure shared across the navigation stack:
- Configuration management
- Event system
- Error types
- Logging setup
"""

from .config import Config, get_config, load_config
from .events import EventBus, Event, EventType, get_event_bus
from .errors import DockNavError, InvalidState, GeometryError
from .log import setup_logging

__all__ = [
    'Config',
    'get_config',
    'load_config',
    'EventBus',
    'Event',
    'EventType',
    'get_event_bus',
    'DockNavError',
    'InvalidState',
    'GeometryError',
    'setup_logging',
]
