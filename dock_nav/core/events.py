"""
Event System
============

Publish-subscribe event bus for observing route and motion progress
without coupling the navigation core to telemetry or command code.

Everything runs on the scheduler tick, so callbacks are invoked
synchronously in the publishing call.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional
from enum import Enum, auto

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Standard event types."""
    # Target search events
    SEARCH_STARTED = auto()
    SEARCH_ENDED = auto()
    SEARCH_TIMED_OUT = auto()
    TARGET_SIGHTED = auto()

    # Route events
    ROUTE_BUILT = auto()
    ROUTE_ADVANCED = auto()
    ROUTE_COMPLETED = auto()
    ROUTE_CANCELLED = auto()

    # Leg / motion events
    LEG_STARTED = auto()
    LEG_COMPLETED = auto()
    LEG_SKIPPED = auto()
    PHASE_CHANGED = auto()
    COLLISION_DETECTED = auto()


@dataclass
class Event:
    """Event data container."""
    event_type: EventType
    data: Dict[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=time.time)
    source: str = ""

    def __repr__(self) -> str:
        return f"Event({self.event_type.name}, source={self.source})"


class EventBus:
    """
    Centralized event bus for component communication.

    Usage:
        bus = EventBus()

        def on_leg_skipped(event):
            print(f"Leg skipped: {event.data['reason']}")

        bus.subscribe(EventType.LEG_SKIPPED, on_leg_skipped)

        bus.publish(Event(
            event_type=EventType.LEG_SKIPPED,
            data={'reason': 'max velocity out of range'},
            source='executor'
        ))
    """

    _instance: Optional['EventBus'] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._subscribers: Dict[EventType, List[Callable[[Event], None]]] = {}
        self._global_subscribers: List[Callable[[Event], None]] = []
        self._event_history: List[Event] = []
        self._max_history = 200
        self._initialized = True

    @classmethod
    def reset(cls):
        """Reset singleton instance (for testing)."""
        cls._instance = None

    def subscribe(
        self,
        event_type: EventType,
        callback: Callable[[Event], None]
    ) -> None:
        """Subscribe to a specific event type."""
        callbacks = self._subscribers.setdefault(event_type, [])
        if callback not in callbacks:
            callbacks.append(callback)
            logger.debug(f"Subscribed to {event_type.name}")

    def subscribe_all(self, callback: Callable[[Event], None]) -> None:
        """Subscribe to all events."""
        if callback not in self._global_subscribers:
            self._global_subscribers.append(callback)
            logger.debug("Subscribed to all events")

    def unsubscribe(
        self,
        event_type: EventType,
        callback: Callable[[Event], None]
    ) -> None:
        """Unsubscribe from a specific event type."""
        if callback in self._subscribers.get(event_type, []):
            self._subscribers[event_type].remove(callback)

    def unsubscribe_all(self, callback: Callable[[Event], None]) -> None:
        """Unsubscribe from all events."""
        if callback in self._global_subscribers:
            self._global_subscribers.remove(callback)

    def publish(self, event: Event) -> None:
        """Publish an event to all subscribers."""
        self._event_history.append(event)
        if len(self._event_history) > self._max_history:
            self._event_history = self._event_history[-self._max_history:]

        specific = list(self._subscribers.get(event.event_type, []))
        global_subs = list(self._global_subscribers)

        for callback in specific + global_subs:
            try:
                callback(event)
            except Exception as e:
                logger.error(f"Event callback error for {event.event_type.name}: {e}")

    def emit(self, event_type: EventType, source: str = "", **data) -> Event:
        """Build and publish an event in one call."""
        event = Event(event_type=event_type, data=data, source=source)
        self.publish(event)
        return event

    def get_history(
        self,
        event_type: Optional[EventType] = None,
        limit: int = 50
    ) -> List[Event]:
        """Get event history, optionally filtered by type."""
        if event_type is None:
            return self._event_history[-limit:]
        return [e for e in self._event_history if e.event_type == event_type][-limit:]

    def clear_history(self) -> None:
        """Clear event history."""
        self._event_history.clear()


# Global event bus accessor
def get_event_bus() -> EventBus:
    """Get the global event bus instance."""
    return EventBus()
