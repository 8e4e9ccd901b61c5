"""Event system for tracker state changes."""
from enum import Enum
from typing import Callable, Any, Dict, List, Optional


class Event(Enum):
    """Tracker events."""
    TRACKING_STARTED = "tracking_started"
    TRACKING_STOPPED = "tracking_stopped"
    CHECKPOINT_SAVED = "checkpoint_saved"
    PERSIST_FAILED = "persist_failed"
    IDLE_DETECTED = "idle_detected"


class EventContext:
    """Base context for event handlers."""
    pass


class TrackingContext(EventContext):
    """Context passed to tracking event handlers."""
    def __init__(self, folder: Optional[str], elapsed_ms: int = 0, error: Optional[str] = None) -> None:
        self.folder = folder
        self.elapsed_ms = elapsed_ms
        self.error = error


class EventBus:
    """Dispatches tracker events to subscribers."""

    def __init__(self) -> None:
        self._handlers: Dict[Event, List[Callable[[Any], None]]] = {}

    def subscribe(self, event: Event, handler: Callable[[TrackingContext], None]) -> None:
        """Subscribe to an event."""
        if event not in self._handlers:
            self._handlers[event] = []
        self._handlers[event].append(handler)

    def unsubscribe(self, event: Event, handler: Callable[[TrackingContext], None]) -> None:
        """Remove a handler; unknown handlers are ignored."""
        handlers = self._handlers.get(event, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: Event, context: EventContext) -> None:
        """Emit an event to all subscribers."""
        for handler in list(self._handlers.get(event, [])):
            try:
                handler(context)
            except Exception as e:
                print(f"Event handler error ({event.value}): {e}")
