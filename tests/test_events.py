"""Unit tests for EventBus."""
import unittest
from unittest.mock import Mock
from foldertime.events import Event, EventBus, TrackingContext


class TestEventBus(unittest.TestCase):

    def test_emit_reaches_subscribers(self) -> None:
        bus = EventBus()
        handler = Mock()
        bus.subscribe(Event.TRACKING_STARTED, handler)
        context = TrackingContext("/work/alpha", 10)

        bus.emit(Event.TRACKING_STARTED, context)
        bus.emit(Event.TRACKING_STOPPED, context)

        handler.assert_called_once_with(context)

    def test_failing_handler_does_not_block_others(self) -> None:
        bus = EventBus()
        second = Mock()
        bus.subscribe(Event.PERSIST_FAILED, Mock(side_effect=RuntimeError("boom")))
        bus.subscribe(Event.PERSIST_FAILED, second)

        bus.emit(Event.PERSIST_FAILED, TrackingContext("/work/alpha", error="write failed"))

        second.assert_called_once()

    def test_unsubscribe(self) -> None:
        bus = EventBus()
        handler = Mock()
        bus.subscribe(Event.IDLE_DETECTED, handler)
        bus.unsubscribe(Event.IDLE_DETECTED, handler)
        bus.unsubscribe(Event.IDLE_DETECTED, handler)

        bus.emit(Event.IDLE_DETECTED, TrackingContext(None))

        handler.assert_not_called()


if __name__ == "__main__":
    unittest.main()
