"""Business logic services."""
from .tracker_engine import TrackerEngine, TrackResult, create_engine
from .idle_monitor import IdleMonitor
from .schedule_driver import ScheduleDriver
from .display_service import DisplayService, format_elapsed
from .command_service import CommandService, CommandResult

__all__ = [
    "TrackerEngine", "TrackResult", "create_engine", "IdleMonitor", "ScheduleDriver",
    "DisplayService", "format_elapsed", "CommandService", "CommandResult",
]
