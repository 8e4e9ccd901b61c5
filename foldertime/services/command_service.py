"""Command surface: add/remove folders and report the current time."""
from dataclasses import dataclass
from ..config import Config
from ..models import normalize_folder
from .display_service import format_elapsed
from .tracker_engine import TrackerEngine, TrackResult


@dataclass
class CommandResult:
    """Outcome code plus the user-facing confirmation message."""
    code: TrackResult
    message: str


class CommandService:
    """Maps user commands onto engine operations and persists the folder list."""

    def __init__(self, engine: TrackerEngine, config: Config) -> None:
        self.engine = engine
        self.config = config

    def add_folder(self, path: str) -> CommandResult:
        folder = normalize_folder(path)
        code = self.engine.add_tracked(folder)
        if code == TrackResult.ALREADY_TRACKED:
            return CommandResult(code, f"{folder} is already tracked")

        message = f"Now tracking {folder}"
        error = self.config.set_tracked_folders(list(self.engine.tracked_folders))
        if error:
            message += f" (settings not saved: {error})"
        return CommandResult(code, message)

    def remove_folder(self, path: str) -> CommandResult:
        folder = normalize_folder(path)
        code = self.engine.remove_tracked(folder)
        if code == TrackResult.NO_FOLDERS_TRACKED:
            return CommandResult(code, "No folders are being tracked")
        if code == TrackResult.NOT_TRACKED:
            return CommandResult(code, f"{folder} is not tracked")

        message = f"Stopped tracking {folder}"
        error = self.config.set_tracked_folders(list(self.engine.tracked_folders))
        if error:
            message += f" (settings not saved: {error})"
        return CommandResult(code, message)

    def show_current_time(self) -> CommandResult:
        if not self.engine.tracked_folders:
            return CommandResult(TrackResult.NO_FOLDERS_TRACKED, "No folders are being tracked")

        folder = self.engine.active_folder
        elapsed = self.engine.current_elapsed()
        if folder is None or elapsed is None:
            return CommandResult(TrackResult.NOT_ACTIVE, "Not tracking any folder")
        return CommandResult(TrackResult.ELAPSED, f"Time spent on {folder}: {format_elapsed(elapsed)}")
