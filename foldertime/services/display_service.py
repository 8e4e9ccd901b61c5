"""Formatting of the live elapsed value for the status display."""
import os
from typing import Optional
from .tracker_engine import TrackerEngine


def format_elapsed(ms: int) -> str:
    """Format milliseconds as ``{hours}h {minutes}m {seconds}s``."""
    total_seconds = max(0, ms) // 1000
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    return f"{hours}h {minutes}m {seconds}s"


def folder_label(folder: str) -> str:
    return os.path.basename(folder) or folder


class DisplayService:
    """Read-only view of the engine for the status surface."""

    def __init__(self, engine: TrackerEngine) -> None:
        self.engine = engine

    def status_text(self) -> Optional[str]:
        """Status line for the active folder, or None when nothing is tracked."""
        elapsed = self.engine.current_elapsed()
        folder = self.engine.active_folder
        if elapsed is None or folder is None:
            return None
        return f"{folder_label(folder)}: {format_elapsed(elapsed)}"
