"""
Data models for the application.
"""
import datetime
import os
import time
from dataclasses import dataclass
from typing import Optional


def normalize_folder(path: str) -> str:
    """Return the stable identifier for a folder path."""
    return os.path.abspath(os.path.expanduser(path))


def wall_clock_ms() -> int:
    """Current wall-clock time in integer milliseconds."""
    return int(time.time() * 1000)


def utc_iso(timestamp_ms: int) -> str:
    """Format a millisecond epoch timestamp as ISO-8601 UTC with a Z suffix."""
    moment = datetime.datetime.fromtimestamp(timestamp_ms / 1000, tz=datetime.timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class FolderRecord:
    """Durable time total for one folder."""
    total_time_ms: int
    updated_at: str = ""


@dataclass
class TrackingSession:
    """
    In-memory accrual record for one folder.

    A session is running while ``running_since_ms`` is set. Its
    ``accumulated_ms`` is seeded once from storage and is authoritative
    afterwards.
    """
    folder: str
    accumulated_ms: int = 0
    running_since_ms: Optional[int] = None

    @property
    def is_running(self) -> bool:
        return self.running_since_ms is not None

    def elapsed(self, now_ms: int) -> int:
        """Accumulated time plus the live running span."""
        if self.running_since_ms is None:
            return self.accumulated_ms
        return self.accumulated_ms + max(0, now_ms - self.running_since_ms)

    def start(self, now_ms: int) -> None:
        self.running_since_ms = now_ms

    def checkpoint(self, now_ms: int) -> None:
        """Fold the running span into the accumulator without stopping."""
        if self.running_since_ms is None:
            return
        self.accumulated_ms += max(0, now_ms - self.running_since_ms)
        self.running_since_ms = now_ms

    def stop(self, now_ms: int) -> None:
        self.checkpoint(now_ms)
        self.running_since_ms = None
