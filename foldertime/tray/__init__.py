"""System tray host."""
from .workspace import WorkspaceWatcher

__all__ = ["WorkspaceWatcher"]
