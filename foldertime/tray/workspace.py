"""Host-side set of open workspace folders and file activity."""
import os
from typing import Iterable, List, Optional
from PyQt5.QtCore import QObject, QFileSystemWatcher, pyqtSignal  # type: ignore
from ..log import debug_log
from ..models import normalize_folder

IGNORED_DIRS = {".git", ".hg", ".svn", "node_modules", "__pycache__", ".venv", "venv", ".tox"}
MAX_WATCHED_PATHS = 4000


class WorkspaceWatcher(QObject):
    """
    Keeps the ordered list of open folders and reports file changes inside
    them as user activity.

    Every directory and file below an open folder is watched, since a
    directory watch alone only reports entries being added or removed.
    """
    folders_changed: pyqtSignal = pyqtSignal(list)
    activity: pyqtSignal = pyqtSignal()

    def __init__(self, folders: Iterable[str] = (), parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._folders: List[str] = []
        self._watcher = QFileSystemWatcher(self)
        self._watcher.directoryChanged.connect(self._on_directory_changed)  # pyright: ignore[reportGeneralTypeIssues]
        self._watcher.fileChanged.connect(self._on_file_changed)  # pyright: ignore[reportGeneralTypeIssues]
        for folder in folders:
            self._add(normalize_folder(folder))

    @property
    def folders(self) -> List[str]:
        return list(self._folders)

    @property
    def watched_paths(self) -> List[str]:
        return list(self._watcher.directories()) + list(self._watcher.files())

    def open_folder(self, path: str) -> bool:
        folder = normalize_folder(path)
        if folder in self._folders:
            return False
        self._add(folder)
        self.folders_changed.emit(self.folders)
        return True

    def close_folder(self, path: str) -> bool:
        folder = normalize_folder(path)
        if folder not in self._folders:
            return False
        self._folders.remove(folder)
        stale = [p for p in self.watched_paths if self._is_within(p, folder) and not self._in_open_folder(p)]
        if stale:
            self._watcher.removePaths(stale)
        self.folders_changed.emit(self.folders)
        return True

    def _add(self, folder: str) -> None:
        self._folders.append(folder)
        if os.path.isdir(folder):
            self._watch_tree(folder)

    def _watch_tree(self, root: str) -> None:
        """Watch ``root`` and everything below it, skipping VCS and build dirs."""
        watched = set(self.watched_paths)
        pending: List[str] = []
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = [d for d in dirnames if d not in IGNORED_DIRS]
            for path in [dirpath] + [os.path.join(dirpath, name) for name in filenames]:
                if path not in watched:
                    pending.append(path)
            if len(watched) + len(pending) >= MAX_WATCHED_PATHS:
                debug_log(f"Watch limit reached under {root}")
                break
        if pending:
            self._watcher.addPaths(pending[:max(0, MAX_WATCHED_PATHS - len(watched))])

    def _is_within(self, path: str, folder: str) -> bool:
        return path == folder or path.startswith(folder.rstrip(os.sep) + os.sep)

    def _in_open_folder(self, path: str) -> bool:
        return any(self._is_within(path, other) for other in self._folders)

    def _on_directory_changed(self, path: str) -> None:
        # New files or subdirectories need their own watches.
        if os.path.isdir(path) and self._in_open_folder(path):
            self._watch_tree(path)
        self.activity.emit()

    def _on_file_changed(self, path: str) -> None:
        # Editors that save by rename drop the watch on the old inode.
        if os.path.exists(path) and path not in self._watcher.files() and self._in_open_folder(path):
            self._watcher.addPath(path)
        self.activity.emit()
