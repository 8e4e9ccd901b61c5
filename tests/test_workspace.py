"""Unit tests for WorkspaceWatcher."""
import os
import sys
import tempfile
import time
import unittest
from typing import Callable
from PyQt5.QtCore import QCoreApplication
from foldertime.tray.workspace import WorkspaceWatcher

_app = QCoreApplication.instance() or QCoreApplication(sys.argv)


def pump_until(condition: Callable[[], bool], timeout: float = 3.0) -> bool:
    """Process Qt events until ``condition`` holds or the timeout passes."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        QCoreApplication.processEvents()
        if condition():
            return True
        time.sleep(0.02)
    return condition()


class TestWorkspaceWatcher(unittest.TestCase):
    """Test the host folder set."""

    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.folder = os.path.realpath(self.tmp.name)
        self.watcher = WorkspaceWatcher()
        self.changes: list[list[str]] = []
        self.hits: list[bool] = []
        self.watcher.folders_changed.connect(self.changes.append)
        self.watcher.activity.connect(lambda: self.hits.append(True))

    def tearDown(self) -> None:
        self.watcher.close_folder(self.folder)
        self.tmp.cleanup()

    def _write(self, relative: str, content: str, mode: str = 'w') -> str:
        path = os.path.join(self.folder, relative)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, mode) as f:
            f.write(content)
        return path

    def _settle(self) -> None:
        """Drain notifications caused by test setup."""
        pump_until(lambda: False, timeout=0.3)
        self.hits.clear()

    def test_open_and_close(self) -> None:
        self.assertTrue(self.watcher.open_folder(self.folder + os.sep))
        self.assertFalse(self.watcher.open_folder(self.folder))
        self.assertEqual(self.watcher.folders, [self.folder])
        self.assertEqual(self.changes, [[self.folder]])

        self.assertTrue(self.watcher.close_folder(self.folder))
        self.assertFalse(self.watcher.close_folder(self.folder))
        self.assertEqual(self.changes[-1], [])
        self.assertEqual(self.watcher.watched_paths, [])

    def test_initial_folders_do_not_emit(self) -> None:
        watcher = WorkspaceWatcher([self.folder, "/does/not/exist"])
        self.assertEqual(watcher.folders, [self.folder, "/does/not/exist"])

    def test_watches_nested_files_and_skips_vcs(self) -> None:
        readme = self._write("README", "hello\n")
        module = self._write("src/pkg/mod.py", "x = 1\n")
        self._write(".git/HEAD", "ref\n")

        self.watcher.open_folder(self.folder)
        watched = self.watcher.watched_paths

        self.assertIn(readme, watched)
        self.assertIn(module, watched)
        self.assertIn(os.path.join(self.folder, "src", "pkg"), watched)
        self.assertNotIn(os.path.join(self.folder, ".git", "HEAD"), watched)

    def test_editing_existing_file_is_activity(self) -> None:
        self._write("README", "hello\n")
        self.watcher.open_folder(self.folder)
        self._settle()

        self._write("README", "more\n", mode='a')

        self.assertTrue(pump_until(lambda: bool(self.hits)))

    def test_editing_nested_file_is_activity(self) -> None:
        self._write("src/mod.py", "x = 1\n")
        self.watcher.open_folder(self.folder)
        self._settle()

        self._write("src/mod.py", "y = 2\n", mode='a')

        self.assertTrue(pump_until(lambda: bool(self.hits)))

    def test_new_subdirectory_is_picked_up(self) -> None:
        self.watcher.open_folder(self.folder)
        self._settle()

        new_file = self._write("lib/new.py", "z = 3\n")
        self.assertTrue(pump_until(lambda: new_file in self.watcher.watched_paths))

        self.hits.clear()
        self._write("lib/new.py", "w = 4\n", mode='a')
        self.assertTrue(pump_until(lambda: bool(self.hits)))

    def test_replaced_file_is_rewatched(self) -> None:
        target = self._write("notes.txt", "one\n")
        self.watcher.open_folder(self.folder)
        self._settle()

        replacement = self._write("notes.txt.tmp", "two\n")
        os.replace(replacement, target)
        self.assertTrue(pump_until(lambda: bool(self.hits)))
        self.assertTrue(pump_until(lambda: target in self.watcher.watched_paths))

        self._settle()
        self._write("notes.txt", "three\n", mode='a')
        self.assertTrue(pump_until(lambda: bool(self.hits)))


if __name__ == "__main__":
    unittest.main()
