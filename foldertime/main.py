#!/usr/bin/env python3
"""
Main entrypoint for the folder time tracker tray application.
"""
import argparse
import sys
from typing import List, Optional
from PyQt5.QtWidgets import QApplication
from .app import FolderTimeApp
from .config import settings
from .tray.tray import TrayApp
from .tray.workspace import WorkspaceWatcher


def parse_args(argv: List[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='foldertime',
        description='Track time spent with workspace folders open'
    )
    parser.add_argument('folders', nargs='*', help='Workspace folders open at startup')
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)

    qt_app = QApplication(sys.argv)
    # Keep the tray icon alive when dialogs close.
    qt_app.setQuitOnLastWindowClosed(False)

    tracker = FolderTimeApp(settings)
    workspace = WorkspaceWatcher(args.folders)
    tray = TrayApp(tracker, workspace)  # noqa: F841

    qt_app.aboutToQuit.connect(tracker.shutdown)  # pyright: ignore[reportGeneralTypeIssues]
    tracker.start(workspace.folders)
    return qt_app.exec_()


if __name__ == "__main__":
    sys.exit(main())
