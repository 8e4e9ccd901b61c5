"""System tray front end for the folder time tracker."""
import os
from typing import Optional
from PyQt5.QtWidgets import QSystemTrayIcon, QMenu, QAction, QApplication, QFileDialog
from PyQt5.QtGui import QIcon, QCursor
from ..app import FolderTimeApp
from ..events import Event, TrackingContext
from ..services import CommandResult, TrackResult
from .workspace import WorkspaceWatcher

ICON_IDLE = "appointment-soon-symbolic"
ICON_TRACKING = "chronometer-symbolic"
MESSAGE_TIMEOUT_MS = 4000


class TrayApp:
    """
    Tray icon exposing the command surface and the live elapsed time.
    Menu interaction counts as user activity.
    """

    def __init__(self, app: FolderTimeApp, workspace: WorkspaceWatcher) -> None:
        self.app = app
        self.workspace = workspace

        self.tray_icon = QSystemTrayIcon()
        self.tray_icon.setIcon(QIcon.fromTheme(ICON_IDLE))
        self.tray_icon.setToolTip("Folder Time")

        self.create_context_menu()
        self.tray_icon.activated.connect(self.on_tray_activated)  # pyright: ignore[reportGeneralTypeIssues]

        self.app.display_changed.connect(self.update_status)  # pyright: ignore[reportGeneralTypeIssues]
        self.app.engine.events.subscribe(Event.PERSIST_FAILED, self.on_persist_failed)
        self.workspace.folders_changed.connect(self.app.on_folder_set_changed)  # pyright: ignore[reportGeneralTypeIssues]
        self.workspace.activity.connect(self.app.on_activity)  # pyright: ignore[reportGeneralTypeIssues]

        self.tray_icon.show()

    def create_context_menu(self) -> None:
        self.menu = QMenu()
        self.menu.aboutToShow.connect(self.rebuild_folder_menus)  # pyright: ignore[reportGeneralTypeIssues]

        self.elapsed_action: QAction = self.menu.addAction("")  # pyright: ignore[reportAssignmentType]
        self.elapsed_action.setEnabled(False)
        self.elapsed_action.setVisible(False)
        self.menu.addSeparator()

        add_action: QAction = self.menu.addAction("Track Folder...")  # pyright: ignore[reportAssignmentType]
        add_action.triggered.connect(self.add_folder)
        self.remove_menu = QMenu("Stop Tracking Folder", self.menu)
        self.menu.addMenu(self.remove_menu)
        show_action: QAction = self.menu.addAction("Show Current Time")  # pyright: ignore[reportAssignmentType]
        show_action.triggered.connect(self.show_current_time)
        reload_action: QAction = self.menu.addAction("Reload Settings")  # pyright: ignore[reportAssignmentType]
        reload_action.triggered.connect(self.reload_settings)
        self.menu.addSeparator()

        open_action: QAction = self.menu.addAction("Open Workspace Folder...")  # pyright: ignore[reportAssignmentType]
        open_action.triggered.connect(self.open_workspace_folder)
        self.close_menu = QMenu("Close Workspace Folder", self.menu)
        self.menu.addMenu(self.close_menu)
        self.menu.addSeparator()

        exit_action: QAction = self.menu.addAction("Exit")  # pyright: ignore[reportAssignmentType]
        exit_action.triggered.connect(self.quit_app)

        self.tray_icon.setContextMenu(self.menu)

    def rebuild_folder_menus(self) -> None:
        """Refresh the folder submenus each time the menu opens."""
        self.app.on_activity()

        self.remove_menu.clear()
        for folder in self.app.engine.tracked_folders:
            action: QAction = self.remove_menu.addAction(folder)  # pyright: ignore[reportAssignmentType]
            action.triggered.connect(lambda _checked=False, f=folder: self.remove_folder(f))
        self.remove_menu.setEnabled(bool(self.app.engine.tracked_folders))

        self.close_menu.clear()
        for folder in self.workspace.folders:
            action = self.close_menu.addAction(folder)  # pyright: ignore[reportAssignmentType]
            action.triggered.connect(lambda _checked=False, f=folder: self.workspace.close_folder(f))
        self.close_menu.setEnabled(bool(self.workspace.folders))

    def on_tray_activated(self, reason: QSystemTrayIcon.ActivationReason) -> None:
        self.app.on_activity()
        if reason == QSystemTrayIcon.ActivationReason.Trigger:
            self.show_current_time()
        elif reason == QSystemTrayIcon.ActivationReason.Context:
            self.menu.popup(QCursor.pos())

    def update_status(self, text: str) -> None:
        """Show the elapsed time, or hide it when nothing is tracked."""
        if text:
            self.elapsed_action.setText(text)
            self.elapsed_action.setVisible(True)
            self.tray_icon.setToolTip(text)
            self.tray_icon.setIcon(QIcon.fromTheme(ICON_TRACKING))
        else:
            self.elapsed_action.setVisible(False)
            self.tray_icon.setToolTip("Folder Time: not tracking")
            self.tray_icon.setIcon(QIcon.fromTheme(ICON_IDLE))

    def _pick_folder(self, title: str) -> Optional[str]:
        path = QFileDialog.getExistingDirectory(None, title, os.path.expanduser("~"))
        return path or None

    def add_folder(self) -> None:
        path = self._pick_folder("Track Folder")
        if path:
            self.notify(self.app.commands.add_folder(path))

    def remove_folder(self, folder: str) -> None:
        self.notify(self.app.commands.remove_folder(folder))

    def show_current_time(self) -> None:
        self.notify(self.app.commands.show_current_time())

    def reload_settings(self) -> None:
        """Apply edits made to the settings file by hand."""
        self.app.reload_config()
        self.tray_icon.showMessage(
            "Folder Time",
            f"Settings reloaded: {len(self.app.engine.tracked_folders)} tracked folder(s)",
            QSystemTrayIcon.Information,
            MESSAGE_TIMEOUT_MS,
        )

    def open_workspace_folder(self) -> None:
        path = self._pick_folder("Open Workspace Folder")
        if path:
            self.workspace.open_folder(path)

    def notify(self, result: CommandResult) -> None:
        icon = QSystemTrayIcon.Information
        if result.code in (TrackResult.NOT_TRACKED, TrackResult.NO_FOLDERS_TRACKED):
            icon = QSystemTrayIcon.Warning
        self.tray_icon.showMessage("Folder Time", result.message, icon, MESSAGE_TIMEOUT_MS)

    def on_persist_failed(self, context: TrackingContext) -> None:
        self.tray_icon.showMessage(
            "Folder Time",
            f"Could not save time for {context.folder}; will retry on next save.",
            QSystemTrayIcon.Warning,
            MESSAGE_TIMEOUT_MS,
        )

    def quit_app(self) -> None:
        self.tray_icon.hide()
        app_instance = QApplication.instance()
        if app_instance:
            app_instance.quit()
