"""Wires the engine to its timers, store and display."""
from typing import Callable, Iterable, Optional
from PyQt5.QtCore import QObject, pyqtSignal  # type: ignore
from .config import Config, RECORDS_DIR, DISPLAY_INTERVAL_MS, IDLE_CHECK_INTERVAL_MS
from .log import log
from .models import wall_clock_ms
from .services import (
    CommandService, DisplayService, IdleMonitor, ScheduleDriver, TrackerEngine, create_engine
)
from .store import FolderStore, JsonFolderStore


class FolderTimeApp(QObject):
    """
    Owns one engine and everything that drives it.

    Host events come in through ``on_activity`` and
    ``on_folder_set_changed``; timers call the tick handlers. The
    ``display_changed`` signal carries the status text, or an empty string
    when nothing is being tracked.
    """
    display_changed: pyqtSignal = pyqtSignal(str)

    def __init__(self, config: Config, store: Optional[FolderStore] = None,
                 clock: Optional[Callable[[], int]] = None,
                 parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self.config = config
        self.store = store or JsonFolderStore(RECORDS_DIR)
        clock = clock or wall_clock_ms

        self.engine: TrackerEngine = create_engine(config, self.store, clock=clock)
        self.display = DisplayService(self.engine)
        self.commands = CommandService(self.engine, config)
        self.idle_monitor = IdleMonitor(config.idle_timeout_ms, on_idle=self.engine.on_idle,
                                        clock=clock, parent=self)
        self.driver = ScheduleDriver(
            on_save=self.on_save_tick,
            on_display=self.on_display_tick,
            on_idle_check=self.on_idle_tick,
            save_interval_ms=config.save_interval_ms,
            display_interval_ms=DISPLAY_INTERVAL_MS,
            idle_check_interval_ms=IDLE_CHECK_INTERVAL_MS,
            parent=self,
        )
        self._last_display: Optional[str] = None
        self._shut_down = False

    def start(self, open_folders: Iterable[str] = ()) -> None:
        """Begin tracking against the folders currently open in the host."""
        log(f"Tracking {len(self.engine.tracked_folders)} folder(s)")
        self.idle_monitor.reset()
        self.engine.reconcile(open_folders)
        self.driver.start()
        self.on_display_tick()

    # --- Host events ---

    def on_activity(self) -> None:
        if self._shut_down:
            return
        self.idle_monitor.reset()
        self.engine.on_activity()

    def on_folder_set_changed(self, open_folders: Iterable[str]) -> None:
        if self._shut_down:
            return
        self.engine.on_folder_set_changed(open_folders)
        self.on_display_tick()

    def reload_config(self) -> None:
        """Re-read settings and apply the tracked list and timing overrides."""
        self.config.reload()
        self.idle_monitor.set_timeout(self.config.idle_timeout_ms)
        self.driver.set_save_interval(self.config.save_interval_ms)
        self.engine.update_tracked_folders(self.config.tracked_folders)
        self.on_display_tick()

    # --- Timer ticks ---

    def on_save_tick(self) -> None:
        self.engine.on_save_tick()

    def on_idle_tick(self) -> None:
        self.idle_monitor.check_expiry()

    def on_display_tick(self) -> None:
        text = self.display.status_text() or ""
        if text != self._last_display:
            self._last_display = text
            self.display_changed.emit(text)

    def shutdown(self) -> bool:
        """Stop all timers and persist the trailing interval."""
        if self._shut_down:
            return True
        self._shut_down = True
        self.driver.stop()
        self.idle_monitor.dispose()
        saved = self.engine.dispose()
        log("Folder time tracker stopped")
        return saved
