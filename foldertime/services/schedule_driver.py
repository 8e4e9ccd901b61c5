"""Periodic save, display and idle-check ticks."""
from typing import Callable, Optional
from PyQt5.QtCore import QObject, QTimer  # type: ignore
from ..config import SAVE_INTERVAL_MS, DISPLAY_INTERVAL_MS, IDLE_CHECK_INTERVAL_MS


class ScheduleDriver(QObject):
    """Owns the repeating timers; all of them start and stop together."""

    def __init__(self,
                 on_save: Callable[[], None],
                 on_display: Callable[[], None],
                 on_idle_check: Callable[[], None],
                 save_interval_ms: int = SAVE_INTERVAL_MS,
                 display_interval_ms: int = DISPLAY_INTERVAL_MS,
                 idle_check_interval_ms: int = IDLE_CHECK_INTERVAL_MS,
                 parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._on_save = on_save
        self._on_display = on_display
        self._on_idle_check = on_idle_check

        self.save_timer = self._make_timer(save_interval_ms, self._save_tick)
        self.display_timer = self._make_timer(display_interval_ms, self._display_tick)
        self.idle_check_timer = self._make_timer(idle_check_interval_ms, self._idle_check_tick)

    def _make_timer(self, interval_ms: int, slot: Callable[[], None]) -> QTimer:
        timer = QTimer(self)
        timer.setInterval(interval_ms)
        timer.timeout.connect(slot)  # pyright: ignore[reportGeneralTypeIssues]
        return timer

    @property
    def is_running(self) -> bool:
        return self.save_timer.isActive()

    def start(self) -> None:
        for timer in (self.save_timer, self.display_timer, self.idle_check_timer):
            timer.start()

    def stop(self) -> None:
        for timer in (self.save_timer, self.display_timer, self.idle_check_timer):
            timer.stop()

    def set_save_interval(self, interval_ms: int) -> None:
        self.save_timer.setInterval(interval_ms)

    def _save_tick(self) -> None:
        self._on_save()

    def _display_tick(self) -> None:
        self._on_display()

    def _idle_check_tick(self) -> None:
        self._on_idle_check()
