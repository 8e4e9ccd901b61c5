"""Idle watchdog built on a single-shot QTimer."""
from typing import Callable, Optional
from PyQt5.QtCore import QObject, QTimer, pyqtSignal  # type: ignore
from ..log import debug_log
from ..models import wall_clock_ms


class IdleMonitor(QObject):
    """
    Fires ``idle_reached`` once when no activity has been reported for
    ``timeout_ms``, then stays dormant until the next ``reset()``.

    Only one expiry timer exists; ``reset()`` restarts it, so it can be
    called on every keystroke.
    """
    idle_reached: pyqtSignal = pyqtSignal()

    def __init__(self, timeout_ms: int, on_idle: Optional[Callable[[], None]] = None,
                 clock: Optional[Callable[[], int]] = None, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self.timeout_ms = timeout_ms
        self._clock = clock or wall_clock_ms
        self._last_activity_ms: Optional[int] = None
        self._armed = False

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._on_timer)  # pyright: ignore[reportGeneralTypeIssues]

        if on_idle is not None:
            self.idle_reached.connect(on_idle)  # pyright: ignore[reportGeneralTypeIssues]

    @property
    def is_armed(self) -> bool:
        """True while an expiry is pending."""
        return self._armed

    def reset(self) -> None:
        """Record activity now and push the deadline out by a full window."""
        self._last_activity_ms = self._clock()
        self._armed = True
        self._timer.start(self.timeout_ms)

    def set_timeout(self, timeout_ms: int) -> None:
        """Change the idle window; a pending deadline is restarted."""
        self.timeout_ms = timeout_ms
        if self._armed:
            self.reset()

    def check_expiry(self) -> bool:
        """
        Clock-based expiry check for the periodic idle tick. Covers a
        timer that did not fire, e.g. across system suspend.
        """
        if not self._armed or self._last_activity_ms is None:
            return False
        if self._clock() - self._last_activity_ms >= self.timeout_ms:
            self._expire()
            return True
        return False

    def dispose(self) -> None:
        """Cancel any pending expiry. Safe when nothing is pending."""
        self._timer.stop()
        self._armed = False

    def _on_timer(self) -> None:
        if self._armed:
            self._expire()

    def _expire(self) -> None:
        self._armed = False
        self._timer.stop()
        debug_log(f"Idle window of {self.timeout_ms}ms elapsed")
        self.idle_reached.emit()
