"""Folder tracking state machine (single source of truth for accrued time)."""
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple
from ..config import Config
from ..events import Event, EventBus, TrackingContext
from ..log import log, debug_log
from ..models import FolderRecord, TrackingSession, normalize_folder, utc_iso, wall_clock_ms
from ..store import FolderStore


class TrackResult(Enum):
    """Observable outcomes of tracked-folder operations."""
    ADDED = "added"
    ALREADY_TRACKED = "already_tracked"
    REMOVED = "removed"
    NOT_TRACKED = "not_tracked"
    NO_FOLDERS_TRACKED = "no_folders_tracked"
    NOT_ACTIVE = "not_active"
    ELAPSED = "elapsed"


class TrackerEngine:
    """
    Decides which tracked folder is active and accrues its time.

    At most one session runs at any instant. Every transition runs to
    completion inside a single handler call, so a start is always preceded
    by the stop of the previous folder.
    """

    def __init__(self, store: FolderStore, tracked_folders: Iterable[str] = (),
                 clock: Optional[Callable[[], int]] = None,
                 events: Optional[EventBus] = None) -> None:
        self.store = store
        self.events = events or EventBus()
        self._clock = clock or wall_clock_ms
        self._tracked: List[str] = self._dedupe(tracked_folders)
        self._sessions: Dict[str, TrackingSession] = {}
        self._active: Optional[str] = None
        self._open_folders: Set[str] = set()
        self._idle_paused = False
        self._disposed = False

    # --- Read access ---

    @property
    def tracked_folders(self) -> Tuple[str, ...]:
        return tuple(self._tracked)

    @property
    def active_folder(self) -> Optional[str]:
        return self._active

    @property
    def open_folders(self) -> Set[str]:
        return set(self._open_folders)

    @property
    def is_idle_paused(self) -> bool:
        return self._idle_paused

    def session(self, folder: str) -> Optional[TrackingSession]:
        """Return the materialized session for a folder, if any."""
        return self._sessions.get(normalize_folder(folder))

    def current_elapsed(self) -> Optional[int]:
        """Live elapsed time of the active folder, or None. Never mutates state."""
        if self._active is None:
            return None
        return self._sessions[self._active].elapsed(self._clock())

    # --- Transitions ---

    def reconcile(self, open_folders: Iterable[str]) -> Optional[str]:
        """
        Bring the active folder in line with the folders open in the host.

        The current folder keeps running as long as it is still open and
        tracked. Otherwise the first tracked folder (in configuration
        order) that is open takes over, or tracking stops.
        """
        self._open_folders = {normalize_folder(f) for f in open_folders}
        if self._disposed:
            return None

        if self._active is not None and self._is_candidate(self._active):
            return self._active

        candidate = self._first_candidate()
        if candidate is None or self._idle_paused:
            self.stop_tracking()
        else:
            self.start_tracking(candidate)
        return self._active

    def start_tracking(self, folder: str) -> bool:
        """Make ``folder`` the active folder. Returns True if a session was started."""
        folder = normalize_folder(folder)
        if self._disposed or folder not in self._tracked or folder == self._active:
            return False

        self.stop_tracking()

        session = self._materialize(folder)
        session.start(self._clock())
        self._active = folder
        self._idle_paused = False

        log(f"Tracking started: {folder}")
        self.events.emit(Event.TRACKING_STARTED, TrackingContext(folder, session.accumulated_ms))
        return True

    def stop_tracking(self) -> bool:
        """
        Stop the active session and persist it.

        Returns False only if the persistence write failed; the in-memory
        total is kept either way.
        """
        if self._active is None:
            return True

        folder = self._active
        session = self._sessions[folder]
        now = self._clock()
        session.stop(now)
        self._active = None

        saved = self._persist(session, now)
        log(f"Tracking stopped: {folder} ({session.accumulated_ms}ms total)")
        self.events.emit(Event.TRACKING_STOPPED, TrackingContext(folder, session.accumulated_ms))
        return saved

    def flush(self) -> bool:
        """Checkpoint the running session to storage without stopping it."""
        if self._active is None:
            return True

        session = self._sessions[self._active]
        now = self._clock()
        session.checkpoint(now)
        saved = self._persist(session, now)
        if saved:
            debug_log(f"Checkpoint: {session.folder} = {session.accumulated_ms}ms")
            self.events.emit(Event.CHECKPOINT_SAVED, TrackingContext(session.folder, session.accumulated_ms))
        return saved

    # --- Tracked-folder list ---

    def add_tracked(self, folder: str) -> TrackResult:
        folder = normalize_folder(folder)
        if folder in self._tracked:
            return TrackResult.ALREADY_TRACKED

        self._tracked.append(folder)
        self.reconcile(self._open_folders)
        return TrackResult.ADDED

    def remove_tracked(self, folder: str) -> TrackResult:
        """
        Stop tracking a folder for good. If it was the active folder its
        session is stopped and another open tracked folder may take over.
        """
        if not self._tracked:
            return TrackResult.NO_FOLDERS_TRACKED

        folder = normalize_folder(folder)
        if folder not in self._tracked:
            return TrackResult.NOT_TRACKED

        was_active = folder == self._active
        if was_active:
            self.stop_tracking()
        self._tracked.remove(folder)
        if was_active:
            self.reconcile(self._open_folders)
        return TrackResult.REMOVED

    def update_tracked_folders(self, folders: Iterable[str]) -> None:
        """Replace the tracked-folder list, e.g. after the settings file changed."""
        self._tracked = self._dedupe(folders)
        if self._active is not None and self._active not in self._tracked:
            self.stop_tracking()
        self.reconcile(self._open_folders)

    # --- Host signals ---

    def on_activity(self) -> None:
        """User did something; resume if tracking was paused for idleness."""
        if self._idle_paused:
            self._idle_paused = False
            debug_log("Activity after idle, reconciling")
            self.reconcile(self._open_folders)

    def on_idle(self) -> None:
        """Idle window elapsed: stop accruing until the next activity."""
        if self._disposed:
            return
        folder = self._active
        if folder is not None:
            log(f"Idle detected, pausing {folder}")
            self._idle_paused = True
            self.stop_tracking()
        self.events.emit(Event.IDLE_DETECTED, TrackingContext(folder))

    def on_folder_set_changed(self, open_folders: Iterable[str]) -> Optional[str]:
        return self.reconcile(open_folders)

    def on_save_tick(self) -> bool:
        return self.flush()

    def dispose(self) -> bool:
        """Final stop so no trailing interval is lost. Further transitions are ignored."""
        if self._disposed:
            return True
        saved = self.stop_tracking()
        self._disposed = True
        return saved

    # --- Internals ---

    @staticmethod
    def _dedupe(folders: Iterable[str]) -> List[str]:
        result: List[str] = []
        for folder in folders:
            normalized = normalize_folder(folder)
            if normalized not in result:
                result.append(normalized)
        return result

    def _is_candidate(self, folder: str) -> bool:
        return folder in self._tracked and folder in self._open_folders

    def _first_candidate(self) -> Optional[str]:
        for folder in self._tracked:
            if folder in self._open_folders:
                return folder
        return None

    def _materialize(self, folder: str) -> TrackingSession:
        session = self._sessions.get(folder)
        if session is None:
            record = self.store.get(folder)
            session = TrackingSession(folder, record.total_time_ms if record else 0)
            self._sessions[folder] = session
            debug_log(f"Session loaded: {folder} = {session.accumulated_ms}ms")
        return session

    def _persist(self, session: TrackingSession, now_ms: int) -> bool:
        record = FolderRecord(total_time_ms=session.accumulated_ms, updated_at=utc_iso(now_ms))
        if self.store.put(session.folder, record):
            return True
        self.events.emit(
            Event.PERSIST_FAILED,
            TrackingContext(session.folder, session.accumulated_ms, error="write failed")
        )
        return False


def create_engine(config: Config, store: FolderStore,
                  clock: Optional[Callable[[], int]] = None,
                  events: Optional[EventBus] = None) -> TrackerEngine:
    """Build an engine for the configured tracked-folder list."""
    return TrackerEngine(store, config.tracked_folders, clock=clock, events=events)
