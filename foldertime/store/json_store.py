"""JSON file persistence, one file per tracked folder."""
import hashlib
import json
import math
import os
import tempfile
from typing import Any, Dict, Optional
from ..errors import PersistenceReadCorrupt, PersistenceWriteFailed
from ..log import log, debug_log
from ..models import FolderRecord
from .base import FolderStore


class JsonFolderStore(FolderStore):
    """
    Stores ``{"totalTime": ms, "updated": iso}`` documents under
    ``records_dir``, keyed by the MD5 of the folder's absolute path.
    """

    def __init__(self, records_dir: str) -> None:
        self.records_dir = records_dir

    def record_path(self, folder: str) -> str:
        """Return the JSON file path for a folder."""
        digest = hashlib.md5(folder.encode("utf-8")).hexdigest()
        return os.path.join(self.records_dir, f"{digest}.json")

    def load(self, folder: str) -> Optional[FolderRecord]:
        """
        Read a folder's record.

        Raises:
            PersistenceReadCorrupt: the file exists but cannot be used
        """
        path = self.record_path(folder)
        if not os.path.exists(path):
            return None

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            raise PersistenceReadCorrupt(f"{path}: {e}") from e

        if not isinstance(data, dict):
            raise PersistenceReadCorrupt(f"{path}: expected an object")

        total = self._parse_total(data.get("totalTime"))
        if total is None:
            raise PersistenceReadCorrupt(f"{path}: invalid totalTime {data.get('totalTime')!r}")

        updated = data.get("updated", "")
        return FolderRecord(total_time_ms=total, updated_at=updated if isinstance(updated, str) else "")

    @staticmethod
    def _parse_total(raw: Any) -> Optional[int]:
        """Whole milliseconds from a stored total; None if it is not a usable number."""
        if raw is None:
            return 0
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            return None
        if not math.isfinite(raw) or raw < 0:
            return None
        return int(raw)

    def save(self, folder: str, record: FolderRecord) -> None:
        """
        Write a folder's record atomically.

        Raises:
            PersistenceWriteFailed: the directory or file could not be written
        """
        path = self.record_path(folder)
        payload: Dict[str, Any] = {"totalTime": int(record.total_time_ms), "updated": record.updated_at}
        try:
            os.makedirs(self.records_dir, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.records_dir, suffix=".tmp")
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    json.dump(payload, f, indent=2)
                os.replace(tmp_path, path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise
        except OSError as e:
            raise PersistenceWriteFailed(f"{path}: {e}") from e

    def get(self, folder: str) -> Optional[FolderRecord]:
        try:
            return self.load(folder)
        except PersistenceReadCorrupt as e:
            log(f"Ignoring corrupt record for {folder}: {e}")
            return None

    def put(self, folder: str, record: FolderRecord) -> bool:
        try:
            self.save(folder, record)
        except PersistenceWriteFailed as e:
            log(f"Warning: could not save time for {folder}: {e}")
            return False
        debug_log(f"Saved {record.total_time_ms}ms for {folder}")
        return True
