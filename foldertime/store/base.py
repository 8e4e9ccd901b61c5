"""Base persistence abstraction."""
from abc import ABC, abstractmethod
from typing import Dict, Optional
from ..models import FolderRecord


class FolderStore(ABC):
    """Maps a folder identifier to its durable time record."""

    @abstractmethod
    def get(self, folder: str) -> Optional[FolderRecord]:
        """Return the stored record, or None if absent or unreadable."""
        pass

    @abstractmethod
    def put(self, folder: str, record: FolderRecord) -> bool:
        """Store the record, returning False if the write failed."""
        pass


class MemoryFolderStore(FolderStore):
    """Dictionary-backed store that lives for the process lifetime."""

    def __init__(self) -> None:
        self.records: Dict[str, FolderRecord] = {}

    def get(self, folder: str) -> Optional[FolderRecord]:
        record = self.records.get(folder)
        if record is None:
            return None
        return FolderRecord(record.total_time_ms, record.updated_at)

    def put(self, folder: str, record: FolderRecord) -> bool:
        self.records[folder] = FolderRecord(record.total_time_ms, record.updated_at)
        return True
