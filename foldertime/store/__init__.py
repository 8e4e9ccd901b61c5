"""Persistence layer."""
from .base import FolderStore, MemoryFolderStore
from .json_store import JsonFolderStore

__all__ = ["FolderStore", "MemoryFolderStore", "JsonFolderStore"]
