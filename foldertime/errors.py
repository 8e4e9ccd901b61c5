"""Error taxonomy for folder time tracking."""


class FolderTimeError(Exception):
    """Base class for all folder time tracking errors."""


class ConfigInvalid(FolderTimeError):
    """Tracked-folder configuration is malformed."""


class PersistenceReadCorrupt(FolderTimeError):
    """A stored folder record could not be read or parsed."""


class PersistenceWriteFailed(FolderTimeError):
    """A folder record could not be written to storage."""
