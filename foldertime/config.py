import os
import json
from typing import Any, Dict, List, Optional
from .errors import ConfigInvalid
from .models import normalize_folder

DATA_DIR: str = os.path.expanduser(os.environ.get("FOLDERTIME_DATA_DIR", "~/.local/share/foldertime"))
RECORDS_DIR: str = os.path.join(DATA_DIR, "records")
IDLE_TIMEOUT_MS: int = 300_000  # 5 minutes
SAVE_INTERVAL_MS: int = 30_000
DISPLAY_INTERVAL_MS: int = 1_000
IDLE_CHECK_INTERVAL_MS: int = 10_000

# User configuration file path
USER_CONFIG_PATH: str = os.path.expanduser("~/.config/foldertime/settings.json")

# Debug mode - logs detailed tracking information
DEBUG_MODE: bool = os.environ.get("FOLDERTIME_DEBUG", "0") == "1"
DEBUG_LOG_PATH: str = os.path.join(DATA_DIR, "foldertime_debug.log")


# --- Dynamic Configuration Class ---

class Config:
    """
    Manages the tracked-folder list and timing overrides stored in the
    user's JSON settings file.

    The tracked-folder list is ordered; the first open folder in this
    order wins when a new folder has to be chosen for tracking.
    """
    DEFAULT_IDLE_TIMEOUT_MS: int = IDLE_TIMEOUT_MS
    DEFAULT_SAVE_INTERVAL_MS: int = SAVE_INTERVAL_MS

    def __init__(self, config_path: str = USER_CONFIG_PATH):
        self.config_path = config_path
        self._user_config: Dict[str, Any] = {}

        self.tracked_folders: List[str] = []
        self.idle_timeout_ms: int = self.DEFAULT_IDLE_TIMEOUT_MS
        self.save_interval_ms: int = self.DEFAULT_SAVE_INTERVAL_MS

        self.reload()

    def _load_user_config(self) -> Dict[str, Any]:
        """Load user configuration from file."""
        if os.path.exists(self.config_path):
            try:
                with open(self.config_path, 'r') as f:
                    data = json.load(f)
            except (json.JSONDecodeError, IOError) as e:
                print(f"Ignoring unreadable config {self.config_path}: {e}")
                return {}
            if isinstance(data, dict):
                return data
            print(f"Ignoring config {self.config_path}: top level is not an object")
        return {}

    @staticmethod
    def _parse_tracked_folders(raw: Any) -> List[str]:
        """Validate and normalize a tracked-folder list, keeping first occurrences."""
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise ConfigInvalid(f"tracked_folders must be a list, got {type(raw).__name__}")

        folders: List[str] = []
        for entry in raw:
            if not isinstance(entry, str) or not entry.strip():
                continue
            folder = normalize_folder(entry)
            if folder not in folders:
                folders.append(folder)
        return folders

    @staticmethod
    def _parse_interval(raw: Any, default: int) -> int:
        if isinstance(raw, bool) or not isinstance(raw, int) or raw <= 0:
            return default
        return raw

    def reload(self) -> None:
        """
        Reload configuration from disk, updating this object's attributes.
        """
        self._user_config = self._load_user_config()

        try:
            self.tracked_folders = self._parse_tracked_folders(self._user_config.get('tracked_folders'))
        except ConfigInvalid as e:
            print(f"Invalid tracked folder list, tracking nothing: {e}")
            self.tracked_folders = []

        self.idle_timeout_ms = self._parse_interval(
            self._user_config.get('idle_timeout_ms'), self.DEFAULT_IDLE_TIMEOUT_MS
        )
        self.save_interval_ms = self._parse_interval(
            self._user_config.get('save_interval_ms'), self.DEFAULT_SAVE_INTERVAL_MS
        )

    def save(self) -> None:
        """Write the current settings back to the user's JSON file."""
        self._user_config['tracked_folders'] = list(self.tracked_folders)
        directory = os.path.dirname(self.config_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.config_path, 'w') as f:
            json.dump(self._user_config, f, indent=2)

    def set_tracked_folders(self, folders: List[str]) -> Optional[str]:
        """
        Replace the tracked-folder list and persist it.

        Returns an error message if the file could not be written; the
        in-memory list is updated either way.
        """
        self.tracked_folders = self._parse_tracked_folders(list(folders))
        try:
            self.save()
        except OSError as e:
            print(f"Could not save config {self.config_path}: {e}")
            return str(e)
        return None


# --- Singleton Instance ---
settings = Config()
