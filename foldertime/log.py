"""Console and debug logging helpers."""
import datetime
from .config import DEBUG_MODE, DEBUG_LOG_PATH


def log(message: str) -> None:
    """Print a timestamped line to the console."""
    print(f"[{datetime.datetime.now().isoformat(timespec='seconds')}] {message}")


def debug_log(message: str) -> None:
    """Write debug message to log file if debug mode is enabled."""
    if DEBUG_MODE:
        timestamp = datetime.datetime.now().isoformat(timespec='milliseconds')
        try:
            with open(DEBUG_LOG_PATH, 'a') as f:
                f.write(f"[{timestamp}] {message}\n")
        except OSError as e:
            print(f"Debug log unavailable: {e}")
