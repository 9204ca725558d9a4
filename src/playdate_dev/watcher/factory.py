import re
from pathlib import Path

from playdate_dev.core.platform import OsFamily
from playdate_dev.core.ports.watcher import ChangeCallback, FileWatcherPort
from playdate_dev.core.settings import Settings
from playdate_dev.watcher.polling import DEFAULT_POLL_INTERVAL, PollingWatcher
from playdate_dev.watcher.watchfiles_adapter import WatchfilesWatcher

# Windows drives mounted into WSL do not deliver inotify events.
_WSL_WINDOWS_DRIVE_RE = re.compile(r"^/mnt/[a-zA-Z](/|$)")


def needs_polling(settings: Settings, directory: Path) -> bool:
    if settings.platform.os is OsFamily.UNKNOWN:
        return True
    if settings.platform.os is OsFamily.WSL:
        return bool(_WSL_WINDOWS_DRIVE_RE.match(directory.resolve().as_posix()))
    return False


def select_watcher(
    settings: Settings,
    directory: str | Path,
    on_change: ChangeCallback,
    force_polling: bool = False,
    interval: float = DEFAULT_POLL_INTERVAL,
) -> FileWatcherPort:
    """Pick the native or polling backend once, at startup."""
    directory = Path(directory)
    if force_polling or needs_polling(settings, directory):
        return PollingWatcher(directory, on_change, interval=interval)
    return WatchfilesWatcher(directory, on_change)
