from __future__ import annotations

import asyncio
import contextlib
import hashlib
import logging
from pathlib import Path

from playdate_dev.core.ports.watcher import ChangeCallback
from playdate_dev.watcher.filters import is_project_file

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 2.0


def snapshot(directory: Path) -> dict[Path, str]:
    """Map each project file under *directory* to the hash of its content."""
    digests: dict[Path, str] = {}
    if not directory.is_dir():
        return digests
    for path in sorted(directory.rglob("*")):
        if not path.is_file() or not is_project_file(path.relative_to(directory)):
            continue
        try:
            digests[path] = hashlib.md5(path.read_bytes(), usedforsecurity=False).hexdigest()
        except OSError:
            continue
    return digests


def changed_paths(before: dict[Path, str], after: dict[Path, str]) -> set[Path]:
    return {p for p in before.keys() | after.keys() if before.get(p) != after.get(p)}


class PollingWatcher:
    """Watch a project directory by re-hashing its files on a fixed interval.

    Implements the ``FileWatcherPort`` protocol for filesystems that do not
    deliver change notifications.
    """

    def __init__(
        self,
        directory: str | Path,
        on_change: ChangeCallback,
        interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        self._directory = Path(directory)
        self._on_change = on_change
        self._interval = interval
        self._task: asyncio.Task[None] | None = None

    async def start(self) -> None:
        if self._task is not None:
            return
        self._task = asyncio.create_task(self._watch())
        logger.info("Polling watcher started for %s (every %ss)", self._directory, self._interval)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Polling watcher stopped for %s", self._directory)

    async def wait(self) -> None:
        """Block until the watch loop ends."""
        if self._task is not None:
            await self._task

    async def _watch(self) -> None:
        previous = await asyncio.to_thread(snapshot, self._directory)
        while True:
            await asyncio.sleep(self._interval)
            current = await asyncio.to_thread(snapshot, self._directory)
            paths = changed_paths(previous, current)
            previous = current
            if paths:
                logger.info("Detected changes in %d file(s)", len(paths))
                try:
                    await self._on_change(paths)
                except Exception:
                    logger.exception("Error in watcher callback")
