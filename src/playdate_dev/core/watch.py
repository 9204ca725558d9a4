import logging
from collections.abc import Callable
from pathlib import Path

from playdate_dev.core.build import run_build
from playdate_dev.core.ports.watcher import ChangeCallback, FileWatcherPort
from playdate_dev.core.settings import Settings
from playdate_dev.models import BuildResult

logger = logging.getLogger(__name__)


def make_rebuild_callback(
    settings: Settings,
    project_dir: Path,
    on_result: Callable[[BuildResult], object],
    source_dir: str | Path | None = None,
    output_path: str | Path | None = None,
) -> ChangeCallback:
    """Return a watcher callback that rebuilds the project on every change.

    Builds run one after another; a burst of changes may trigger several.
    """

    async def _rebuild(paths: set[Path]) -> None:
        logger.info("Rebuilding %s after %d changed file(s)", project_dir, len(paths))
        result = await run_build(settings, project_dir, source_dir=source_dir, output_path=output_path)
        on_result(result)

    return _rebuild


async def run_watcher(watcher: FileWatcherPort) -> None:
    """Run *watcher* until it ends or the surrounding task is cancelled."""
    await watcher.start()
    try:
        await watcher.wait()
    finally:
        await watcher.stop()
