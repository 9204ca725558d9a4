import logging
import shutil
from pathlib import Path

from playdate_dev.core.settings import Settings

logger = logging.getLogger(__name__)

SDK_DOWNLOAD_PATTERNS = ("PlaydateSDK*.zip", "PlaydateSDK*.tar.gz", "PlaydateSDK*.pkg")


def _remove(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()
    logger.info("Removed %s", path)


def find_bundles(root: Path) -> list[Path]:
    """Return ``*.pdx`` bundle directories under *root*, outermost only."""
    if not root.is_dir():
        return []
    bundles = sorted(p for p in root.rglob("*.pdx") if p.is_dir())
    return [b for b in bundles if not any(parent in bundles for parent in b.parents)]


def find_sdk_downloads(sdk_path: Path) -> list[Path]:
    download_dir = sdk_path.parent
    if not download_dir.is_dir():
        return []
    found: list[Path] = []
    for pattern in SDK_DOWNLOAD_PATTERNS:
        found.extend(p for p in download_dir.glob(pattern) if p.is_file())
    macosx = download_dir / "__MACOSX"
    if macosx.is_dir():
        found.append(macosx)
    return sorted(found)


def clean_artifacts(settings: Settings, include_downloads: bool = True) -> list[Path]:
    """Delete built bundles in examples/templates and, optionally, SDK download leftovers."""
    targets = find_bundles(settings.examples_dir) + find_bundles(settings.templates_dir)
    if include_downloads:
        targets += find_sdk_downloads(settings.sdk_path)

    removed: list[Path] = []
    for target in targets:
        _remove(target)
        removed.append(target)
    return removed


def remove_sdk(settings: Settings) -> bool:
    """Delete the installed SDK directory. Returns False when there is none."""
    if not settings.sdk_path.is_dir():
        return False
    shutil.rmtree(settings.sdk_path)
    logger.info("Removed Playdate SDK at %s", settings.sdk_path)
    return True
