"""Steps of the interactive environment installer.

The functions here decide *what* to run; ``playdate_dev.cli.install`` asks the
user before running any of it.
"""

from __future__ import annotations

import logging
import shutil
import stat
from collections.abc import Callable
from pathlib import Path

from playdate_dev.core.platform import OsFamily, PlatformInfo
from playdate_dev.core.settings import Settings

logger = logging.getLogger(__name__)

SDK_DOWNLOAD_URL = "https://play.date/dev/"
DOCS_URL = "https://sdk.play.date/Inside%20Playdate.html"
DOCS_RELATIVE_PATH = ("Documentation", "Inside Playdate.html")
SDK_NAME_PREFIX = "PlaydateSDK"

EDITOR_CLIS = ("code", "codium")
EDITOR_EXTENSIONS = ("sumneko.lua", "Orta.playdate")

_REFRESH_COMMANDS: dict[str, list[str]] = {
    "brew": ["brew", "update"],
    "apt": ["sudo", "apt", "update"],
    "dnf": ["sudo", "dnf", "check-update"],
    "pacman": ["sudo", "pacman", "-Sy"],
    "zypper": ["sudo", "zypper", "refresh"],
}

_ARCHIVE_PATTERNS: dict[OsFamily, tuple[str, ...]] = {
    OsFamily.MACOS: ("PlaydateSDK*.zip", "PlaydateSDK*.pkg"),
    OsFamily.LINUX: ("PlaydateSDK*.tar.gz", "PlaydateSDK*.zip"),
    OsFamily.WSL: ("PlaydateSDK*.tar.gz", "PlaydateSDK*.zip"),
    OsFamily.WINDOWS: ("PlaydateSDK*.zip", "PlaydateSDK*.exe"),
    OsFamily.UNKNOWN: ("PlaydateSDK*.tar.gz", "PlaydateSDK*.zip"),
}

_SHELL_RC: dict[OsFamily, str] = {
    OsFamily.MACOS: "~/.zshrc",
    OsFamily.LINUX: "~/.bashrc",
    OsFamily.WSL: "~/.bashrc",
    OsFamily.WINDOWS: "~/.bashrc (Git Bash)",
    OsFamily.UNKNOWN: "your shell profile",
}

_INSTALLER_SUFFIXES = (".pkg", ".exe")


class InstallError(Exception):
    """An installer step could not complete."""


def refresh_command(manager: str | None) -> list[str] | None:
    """Command that refreshes the package index, or None when the manager has none."""
    if manager is None:
        return None
    return _REFRESH_COMMANDS.get(manager)


def find_sdk_download(platform: PlatformInfo, download_dir: Path) -> Path | None:
    """Return the first downloaded SDK archive or installer in *download_dir*."""
    if not download_dir.is_dir():
        return None
    for pattern in _ARCHIVE_PATTERNS[platform.os]:
        matches = sorted(p for p in download_dir.glob(pattern) if p.is_file())
        if matches:
            return matches[0]
    return None


def is_installer(path: Path) -> bool:
    return path.suffix.lower() in _INSTALLER_SUFFIXES


def unpack_sdk_archive(archive: Path) -> list[Path]:
    """Extract *archive* next to itself and return the new top-level entries."""
    target = archive.parent
    before = set(target.iterdir())
    try:
        shutil.unpack_archive(str(archive), str(target))
    except (shutil.ReadError, ValueError) as err:
        raise InstallError(f"Could not extract {archive.name}: {err}") from err
    return sorted(set(target.iterdir()) - before)


def finalize_sdk_directory(sdk_path: Path, archive: Path | None = None) -> Path:
    """Rename an extracted ``PlaydateSDK-x.y.z`` directory to *sdk_path*.

    Removes the archive once the SDK is in place and marks the bundled tools
    executable.
    """
    parent = sdk_path.parent
    extracted = sorted(
        p for p in parent.glob(f"{SDK_NAME_PREFIX}*") if p.is_dir() and p.name != sdk_path.name
    )
    if extracted:
        if sdk_path.exists():
            shutil.rmtree(sdk_path)
        extracted[0].rename(sdk_path)
        logger.info("Moved %s to %s", extracted[0], sdk_path)

    if not sdk_path.is_dir():
        raise InstallError(f"Could not find SDK directory after extraction (expected {sdk_path})")

    make_tools_executable(sdk_path)
    if archive is not None and archive.exists():
        archive.unlink()
    return sdk_path


def make_tools_executable(sdk_path: Path) -> None:
    bin_dir = sdk_path / "bin"
    if not bin_dir.is_dir():
        return
    for tool in bin_dir.iterdir():
        if tool.is_file():
            mode = tool.stat().st_mode
            tool.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


def open_command(platform: PlatformInfo, target: str | Path) -> list[str]:
    """Command that opens *target* with the platform's default handler."""
    if platform.os is OsFamily.MACOS:
        return ["open", str(target)]
    if platform.os is OsFamily.WSL:
        return ["cmd.exe", "/c", "start", "", str(target)]
    if platform.os is OsFamily.WINDOWS:
        return ["cmd", "/c", "start", "", str(target)]
    if platform.os in (OsFamily.LINUX, OsFamily.UNKNOWN):
        return ["xdg-open", str(target)]
    raise AssertionError(f"Unhandled platform: {platform.os}")


def docs_location(settings: Settings) -> str:
    """Local copy of Inside Playdate when the SDK ships one, otherwise the online docs."""
    local = settings.sdk_path.joinpath(*DOCS_RELATIVE_PATH)
    return str(local) if local.is_file() else DOCS_URL


def find_editor_cli(which: Callable[[str], str | None] = shutil.which) -> str | None:
    for candidate in EDITOR_CLIS:
        if which(candidate) is not None:
            return candidate
    return None


def extension_commands(editor_cli: str) -> list[list[str]]:
    return [[editor_cli, "--install-extension", ext] for ext in EDITOR_EXTENSIONS]


def shell_rc(platform: PlatformInfo) -> str:
    return _SHELL_RC[platform.os]


def shell_setup_lines(settings: Settings) -> list[str]:
    """Lines to add to a POSIX shell profile so the SDK tools are on PATH."""
    return [
        f'export PLAYDATE_SDK_PATH="{settings.sdk_path}"',
        'export PATH="$PLAYDATE_SDK_PATH/bin:$PATH"',
    ]
