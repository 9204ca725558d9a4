import platform as _stdlib_platform
import shutil
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class OsFamily(str, Enum):
    MACOS = "macos"
    LINUX = "linux"
    WSL = "wsl"
    WINDOWS = "windows"
    UNKNOWN = "unknown"


class LinuxDistro(str, Enum):
    DEBIAN = "debian"
    FEDORA = "fedora"
    ARCH = "arch"
    SUSE = "suse"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class PlatformInfo:
    os: OsFamily
    arch: str
    distro: LinuxDistro | None = None


_ARCH_ALIASES = {
    "x86_64": "x64",
    "amd64": "x64",
    "arm64": "arm64",
    "aarch64": "arm64",
    "armhf": "arm",
    "i386": "x86",
    "i686": "x86",
}

_DISTRO_IDS = {
    "ubuntu": LinuxDistro.DEBIAN,
    "debian": LinuxDistro.DEBIAN,
    "pop": LinuxDistro.DEBIAN,
    "linuxmint": LinuxDistro.DEBIAN,
    "elementary": LinuxDistro.DEBIAN,
    "fedora": LinuxDistro.FEDORA,
    "rhel": LinuxDistro.FEDORA,
    "centos": LinuxDistro.FEDORA,
    "rocky": LinuxDistro.FEDORA,
    "alma": LinuxDistro.FEDORA,
    "arch": LinuxDistro.ARCH,
    "manjaro": LinuxDistro.ARCH,
    "endeavouros": LinuxDistro.ARCH,
}

# Every lookup below is keyed by the full OsFamily enumeration.
_SDK_HOME_SUBDIRS: dict[OsFamily, tuple[str, ...]] = {
    OsFamily.MACOS: ("Developer", "PlaydateSDK"),
    OsFamily.LINUX: ("PlaydateSDK",),
    OsFamily.WSL: ("PlaydateSDK",),
    OsFamily.WINDOWS: ("Documents", "PlaydateSDK"),
    OsFamily.UNKNOWN: ("PlaydateSDK",),
}

_SIMULATOR_RELATIVE_PATHS: dict[OsFamily, tuple[str, ...]] = {
    OsFamily.MACOS: ("Playdate Simulator.app",),
    OsFamily.LINUX: ("bin", "PlaydateSimulator"),
    OsFamily.WSL: ("bin", "PlaydateSimulator"),
    OsFamily.WINDOWS: ("bin", "PlaydateSimulator.exe"),
    OsFamily.UNKNOWN: ("bin", "PlaydateSimulator"),
}

_SIMULATOR_PROCESS_NAMES: dict[OsFamily, str] = {
    OsFamily.MACOS: "Playdate Simulator",
    OsFamily.LINUX: "PlaydateSimulator",
    OsFamily.WSL: "PlaydateSimulator",
    OsFamily.WINDOWS: "PlaydateSimulator",
    OsFamily.UNKNOWN: "PlaydateSimulator",
}

_EXECUTABLE_SUFFIXES: dict[OsFamily, str] = {
    OsFamily.MACOS: "",
    OsFamily.LINUX: "",
    OsFamily.WSL: "",
    OsFamily.WINDOWS: ".exe",
    OsFamily.UNKNOWN: "",
}

_DISTRO_PACKAGE_MANAGERS: dict[LinuxDistro, str | None] = {
    LinuxDistro.DEBIAN: "apt",
    LinuxDistro.FEDORA: "dnf",
    LinuxDistro.ARCH: "pacman",
    LinuxDistro.SUSE: "zypper",
    LinuxDistro.UNKNOWN: None,
}

_WINDOWS_PACKAGE_MANAGERS = ("winget", "choco", "scoop")


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return ""


def normalize_arch(machine: str) -> str:
    machine = machine.lower()
    if machine.startswith("armv7"):
        return "arm"
    return _ARCH_ALIASES.get(machine, machine)


def detect_os_family(system: str, proc_version: str = "") -> OsFamily:
    """Map a ``uname -s`` style system name to an OsFamily."""
    if system == "Darwin":
        return OsFamily.MACOS
    if system == "Linux":
        return OsFamily.WSL if "microsoft" in proc_version.lower() else OsFamily.LINUX
    if system == "Windows" or system.upper().startswith(("MINGW", "MSYS", "CYGWIN")):
        return OsFamily.WINDOWS
    return OsFamily.UNKNOWN


def parse_os_release(content: str) -> LinuxDistro:
    """Classify an ``/etc/os-release`` body by its ``ID`` field."""
    for raw_line in content.splitlines():
        key, sep, value = raw_line.partition("=")
        if sep and key.strip() == "ID":
            distro_id = value.strip().strip('"').strip("'").lower()
            if distro_id in _DISTRO_IDS:
                return _DISTRO_IDS[distro_id]
            if distro_id.startswith(("opensuse", "suse")):
                return LinuxDistro.SUSE
            return LinuxDistro.UNKNOWN
    return LinuxDistro.UNKNOWN


def detect_platform(
    system: str | None = None,
    machine: str | None = None,
    proc_version_path: Path = Path("/proc/version"),
    os_release_path: Path = Path("/etc/os-release"),
) -> PlatformInfo:
    """Detect the host platform. Never raises; unreadable files degrade to defaults."""
    system = system if system is not None else _stdlib_platform.system()
    machine = machine if machine is not None else _stdlib_platform.machine()

    proc_version = _read_text(proc_version_path) if system == "Linux" else ""
    os_family = detect_os_family(system, proc_version)

    distro = None
    if os_family is OsFamily.LINUX:
        distro = parse_os_release(_read_text(os_release_path))

    return PlatformInfo(os=os_family, arch=normalize_arch(machine), distro=distro)


def default_sdk_path(platform: PlatformInfo, home: Path | None = None) -> Path:
    home = home if home is not None else Path.home()
    return home.joinpath(*_SDK_HOME_SUBDIRS[platform.os])


def simulator_path(platform: PlatformInfo, sdk_path: Path) -> Path:
    return sdk_path.joinpath(*_SIMULATOR_RELATIVE_PATHS[platform.os])


def simulator_process_name(platform: PlatformInfo) -> str:
    return _SIMULATOR_PROCESS_NAMES[platform.os]


def sdk_tool_path(platform: PlatformInfo, sdk_path: Path, tool: str) -> Path:
    """Path of a binary in the SDK ``bin`` directory (``pdc``, ``pdutil``)."""
    return sdk_path / "bin" / f"{tool}{_EXECUTABLE_SUFFIXES[platform.os]}"


def package_manager(
    platform: PlatformInfo,
    which: Callable[[str], str | None] = shutil.which,
) -> str | None:
    """Return the name of the native package manager, or None when there is none."""
    if platform.os is OsFamily.MACOS:
        return "brew"
    if platform.os is OsFamily.LINUX:
        return _DISTRO_PACKAGE_MANAGERS[platform.distro or LinuxDistro.UNKNOWN]
    if platform.os is OsFamily.WSL:
        return "apt"
    if platform.os is OsFamily.WINDOWS:
        for candidate in _WINDOWS_PACKAGE_MANAGERS:
            if which(candidate) is not None:
                return candidate
        return None
    return None
