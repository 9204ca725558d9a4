import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from playdate_dev.core.platform import (
    PlatformInfo,
    default_sdk_path,
    detect_platform,
    sdk_tool_path,
    simulator_path,
)

SDK_PATH_ENV = "PLAYDATE_SDK_PATH"
DEV_ROOT_ENV = "PLAYDATE_DEV_ROOT"
COMMAND_TIMEOUT_ENV = "PLAYDATE_COMMAND_TIMEOUT"

# Bundled templates/ and examples/ live beside the package modules.
_PACKAGE_ROOT = Path(__file__).resolve().parent.parent


@dataclass(frozen=True)
class Settings:
    platform: PlatformInfo
    sdk_path: Path
    dev_root: Path
    command_timeout: float | None = None

    @property
    def pdc_path(self) -> Path:
        return sdk_tool_path(self.platform, self.sdk_path, "pdc")

    @property
    def pdutil_path(self) -> Path:
        return sdk_tool_path(self.platform, self.sdk_path, "pdutil")

    @property
    def simulator_path(self) -> Path:
        return simulator_path(self.platform, self.sdk_path)

    @property
    def templates_dir(self) -> Path:
        return self.dev_root / "templates"

    @property
    def examples_dir(self) -> Path:
        return self.dev_root / "examples"


def _parse_timeout(raw: str | None) -> float | None:
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{COMMAND_TIMEOUT_ENV} must be a number of seconds, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{COMMAND_TIMEOUT_ENV} must be positive, got {raw!r}")
    return value


def load_settings(
    environ: Mapping[str, str] | None = None,
    platform: PlatformInfo | None = None,
) -> Settings:
    """Build the process-wide settings from the environment.

    Environment overrides always win over the per-platform defaults.
    """
    env = os.environ if environ is None else environ
    resolved_platform = platform if platform is not None else detect_platform()

    sdk_override = env.get(SDK_PATH_ENV)
    sdk_path = Path(sdk_override).expanduser() if sdk_override else default_sdk_path(resolved_platform)

    root_override = env.get(DEV_ROOT_ENV)
    dev_root = Path(root_override).expanduser() if root_override else _PACKAGE_ROOT

    return Settings(
        platform=resolved_platform,
        sdk_path=sdk_path,
        dev_root=dev_root,
        command_timeout=_parse_timeout(env.get(COMMAND_TIMEOUT_ENV)),
    )
