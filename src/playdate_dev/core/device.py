import re
from pathlib import Path

from playdate_dev.core.build import DEFAULT_OUTPUT_NAME
from playdate_dev.core.exec import run_command
from playdate_dev.core.settings import Settings
from playdate_dev.models import DeployResult, DeviceInfo

NO_DEVICE_MESSAGE = "No Playdate device found. Ensure device is connected via USB and unlocked."

_SERIAL_RE = re.compile(r"serial[:\s]+(\S+)", re.IGNORECASE)
_VERSION_RE = re.compile(r"version[:\s]+(\S+)", re.IGNORECASE)


def parse_device_info(output: str) -> tuple[str | None, str | None]:
    """Best-effort (serial, firmware) scrape of ``pdutil info`` output."""
    serial = _SERIAL_RE.search(output)
    version = _VERSION_RE.search(output)
    return (serial.group(1) if serial else None, version.group(1) if version else None)


async def query_device(settings: Settings, timeout: float | None = None) -> DeviceInfo:
    pdutil = settings.pdutil_path
    if not pdutil.exists():
        return DeviceInfo(connected=False, error=f"pdutil not found at {pdutil}")

    if timeout is None:
        timeout = settings.command_timeout
    result = await run_command(pdutil, ["info"], timeout=timeout)
    if result.exit_code != 0:
        return DeviceInfo(connected=False, error=result.stderr if result.timed_out else NO_DEVICE_MESSAGE)

    serial, firmware = parse_device_info(result.stdout)
    return DeviceInfo(connected=True, serial_number=serial, firmware_version=firmware)


async def deploy_bundle(
    settings: Settings,
    pdx_path: str | Path | None = None,
    timeout: float | None = None,
) -> DeployResult:
    """Install a bundle on the connected device, probing the connection first."""
    bundle = Path(pdx_path).resolve() if pdx_path else Path.cwd() / DEFAULT_OUTPUT_NAME
    pdutil = settings.pdutil_path
    if timeout is None:
        timeout = settings.command_timeout

    if not bundle.exists():
        return DeployResult(success=False, error=f"PDX not found: {bundle}")

    if not pdutil.exists():
        return DeployResult(success=False, error=f"pdutil not found at {pdutil}")

    probe = await run_command(pdutil, ["info"], timeout=timeout)
    if probe.exit_code != 0:
        return DeployResult(success=False, error=probe.stderr if probe.timed_out else NO_DEVICE_MESSAGE)

    install = await run_command(pdutil, ["install", bundle], timeout=timeout)
    if install.exit_code != 0:
        return DeployResult(success=False, error=install.stderr or "Installation failed")
    return DeployResult(success=True)
