import asyncio
import logging
from pathlib import Path

from playdate_dev.core.build import DEFAULT_OUTPUT_NAME
from playdate_dev.core.exec import ExecResult, run_command, spawn_detached
from playdate_dev.core.platform import OsFamily, PlatformInfo, simulator_process_name
from playdate_dev.core.settings import Settings
from playdate_dev.models import RunResult

logger = logging.getLogger(__name__)

# Give the old simulator time to exit before relaunching.
RESTART_DELAY = 1.0


def simulator_launch_command(
    platform: PlatformInfo, simulator: str, bundle: str | None
) -> tuple[str, list[str], bool]:
    """Return ``(program, args, detached)`` to open *bundle* in the simulator.

    *simulator* and *bundle* must already be in the form the launcher expects
    (Windows paths for WSL). Detached launches are not waited on.
    """
    extra = [bundle] if bundle else []
    if platform.os is OsFamily.MACOS:
        return "open", ["-a", simulator, *extra], False
    if platform.os is OsFamily.WSL:
        return "cmd.exe", ["/c", simulator, *extra], True
    if platform.os in (OsFamily.LINUX, OsFamily.WINDOWS, OsFamily.UNKNOWN):
        return simulator, extra, True
    raise AssertionError(f"Unhandled platform: {platform.os}")


async def to_windows_path(path: Path) -> str:
    """Convert a WSL path with ``wslpath -w``, keeping the POSIX path on failure."""
    result = await run_command("wslpath", ["-w", path])
    converted = result.stdout.strip()
    return converted if result.exit_code == 0 and converted else str(path)


async def open_in_simulator(settings: Settings, bundle: Path | None) -> ExecResult:
    simulator = settings.simulator_path
    if settings.platform.os is OsFamily.WSL:
        sim_arg = await to_windows_path(simulator)
        bundle_arg = await to_windows_path(bundle) if bundle else None
    else:
        sim_arg = str(simulator)
        bundle_arg = str(bundle) if bundle else None

    program, args, detached = simulator_launch_command(settings.platform, sim_arg, bundle_arg)
    if detached:
        return spawn_detached(program, args)
    return await run_command(program, args)


async def launch_simulator(settings: Settings, pdx_path: str | Path | None = None) -> RunResult:
    """Open a built bundle in the Playdate Simulator.

    Success only means the launcher reported success, not that the simulator
    finished starting.
    """
    bundle = Path(pdx_path).resolve() if pdx_path else Path.cwd() / DEFAULT_OUTPUT_NAME
    simulator = settings.simulator_path

    if not bundle.exists():
        return RunResult(success=False, simulator_launched=False, error=f"PDX not found: {bundle}")

    if not simulator.exists():
        return RunResult(success=False, simulator_launched=False, error=f"Playdate Simulator not found at {simulator}")

    result = await open_in_simulator(settings, bundle)
    launched = result.exit_code == 0
    return RunResult(
        success=launched,
        simulator_launched=launched,
        error=None if launched else result.stderr,
    )


def simulator_check_command(platform: PlatformInfo) -> list[str] | None:
    """Command whose success means the simulator is running, or None when unsupported.

    On Windows the ``tasklist`` output still has to be searched for the process.
    """
    name = simulator_process_name(platform)
    if platform.os is OsFamily.MACOS:
        return ["pgrep", "-x", name]
    if platform.os in (OsFamily.LINUX, OsFamily.WSL):
        return ["pgrep", "-f", name]
    if platform.os is OsFamily.WINDOWS:
        return ["tasklist"]
    if platform.os is OsFamily.UNKNOWN:
        return None
    raise AssertionError(f"Unhandled platform: {platform.os}")


def simulator_kill_command(platform: PlatformInfo) -> list[str] | None:
    name = simulator_process_name(platform)
    if platform.os is OsFamily.MACOS:
        return ["pkill", "-x", name]
    if platform.os in (OsFamily.LINUX, OsFamily.WSL):
        return ["pkill", "-f", name]
    if platform.os is OsFamily.WINDOWS:
        return ["taskkill", "/IM", f"{name}.exe", "/F"]
    if platform.os is OsFamily.UNKNOWN:
        return None
    raise AssertionError(f"Unhandled platform: {platform.os}")


async def is_simulator_running(settings: Settings) -> bool:
    command = simulator_check_command(settings.platform)
    if command is None:
        return False
    result = await run_command(command[0], command[1:])
    if result.exit_code != 0:
        return False
    if settings.platform.os is OsFamily.WINDOWS:
        image = f"{simulator_process_name(settings.platform)}.exe"
        return image.lower() in result.stdout.lower()
    return True


async def kill_simulator(settings: Settings) -> bool:
    """Stop the running simulator. Returns False when none was running or it could not be stopped."""
    if not await is_simulator_running(settings):
        return False
    command = simulator_kill_command(settings.platform)
    if command is None:
        return False
    result = await run_command(command[0], command[1:])
    if result.exit_code != 0:
        logger.warning("Could not stop the simulator: %s", result.stderr.strip() or f"exit code {result.exit_code}")
        return False
    return True


async def restart_simulator(settings: Settings, pdx_path: str | Path | None = None) -> RunResult:
    """Stop any running simulator, then open *pdx_path* in a fresh one."""
    if await kill_simulator(settings):
        await asyncio.sleep(RESTART_DELAY)
    return await launch_simulator(settings, pdx_path)
