"""Build, run, watch, and device commands for the current project."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated

import typer

from playdate_dev.cli.common import console, fail, get_settings, print_build_result
from playdate_dev.core.build import find_source_dir, run_build
from playdate_dev.core.device import deploy_bundle, query_device
from playdate_dev.core.simulator import kill_simulator, launch_simulator, restart_simulator
from playdate_dev.core.watch import make_rebuild_callback, run_watcher
from playdate_dev.models import BuildResult
from playdate_dev.watcher.factory import select_watcher
from playdate_dev.watcher.polling import PollingWatcher


def build(
    project_dir: Annotated[str, typer.Argument(help="Project root directory.")] = ".",
    source: Annotated[str | None, typer.Option(help="Source directory, relative to the project.")] = None,
    output: Annotated[str | None, typer.Option(help="Output .pdx path (defaults to output.pdx).")] = None,
    timeout: Annotated[float | None, typer.Option(help="Give up on pdc after this many seconds.")] = None,
) -> None:
    """Compile the project with pdc."""
    settings = get_settings()
    result = asyncio.run(run_build(settings, project_dir, source_dir=source, output_path=output, timeout=timeout))
    print_build_result(result)
    if not result.success:
        raise typer.Exit(1)


def run(
    pdx: Annotated[str | None, typer.Argument(help="Bundle to open (defaults to ./output.pdx).")] = None,
    restart: Annotated[bool, typer.Option("--restart", help="Stop a running simulator first.")] = False,
) -> None:
    """Open a built bundle in the Playdate Simulator."""
    launcher = restart_simulator if restart else launch_simulator
    result = asyncio.run(launcher(get_settings(), pdx))
    if not result.success:
        raise fail(result.error or "Could not launch the simulator")
    console.print("[green]Simulator launched.[/green]")


def stop_simulator() -> None:
    """Stop the running Playdate Simulator."""
    if asyncio.run(kill_simulator(get_settings())):
        console.print("[green]Simulator stopped.[/green]")
    else:
        console.print("Simulator is not running.")


def deploy(
    pdx: Annotated[str | None, typer.Argument(help="Bundle to install (defaults to ./output.pdx).")] = None,
) -> None:
    """Install a bundle on a Playdate connected over USB."""
    console.print("Deploying to device...")
    result = asyncio.run(deploy_bundle(get_settings(), pdx))
    if not result.success:
        raise fail(result.error or "Deploy failed")
    console.print("[green]Installed on device.[/green]")


def device() -> None:
    """Show the connected device's serial number and firmware."""
    info = asyncio.run(query_device(get_settings()))
    if not info.connected:
        raise fail(info.error or "Device not connected")
    console.print("Device: [green]connected[/green]")
    console.print(f"  Serial:   {info.serial_number or 'unknown'}", highlight=False)
    console.print(f"  Firmware: {info.firmware_version or 'unknown'}", highlight=False)


def watch(
    project_dir: Annotated[str, typer.Argument(help="Project root directory.")] = ".",
    source: Annotated[str | None, typer.Option(help="Source directory, relative to the project.")] = None,
    output: Annotated[str | None, typer.Option(help="Output .pdx path (defaults to output.pdx).")] = None,
    poll: Annotated[bool, typer.Option("--poll", help="Poll for changes instead of native notifications.")] = False,
    launch: Annotated[bool, typer.Option("--run/--no-run", help="Open the simulator after the first build.")] = True,
) -> None:
    """Rebuild the project whenever its source changes."""
    settings = get_settings()
    project = Path(project_dir).resolve()
    source_dir = find_source_dir(project, source)
    if source_dir is None:
        raise fail("No source directory found (looking for source/, Source/, or src/)")

    def _report(result: BuildResult) -> None:
        print_build_result(result)

    async def _run() -> None:
        first = await run_build(settings, project, source_dir=source_dir, output_path=output)
        _report(first)
        if first.success and launch:
            run_result = await launch_simulator(settings, first.output_path)
            if not run_result.success:
                console.print(f"[yellow]{run_result.error}[/yellow]", highlight=False)

        on_change = make_rebuild_callback(settings, project, _report, source_dir=source_dir, output_path=output)
        watcher = select_watcher(settings, source_dir, on_change, force_polling=poll)
        mode = "polling" if isinstance(watcher, PollingWatcher) else "native"
        console.print(f"Watching {source_dir} for changes ({mode})... (Ctrl+C to stop)", highlight=False)
        await run_watcher(watcher)

    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        console.print("Stopped watching.")
