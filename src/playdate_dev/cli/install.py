"""Interactive environment installer and platform info."""

from __future__ import annotations

import shutil
import subprocess
import webbrowser
from typing import Annotated

import typer
from rich.rule import Rule

from playdate_dev.cli.common import console, fail, get_settings
from playdate_dev.core import installer
from playdate_dev.core.platform import OsFamily, package_manager, simulator_process_name
from playdate_dev.core.settings import Settings


def _header(title: str) -> None:
    console.print(Rule(f"[bold]{title}[/bold]", style="cyan"))


def _run(argv: list[str]) -> bool:
    console.print(f"[blue]▶[/blue] {' '.join(argv)}", highlight=False)
    try:
        result = subprocess.run(argv, check=False)
    except OSError as err:
        console.print(f"[red]✖[/red] {err}")
        return False
    return result.returncode == 0


def _preflight(settings: Settings, assume_yes: bool) -> None:
    _header("Pre-flight checks")
    platform = settings.platform
    if platform.os is OsFamily.UNKNOWN:
        console.print("[red]✖[/red] Unknown platform. Supported: macOS, Linux, WSL, Windows.")
        raise typer.Exit(1)
    console.print(f"[green]✔[/green] Detected platform: {platform.os.value} ({platform.arch})")
    if platform.distro is not None:
        console.print(f"[cyan]ℹ[/cyan] Distribution: {platform.distro.value}")
    if platform.os is OsFamily.WSL:
        console.print("[yellow]⚠[/yellow] Some features may require Windows-native tools")
    if not assume_yes and not typer.confirm("Continue with the installation?", default=True):
        raise typer.Exit(1)


def _package_manager(settings: Settings, assume_yes: bool) -> None:
    _header("Package manager")
    manager = package_manager(settings.platform)
    if manager is None:
        console.print("[yellow]⚠[/yellow] No package manager found")
        if settings.platform.os is OsFamily.WINDOWS:
            console.print("[cyan]ℹ[/cyan] Install winget (App Installer) or Chocolatey from https://chocolatey.org/install")
        return
    console.print(f"[green]✔[/green] Using package manager: {manager}")
    command = installer.refresh_command(manager)
    if command and (assume_yes or typer.confirm(f"Run '{' '.join(command)}'?", default=False)):
        _run(command)


def _install_sdk(settings: Settings, assume_yes: bool) -> None:
    _header("Playdate SDK")
    sdk_path = settings.sdk_path
    if sdk_path.is_dir():
        console.print(f"[green]✔[/green] Playdate SDK already installed at {sdk_path}")
        return

    download_dir = sdk_path.parent
    download_dir.mkdir(parents=True, exist_ok=True)
    download = installer.find_sdk_download(settings.platform, download_dir)
    if download is None:
        console.print("[yellow]⚠[/yellow] The Playdate SDK requires a manual download:")
        console.print(f"  1. Visit {installer.SDK_DOWNLOAD_URL} and sign in")
        console.print(f"  2. Download the SDK for {settings.platform.os.value}")
        console.print(f"  3. Move the downloaded file to {download_dir}", highlight=False)
        webbrowser.open(installer.SDK_DOWNLOAD_URL)
        if not assume_yes:
            typer.prompt("Press Enter after downloading the SDK", default="", show_default=False)
        download = installer.find_sdk_download(settings.platform, download_dir)
        if download is None:
            console.print(f"[red]✖[/red] SDK download not found in {download_dir}; re-run after downloading.")
            raise typer.Exit(1)

    try:
        if not installer.is_installer(download):
            console.print(f"[blue]▶[/blue] Extracting {download.name}...")
            new_entries = installer.unpack_sdk_archive(download)
            packaged = [p for p in new_entries if p.is_file() and installer.is_installer(p)]
            if not packaged:
                installer.finalize_sdk_directory(sdk_path, download)
                console.print(f"[green]✔[/green] Playdate SDK installed to {sdk_path}")
                return
            download.unlink()
            download = packaged[0]

        console.print(f"[cyan]ℹ[/cyan] Opening installer {download.name}; complete it, then return here.")
        _run(installer.open_command(settings.platform, download))
        if not assume_yes:
            typer.prompt("Press Enter after installation is complete", default="", show_default=False)
        if not sdk_path.is_dir():
            raise installer.InstallError(f"SDK installation failed - {sdk_path} not found")
        download.unlink(missing_ok=True)
        console.print(f"[green]✔[/green] Playdate SDK installed to {sdk_path}")
    except installer.InstallError as err:
        console.print(f"[red]✖[/red] {err}")
        raise typer.Exit(1) from err


def _install_extensions(assume_yes: bool) -> None:
    _header("IDE extensions")
    editor = installer.find_editor_cli()
    if editor is None:
        console.print("[yellow]⚠[/yellow] VS Code not found - install these extensions manually:")
        for ext in installer.EDITOR_EXTENSIONS:
            console.print(f"  - {ext}")
        return
    if not assume_yes and not typer.confirm(f"Install extensions with '{editor}'?", default=True):
        return
    for command in installer.extension_commands(editor):
        if not _run(command):
            console.print(f"[yellow]⚠[/yellow] Could not install {command[-1]}")


def _summary(settings: Settings) -> None:
    _header("Setup complete")
    console.print(f"Add to {installer.shell_rc(settings.platform)}:")
    for line in installer.shell_setup_lines(settings):
        console.print(f"  [cyan]{line}[/cyan]", highlight=False)
    console.print("")
    console.print("Then create a project: [cyan]playdate-dev new MyGame[/cyan]")


def install(
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Answer yes to every prompt.")] = False,
    skip_extensions: Annotated[bool, typer.Option(help="Do not install IDE extensions.")] = False,
) -> None:
    """Install the Playdate SDK and editor tooling."""
    settings = get_settings()
    _preflight(settings, yes)
    _package_manager(settings, yes)
    _install_sdk(settings, yes)
    if not skip_extensions:
        _install_extensions(yes)
    _summary(settings)


def info() -> None:
    """Show the detected platform and SDK locations."""
    settings = get_settings()
    platform = settings.platform

    def _presence(path_exists: bool) -> str:
        return "[green]found[/green]" if path_exists else "[red]missing[/red]"

    console.print(f"Platform:        {platform.os.value}")
    console.print(f"Architecture:    {platform.arch}")
    if platform.distro is not None:
        console.print(f"Distribution:    {platform.distro.value}")
    console.print(f"Package manager: {package_manager(platform) or 'unknown'}")
    console.print(f"SDK path:        {settings.sdk_path} ({_presence(settings.sdk_path.is_dir())})", highlight=False)
    console.print(f"pdc:             {settings.pdc_path} ({_presence(settings.pdc_path.exists())})", highlight=False)
    console.print(f"pdutil:          {settings.pdutil_path} ({_presence(settings.pdutil_path.exists())})", highlight=False)
    console.print(
        f"Simulator:       {settings.simulator_path} ({_presence(settings.simulator_path.exists())})", highlight=False
    )
    console.print(f"Process name:    {simulator_process_name(platform)}")
    console.print(f"Templates:       {settings.templates_dir}", highlight=False)
    console.print(f"Examples:        {settings.examples_dir}", highlight=False)
    editor = installer.find_editor_cli(shutil.which)
    console.print(f"Editor CLI:      {editor or 'none'}")


def docs() -> None:
    """Open the Inside Playdate documentation."""
    settings = get_settings()
    target = installer.docs_location(settings)
    if not _run(installer.open_command(settings.platform, target)):
        raise fail(f"Could not open {target}")
