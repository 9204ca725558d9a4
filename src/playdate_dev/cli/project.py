"""Project scaffolding and catalog commands."""

from __future__ import annotations

import asyncio
from typing import Annotated

import typer
from rich.table import Table

from playdate_dev.cli.common import console, fail, get_settings, print_build_result
from playdate_dev.core.build import run_build
from playdate_dev.core.catalog import find_example, list_examples, list_templates
from playdate_dev.core.clean import clean_artifacts, remove_sdk
from playdate_dev.core.create import DEFAULT_TEMPLATE, create_project
from playdate_dev.core.simulator import launch_simulator


def new(
    name: Annotated[str, typer.Argument(help="Project name; created as a directory.")],
    template: Annotated[str, typer.Option("--template", "-t", help="Template to copy.")] = DEFAULT_TEMPLATE,
    output_dir: Annotated[str | None, typer.Option(help="Parent directory (defaults to cwd).")] = None,
) -> None:
    """Create a new project from a template."""
    settings = get_settings()
    result = create_project(settings, name, template, output_dir)
    if not result.success:
        if result.error and result.error.startswith("Template not found"):
            available = ", ".join(t.name for t in list_templates(settings))
            console.print(f"Available templates: {available}")
        raise fail(result.error or "Project creation failed")

    console.print(f"[green]Created project[/green] {result.project_path} (template: {result.template})")
    console.print("")
    console.print("Next steps:")
    console.print(f"  cd {name}")
    console.print("  playdate-dev build && playdate-dev run")


def templates() -> None:
    """List available project templates."""
    rows = list_templates(get_settings())
    table = Table(show_lines=False)
    table.add_column("name")
    table.add_column("description")
    for t in rows:
        table.add_row(t.name, t.description)
    console.print(table)
    console.print(f"({len(rows)} templates)")


def examples() -> None:
    """List example projects."""
    rows = list_examples(get_settings())
    table = Table(show_lines=False)
    table.add_column("name")
    table.add_column("built")
    for e in rows:
        table.add_row(e.name, "yes" if e.has_built_pdx else "no")
    console.print(table)
    console.print(f"({len(rows)} examples)")


def run_example(
    example: Annotated[str, typer.Argument(help="Example name (see 'examples').")],
) -> None:
    """Build an example and open it in the simulator."""
    settings = get_settings()
    example_dir = find_example(settings, example)
    if example_dir is None:
        available = ", ".join(e.name for e in list_examples(settings))
        console.print(f"Available examples: {available}")
        raise fail(f"Example '{example}' not found")

    console.print(f"Building {example}...")
    build_result = asyncio.run(run_build(settings, example_dir))
    print_build_result(build_result)
    if not build_result.success:
        raise typer.Exit(1)

    console.print("Launching simulator...")
    run_result = asyncio.run(launch_simulator(settings, build_result.output_path))
    if not run_result.success:
        raise fail(run_result.error or "Could not launch the simulator")


def clean(
    keep_downloads: Annotated[
        bool, typer.Option(help="Keep SDK download archives in the SDK's parent directory.")
    ] = False,
    sdk: Annotated[bool, typer.Option("--sdk", help="Also delete the installed Playdate SDK.")] = False,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Do not ask before deleting the SDK.")] = False,
) -> None:
    """Remove built bundles from examples/templates and SDK download leftovers.

    Download leftovers (PlaydateSDK* archives and __MACOSX) are looked for in
    the directory that holds the SDK, which is the home directory on Linux.
    """
    settings = get_settings()
    removed = clean_artifacts(settings, include_downloads=not keep_downloads)
    for path in removed:
        console.print(f"Removed {path}", highlight=False)
    console.print(f"[green]Cleaned {len(removed)} artifact(s).[/green]")

    if not sdk:
        return
    if not settings.sdk_path.is_dir():
        console.print(f"No Playdate SDK at {settings.sdk_path}", highlight=False)
        return
    if not yes and not typer.confirm(f"Remove the Playdate SDK from {settings.sdk_path}?", default=False):
        console.print("Cancelled")
        return
    remove_sdk(settings)
    console.print("[green]Playdate SDK removed.[/green]")
