import typer
from rich.console import Console

from playdate_dev.core.settings import Settings, load_settings
from playdate_dev.models import BuildResult, Diagnostic

console = Console()


def get_settings() -> Settings:
    try:
        return load_settings()
    except ValueError as err:
        console.print(f"[red]{err}[/red]")
        raise typer.Exit(1) from err


def _format_diagnostic(diagnostic: Diagnostic) -> str:
    if not diagnostic.file:
        return diagnostic.message
    return f"{diagnostic.file}:{diagnostic.line}: {diagnostic.message}"


def print_build_result(result: BuildResult) -> None:
    for warning in result.warnings:
        console.print(f"[yellow]warning[/yellow] {_format_diagnostic(warning)}", highlight=False)
    for error in result.errors:
        console.print(f"[red]error[/red] {_format_diagnostic(error)}", highlight=False)
    if result.success:
        console.print(f"[green]Built[/green] {result.output_path}")
    else:
        console.print("[red]Build failed.[/red]")


def fail(message: str) -> typer.Exit:
    """Print *message* in red and return the Exit to raise."""
    console.print(f"[red]{message}[/red]", highlight=False)
    return typer.Exit(1)
