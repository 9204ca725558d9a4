import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from playdate_dev.cli.build import build, deploy, device, run, stop_simulator, watch
from playdate_dev.cli.install import docs, info, install
from playdate_dev.cli.project import clean, examples, new, run_example, templates
from playdate_dev.cli.serve import serve

app = typer.Typer(
    name="playdate-dev",
    help="Playdate dev environment — scaffold, build, run, and deploy Playdate games.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def _configure(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging.")] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


app.command("new")(new)
app.command("templates")(templates)
app.command("examples")(examples)
app.command("run-example")(run_example)
app.command("clean")(clean)
app.command("build")(build)
app.command("run")(run)
app.command("kill-simulator")(stop_simulator)
app.command("watch")(watch)
app.command("deploy")(deploy)
app.command("device")(device)
app.command("info")(info)
app.command("install")(install)
app.command("docs")(docs)
app.command("serve")(serve)


def main() -> None:
    app()
