import logging
from pathlib import Path

from playdate_dev.core.exec import run_command
from playdate_dev.core.pdc_parser import parse_pdc_output
from playdate_dev.core.settings import Settings
from playdate_dev.models import BuildResult, Diagnostic

logger = logging.getLogger(__name__)

SOURCE_DIR_CANDIDATES = ("source", "Source", "src")
DEFAULT_OUTPUT_NAME = "output.pdx"


def _failure(message: str) -> BuildResult:
    return BuildResult(
        success=False,
        output_path="",
        errors=[Diagnostic(file="", line=0, message=message, severity="error")],
        warnings=[],
    )


def find_source_dir(project_dir: Path, source_dir: str | Path | None = None) -> Path | None:
    """Resolve the source directory, or None when it does not exist."""
    if source_dir:
        candidate = (project_dir / source_dir).resolve()
        return candidate if candidate.exists() else None
    for name in SOURCE_DIR_CANDIDATES:
        candidate = project_dir / name
        if candidate.exists():
            return candidate
    return None


async def run_build(
    settings: Settings,
    project_dir: str | Path | None = None,
    source_dir: str | Path | None = None,
    output_path: str | Path | None = None,
    timeout: float | None = None,
) -> BuildResult:
    """Compile a project with pdc and parse its diagnostics.

    Precondition failures come back as a failed result carrying a single
    diagnostic with an empty file and line 0.
    """
    project = Path(project_dir or Path.cwd()).resolve()

    source = find_source_dir(project, source_dir)
    if source is None:
        return _failure("No source directory found (looking for source/, Source/, or src/)")

    output = (project / (output_path or DEFAULT_OUTPUT_NAME)).resolve()
    pdc = settings.pdc_path
    if not pdc.exists():
        return _failure(f"pdc compiler not found at {pdc}")

    result = await run_command(
        pdc,
        [source, output],
        cwd=project,
        timeout=timeout if timeout is not None else settings.command_timeout,
    )
    if result.timed_out:
        return _failure(result.stderr)

    # stderr may not end with a newline.
    errors, warnings = parse_pdc_output("\n".join(s for s in (result.stderr, result.stdout) if s))
    success = result.exit_code == 0

    if not success and not errors:
        logger.warning(
            "pdc exited with code %d but no diagnostics could be parsed from its output",
            result.exit_code,
        )

    return BuildResult(
        success=success,
        output_path=str(output) if success else "",
        errors=errors,
        warnings=warnings,
    )
