import re

from playdate_dev.models import Diagnostic

# pdc reports problems as "source/main.lua:23: message"
_DIAGNOSTIC_RE = re.compile(r"^(.+):(\d+):\s+(.+)$")


def parse_pdc_output(output: str) -> tuple[list[Diagnostic], list[Diagnostic]]:
    """Split pdc output into (errors, warnings).

    Lines that do not look like ``file:line: message`` are ignored. A message
    mentioning "warning" anywhere is classified as a warning.
    """
    errors: list[Diagnostic] = []
    warnings: list[Diagnostic] = []

    for line in output.split("\n"):
        match = _DIAGNOSTIC_RE.match(line)
        if match is None:
            continue
        file, line_number, message = match.groups()
        is_warning = "warning" in message.lower()
        diagnostic = Diagnostic(
            file=file,
            line=int(line_number),
            message=message.strip(),
            severity="warning" if is_warning else "error",
        )
        (warnings if is_warning else errors).append(diagnostic)

    return errors, warnings
