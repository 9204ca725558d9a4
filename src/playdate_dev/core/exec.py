"""Run external SDK tools and capture what they print."""

from __future__ import annotations

import asyncio
import logging
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

TIMED_OUT_EXIT_CODE = -1


@dataclass(frozen=True)
class ExecResult:
    stdout: str
    stderr: str
    exit_code: int
    timed_out: bool = False


def _decode(data: bytes | None) -> str:
    return data.decode("utf-8", errors="replace") if data else ""


async def run_command(
    program: str | Path,
    args: Sequence[str | Path] = (),
    cwd: str | Path | None = None,
    timeout: float | None = None,
) -> ExecResult:
    """Run *program* with *args* and wait for it to exit.

    Never raises for start-up failures: a program that cannot be started
    yields its error message as stderr and exit code 1. With *timeout* the
    child is killed once the deadline passes and the result is flagged
    ``timed_out``.
    """
    argv = [str(program), *(str(a) for a in args)]
    logger.debug("Running %s (cwd=%s)", argv, cwd)
    try:
        proc = await asyncio.create_subprocess_exec(
            *argv,
            cwd=str(cwd) if cwd is not None else None,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as err:
        logger.debug("Could not start %s: %s", argv[0], err)
        return ExecResult(stdout="", stderr=str(err), exit_code=1)

    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        await _kill(proc)
        logger.warning("%s timed out after %ss", argv[0], timeout)
        return ExecResult(
            stdout="",
            stderr=f"{Path(argv[0]).name} timed out after {timeout:g}s",
            exit_code=TIMED_OUT_EXIT_CODE,
            timed_out=True,
        )
    except asyncio.CancelledError:
        await _kill(proc)
        raise

    exit_code = proc.returncode if proc.returncode is not None else 1
    return ExecResult(stdout=_decode(stdout), stderr=_decode(stderr), exit_code=exit_code)


async def _kill(proc: asyncio.subprocess.Process) -> None:
    if proc.returncode is None:
        try:
            proc.kill()
        except ProcessLookupError:
            pass
    await proc.wait()


def spawn_detached(
    program: str | Path,
    args: Sequence[str | Path] = (),
    cwd: str | Path | None = None,
) -> ExecResult:
    """Start *program* in its own session without waiting for it.

    Exit code 0 means the process was started, not that it finished.
    """
    argv = [str(program), *(str(a) for a in args)]
    logger.debug("Spawning %s", argv)
    try:
        subprocess.Popen(
            argv,
            cwd=str(cwd) if cwd is not None else None,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as err:
        return ExecResult(stdout="", stderr=str(err), exit_code=1)
    return ExecResult(stdout="", stderr="", exit_code=0)
