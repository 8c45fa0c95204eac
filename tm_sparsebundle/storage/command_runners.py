"""Command execution utilities for the macOS storage utilities."""

from __future__ import annotations

import shlex
import subprocess
from typing import Sequence

from tm_sparsebundle.logging import get_logger


log = get_logger(source="command", tags=["command"])


def format_command(command: Sequence[str]) -> str:
    """Render a command for logs and error messages."""
    return " ".join(shlex.quote(str(part)) for part in command)


def run_command(
    command: Sequence[str],
    input_text: str | None = None,
    log_output: bool = True,
) -> subprocess.CompletedProcess:
    """Run a command, capturing its output.

    The exit status is returned, not raised; callers map it to their own
    exceptions. ``input_text`` is written to the child's stdin and is never
    logged, which makes it the only safe channel for secrets.

    Args:
        command: Argument vector, first element is the executable
        input_text: Optional text for the child's stdin
        log_output: Log stdout/stderr even when the command succeeds

    Returns:
        The completed process
    """
    command = [str(part) for part in command]
    log.debug(
        f"Running command: {format_command(command)}"
        + (" (with stdin)" if input_text is not None else "")
    )
    result = subprocess.run(
        command,
        input=input_text,
        text=True,
        capture_output=True,
    )
    if result.stdout and (log_output or result.returncode != 0):
        log.debug(f"stdout: {result.stdout.strip()}")
    if result.stderr and (log_output or result.returncode != 0):
        log.debug(f"stderr: {result.stderr.strip()}")
    log.debug(f"Command completed with return code {result.returncode}")
    return result


def describe_failure(result: subprocess.CompletedProcess) -> str:
    """Pick the most useful line of output from a failed command."""
    stderr = (result.stderr or "").strip()
    stdout = (result.stdout or "").strip()
    message = stderr or stdout
    if not message:
        return f"exit status {result.returncode}"
    return message.splitlines()[-1]


__all__ = [
    "describe_failure",
    "format_command",
    "run_command",
]
