"""Host identification via the IORegistry."""

from __future__ import annotations

import re
import subprocess

from tm_sparsebundle.logging import LoggerFactory

from .command_runners import describe_failure, run_command
from .exceptions import SystemIdentifierError


log = LoggerFactory.for_system()

IOREG_COMMAND = ["ioreg", "-rd1", "-c", "IOPlatformExpertDevice"]

# e.g.  "IOPlatformUUID" = "12345678-ABCD-..."
_PLATFORM_UUID_PATTERN = re.compile(r'"IOPlatformUUID"\s*=\s*"([^"]+)"')


def parse_platform_uuid(ioreg_output: str) -> str | None:
    """Extract the IOPlatformUUID value from ``ioreg`` output."""
    match = _PLATFORM_UUID_PATTERN.search(ioreg_output or "")
    if not match:
        return None
    return match.group(1).strip() or None


def get_system_identifier() -> str:
    """Return the hardware UUID used to name the sparsebundle.

    Raises:
        SystemIdentifierError: If ioreg is unavailable, fails, or reports no UUID
    """
    try:
        result = run_command(IOREG_COMMAND, log_output=False)
    except (OSError, subprocess.SubprocessError) as error:
        raise SystemIdentifierError(str(error)) from error
    if result.returncode != 0:
        raise SystemIdentifierError(describe_failure(result))
    system_id = parse_platform_uuid(result.stdout)
    if system_id is None:
        raise SystemIdentifierError("IOPlatformUUID not found in ioreg output")
    log.debug(f"System UUID: {system_id}")
    return system_id
