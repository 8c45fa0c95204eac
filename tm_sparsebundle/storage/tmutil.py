"""Time Machine registration with ``tmutil inheritbackup``."""

from __future__ import annotations

import subprocess
from pathlib import Path

from tm_sparsebundle.config import settings
from tm_sparsebundle.logging import LoggerFactory

from .command_runners import describe_failure, run_command
from .exceptions import InheritBackupError


log = LoggerFactory.for_tmutil()


def build_inherit_command(bundle_path: Path, use_sudo: bool | None = None) -> list[str]:
    """Assemble ``[sudo] tmutil inheritbackup <bundle>``.

    ``use_sudo`` defaults to the ``inherit_with_sudo`` setting.
    """
    if use_sudo is None:
        use_sudo = settings.get_bool("inherit_with_sudo", True)
    command = ["tmutil", "inheritbackup", str(bundle_path)]
    if use_sudo:
        command.insert(0, "sudo")
    return command


def inherit_backup(bundle_path: Path, use_sudo: bool | None = None) -> None:
    """Register ``bundle_path`` as this machine's Time Machine backup.

    sudo prompts on the terminal, so stdin is not captured here.

    Raises:
        InheritBackupError: If tmutil (or sudo) exits unsuccessfully
    """
    command = build_inherit_command(bundle_path, use_sudo=use_sudo)
    log.info(f"Inheriting {bundle_path}")
    try:
        result = run_command(command)
    except (OSError, subprocess.SubprocessError) as error:
        raise InheritBackupError(bundle_path, str(error), command=command) from error
    if result.returncode != 0:
        reason = describe_failure(result)
        log.error(f"tmutil inheritbackup failed ({result.returncode}): {reason}")
        raise InheritBackupError(
            bundle_path, reason, command=command, returncode=result.returncode
        )
    log.success(f"Inherited {bundle_path}")
