"""Custom exceptions for sparsebundle provisioning.

This module defines a hierarchy of exceptions so the entry point can map each
failure to a clear message and exit code.

Exception Hierarchy:
    ProvisionError (base)
        ├── InputError
        │   ├── MissingRequiredInputError
        │   ├── InvalidBackupSizeError
        │   └── MissingPasswordError
        ├── ProvisionCancelledError
        ├── SystemIdentifierError
        └── CommandError
            ├── ImageCreationError
            └── InheritBackupError

Usage:
    from tm_sparsebundle.storage.exceptions import MissingPasswordError

    if not password:
        raise MissingPasswordError()
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class ProvisionError(Exception):
    """Base exception for all provisioning failures."""

    exit_code = 1


class InputError(ProvisionError):
    """Base exception for rejected user input."""



class MissingRequiredInputError(InputError):
    """Volume name or backup size was left empty."""

    def __init__(self, missing: Sequence[str] = ()):
        self.missing = list(missing)
        super().__init__(
            "Missing required input for Volume Name and Backup Size in GB. Exiting."
        )


class InvalidBackupSizeError(InputError):
    """Backup size is not a positive whole number of gigabytes."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(
            f"Backup size must be a positive whole number of GB, got '{value}'. Exiting."
        )


class MissingPasswordError(InputError):
    """Encryption was requested but no password was entered."""

    def __init__(self):
        super().__init__("Password isn't set. Exiting now.")


class ProvisionCancelledError(ProvisionError):
    """The user declined the final confirmation."""

    def __init__(self, message: str = "You have chosen to cancel. Script will halt."):
        super().__init__(message)


class SystemIdentifierError(ProvisionError):
    """The host's platform UUID could not be determined."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Unable to determine system UUID: {reason}")


class CommandError(ProvisionError):
    """An external utility exited unsuccessfully."""

    def __init__(
        self,
        message: str,
        command: Sequence[str] | None = None,
        returncode: int | None = None,
    ):
        self.command = list(command) if command is not None else None
        self.returncode = returncode
        super().__init__(message)


class ImageCreationError(CommandError):
    """hdiutil failed or the sparsebundle is missing afterwards."""

    exit_code = 2

    def __init__(
        self,
        bundle_path: Path,
        reason: str,
        command: Sequence[str] | None = None,
        returncode: int | None = None,
    ):
        self.bundle_path = bundle_path
        self.reason = reason
        super().__init__(
            f"Failed to create {bundle_path}: {reason}",
            command=command,
            returncode=returncode,
        )


class InheritBackupError(CommandError):
    """tmutil inheritbackup exited unsuccessfully."""

    exit_code = 3

    def __init__(
        self,
        bundle_path: Path,
        reason: str,
        command: Sequence[str] | None = None,
        returncode: int | None = None,
    ):
        self.bundle_path = bundle_path
        self.reason = reason
        super().__init__(
            f"Failed to inherit {bundle_path}: {reason}",
            command=command,
            returncode=returncode,
        )
