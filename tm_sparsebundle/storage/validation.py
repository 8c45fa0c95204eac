"""Input validation and normalization for provisioning answers.

Validation functions either return a normalized value or raise a specific
exception from the exceptions module:

- Volume name and backup size are required
- Backup size must be a positive whole number of GB
- Band size falls back to the default when it is not purely digits
- Destination falls back to the tool's own directory when it is not a directory

Example:
    from tm_sparsebundle.storage.validation import parse_band_size

    band_size_mb = parse_band_size(answer)  # "abc" -> 8
"""

from __future__ import annotations

import re
import sys
from pathlib import Path

from tm_sparsebundle.config.settings import DEFAULT_BAND_SIZE_MB
from tm_sparsebundle.logging import get_logger

from .exceptions import InvalidBackupSizeError, MissingRequiredInputError


log = get_logger(source="validate", tags=["validation"])

AFFIRMATIVE_PATTERN = re.compile(r"^(y|yes)$", re.IGNORECASE)
DIGITS_PATTERN = re.compile(r"^[0-9]+$")

# Range suggested in the band size prompt
RECOMMENDED_BAND_SIZE_MB = (1, 64)


def is_affirmative(answer: str | None) -> bool:
    """Return True for ``y``/``yes`` in any case, ignoring surrounding spaces."""
    if answer is None:
        return False
    return bool(AFFIRMATIVE_PATTERN.match(answer.strip()))


def validate_required(volume_name: str, backup_size: str) -> None:
    """Validate that both required answers were given.

    Raises:
        MissingRequiredInputError: If either value is empty
    """
    missing = []
    if not volume_name:
        missing.append("volume name")
    if not backup_size:
        missing.append("backup size")
    if missing:
        raise MissingRequiredInputError(missing)


def parse_backup_size(value: str) -> int:
    """Parse the backup size in GB.

    Raises:
        InvalidBackupSizeError: If the value is not a positive integer
    """
    candidate = value.strip()
    if not DIGITS_PATTERN.match(candidate) or int(candidate) <= 0:
        raise InvalidBackupSizeError(value)
    return int(candidate)


def parse_band_size(value: str | None, default: int = DEFAULT_BAND_SIZE_MB) -> int:
    """Parse the band size in MB.

    Anything that is not purely digits (including an empty answer) silently
    becomes ``default``; no error is raised.
    """
    candidate = (value or "").strip()
    if not DIGITS_PATTERN.match(candidate):
        log.debug(f"Band size '{candidate}' is not numeric, using {default}MB")
        return default
    band_size = int(candidate)
    low, high = RECOMMENDED_BAND_SIZE_MB
    if not low <= band_size <= high:
        log.warning(
            f"Band size {band_size}MB is outside the recommended {low}-{high}MB range"
        )
    return band_size


def default_destination() -> Path:
    """Directory containing the running program."""
    if not sys.argv or not sys.argv[0]:
        return Path.cwd()
    return Path(sys.argv[0]).resolve().parent


def resolve_destination(
    value: str | None, fallback: Path | None = None
) -> tuple[Path, bool]:
    """Resolve the destination directory.

    Args:
        value: Path entered by the user
        fallback: Directory used when ``value`` is not an existing directory
            (defaults to the directory containing the running program)

    Returns:
        Tuple of (effective directory, whether the fallback was substituted)
    """
    candidate = (value or "").strip()
    if candidate:
        path = Path(candidate).expanduser()
        if path.is_dir():
            return path, False
    substitute = fallback if fallback is not None else default_destination()
    log.debug(f"Destination '{candidate}' is not a directory, using {substitute}")
    return substitute, True
