"""Sparsebundle creation with ``hdiutil create``.

Command Layout:
    hdiutil create
        -size <N>g
        -type SPARSEBUNDLE
        -fs HFS+J
        -volname <name>
        [-encryption AES-256 -stdinpass]
        -imagekey sparse-band-size=<blocks>
        <destination>/<system-id>.sparsebundle

Security Notes:
    - With encryption enabled the password is written to hdiutil's stdin,
      NUL-terminated as ``-stdinpass`` expects
    - The password never appears in the argument vector, so it is not visible
      in process listings, and it is never logged

Example:
    >>> from tm_sparsebundle.storage.hdiutil import create_sparsebundle
    >>> bundle = create_sparsebundle(config, password="secret")
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable

from tm_sparsebundle.config import settings
from tm_sparsebundle.domain.models import SparsebundleConfig
from tm_sparsebundle.logging import LoggerFactory

from .command_runners import describe_failure, format_command, run_command
from .exceptions import ImageCreationError


log = LoggerFactory.for_hdiutil()

HDIUTIL = "hdiutil"


def build_create_command(config: SparsebundleConfig) -> list[str]:
    """Assemble the ``hdiutil create`` argument vector for ``config``."""
    command = [
        HDIUTIL,
        "create",
        "-size",
        f"{config.size_gb}g",
        "-type",
        settings.get_setting("image_type", settings.DEFAULT_IMAGE_TYPE),
        "-fs",
        settings.get_setting("filesystem", settings.DEFAULT_FILESYSTEM),
        "-volname",
        config.volume_name,
    ]
    if config.encrypted:
        command += [
            "-encryption",
            settings.get_setting(
                "encryption_algorithm", settings.DEFAULT_ENCRYPTION_ALGORITHM
            ),
            "-stdinpass",
        ]
    command += [
        "-imagekey",
        f"sparse-band-size={config.band_size_blocks}",
        str(config.bundle_path),
    ]
    return command


def _stdin_password(password: str) -> str:
    return f"{password}\0"


def create_sparsebundle(
    config: SparsebundleConfig,
    password: str | None = None,
    output_callback: Callable[[str], None] | None = None,
) -> Path:
    """Create the sparsebundle described by ``config``.

    Args:
        config: Validated image parameters
        password: Image password, required when ``config.encrypted`` is set
        output_callback: Receives each line hdiutil printed on success

    Returns:
        Path of the created bundle

    Raises:
        ValueError: If encryption is requested without a password
        ImageCreationError: If hdiutil fails or the bundle does not exist afterwards
    """
    if config.encrypted and not password:
        raise ValueError("An encrypted sparsebundle requires a password")

    command = build_create_command(config)
    bundle_path = config.bundle_path
    input_text = _stdin_password(password) if config.encrypted else None

    log.bind(
        size_gb=config.size_gb,
        band_size_blocks=config.band_size_blocks,
        encrypted=config.encrypted,
    ).info(f"Creating {bundle_path}")
    try:
        result = run_command(command, input_text=input_text)
    except (OSError, subprocess.SubprocessError) as error:
        raise ImageCreationError(bundle_path, str(error), command=command) from error

    if result.returncode != 0:
        reason = describe_failure(result)
        log.error(f"hdiutil failed ({result.returncode}): {reason}")
        raise ImageCreationError(
            bundle_path, reason, command=command, returncode=result.returncode
        )

    # Sparsebundles are directory bundles
    if not bundle_path.is_dir():
        log.error(f"{format_command(command)} succeeded but {bundle_path} is missing")
        raise ImageCreationError(
            bundle_path, "sparsebundle not found after creation", command=command
        )

    log.success(f"Created {bundle_path}")
    if output_callback:
        for line in (result.stdout or "").splitlines():
            if line.strip():
                output_callback(line)
    return bundle_path
