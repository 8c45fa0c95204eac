"""Domain model for sparsebundle provisioning.

A run gathers its answers into a single immutable ``SparsebundleConfig`` and
finishes with a ``ProvisionResult`` describing what happened.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


# 512-byte blocks per megabyte; hdiutil takes sparse-band-size as a block count
BLOCKS_PER_MB = 2048

BUNDLE_SUFFIX = ".sparsebundle"


# ==============================================================================
# Image Configuration
# ==============================================================================


@dataclass(frozen=True)
class SparsebundleConfig:
    """Validated parameters for one sparsebundle.

    The password is deliberately not part of this object so it can be logged
    and printed freely.
    """

    volume_name: str
    size_gb: int
    band_size_mb: int
    encrypted: bool
    destination: Path
    system_id: str

    @property
    def band_size_blocks(self) -> int:
        """Band size as a count of 512-byte blocks."""
        return self.band_size_mb * BLOCKS_PER_MB

    @property
    def bundle_name(self) -> str:
        """File name of the bundle, e.g. ``<uuid>.sparsebundle``."""
        return f"{self.system_id}{BUNDLE_SUFFIX}"

    @property
    def bundle_path(self) -> Path:
        return self.destination / self.bundle_name

    def summary_lines(self) -> list[str]:
        """Format the configuration summary shown before confirmation."""
        return [
            "Configuration Summary:",
            f"  Volume Name:       {self.volume_name}",
            f"  Backup Size:       {self.size_gb}GB",
            f"  Band Size:         {self.band_size_mb}MB",
            f"  Encryption:        {'Enabled' if self.encrypted else 'Disabled'}",
            f"  Destination Path:  {self.destination}",
        ]


# ==============================================================================
# Run Outcome
# ==============================================================================


class ProvisionOutcome(Enum):
    """How a provisioning run ended."""

    CREATION_FAILED = "creation_failed"
    INHERITED = "inherited"
    INHERIT_SKIPPED = "inherit_skipped"
    INHERIT_FAILED = "inherit_failed"


_EXIT_CODES = {
    ProvisionOutcome.CREATION_FAILED: 2,
    ProvisionOutcome.INHERITED: 0,
    ProvisionOutcome.INHERIT_SKIPPED: 0,
    ProvisionOutcome.INHERIT_FAILED: 3,
}


@dataclass(frozen=True)
class ProvisionResult:
    """Structured result of a provisioning run."""

    outcome: ProvisionOutcome
    config: SparsebundleConfig | None = None
    bundle_path: Path | None = None
    message: str = ""

    @property
    def exit_code(self) -> int:
        return _EXIT_CODES[self.outcome]
