"""Domain models for sparsebundle provisioning."""

from __future__ import annotations

from .models import (
    BLOCKS_PER_MB,
    ProvisionOutcome,
    ProvisionResult,
    SparsebundleConfig,
)


__all__ = [
    "BLOCKS_PER_MB",
    "ProvisionOutcome",
    "ProvisionResult",
    "SparsebundleConfig",
]
