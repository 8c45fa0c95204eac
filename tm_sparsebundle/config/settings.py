"""Settings storage for application configuration."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


SETTINGS_PATH = Path(
    os.environ.get(
        "TM_SPARSEBUNDLE_SETTINGS_PATH",
        Path.home() / ".config" / "tm-sparsebundle" / "settings.json",
    )
)

# Default values - use these constants instead of hardcoding values elsewhere
DEFAULT_BAND_SIZE_MB = 8
DEFAULT_IMAGE_TYPE = "SPARSEBUNDLE"
DEFAULT_FILESYSTEM = "HFS+J"
DEFAULT_ENCRYPTION_ALGORITHM = "AES-256"

DEFAULT_SETTINGS: dict[str, Any] = {
    "default_band_size_mb": DEFAULT_BAND_SIZE_MB,
    "image_type": DEFAULT_IMAGE_TYPE,
    "filesystem": DEFAULT_FILESYSTEM,
    "encryption_algorithm": DEFAULT_ENCRYPTION_ALGORITHM,
    "inherit_with_sudo": True,
    "fallback_destination": None,
}


@dataclass
class SettingsStore:
    values: dict[str, Any] = field(default_factory=dict)


settings_store = SettingsStore()


def load_settings() -> None:
    settings_store.values = dict(DEFAULT_SETTINGS)
    if not SETTINGS_PATH.exists():
        return
    try:
        data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return
    if isinstance(data, dict):
        settings_store.values.update(data)


def get_setting(key: str, default: Any | None = None) -> Any:
    return settings_store.values.get(key, default)


def get_bool(key: str, default: bool = False) -> bool:
    """Return a boolean setting; non-bool values (e.g. ``"false"``) yield ``default``."""
    value = get_setting(key, default)
    if not isinstance(value, bool):
        return default
    return value


def get_int(key: str, default: int) -> int:
    """Return an integer setting, falling back to ``default`` if it is malformed."""
    value = get_setting(key, default)
    if isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def get_path(key: str) -> Path | None:
    value = get_setting(key)
    if not value:
        return None
    return Path(value).expanduser()


load_settings()
