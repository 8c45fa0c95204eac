"""
Pytest configuration and shared fixtures for tm-sparsebundle tests.

This module provides common fixtures and utilities used across all test modules.
"""

from pathlib import Path
from typing import Callable, Dict, Iterable, List
from unittest.mock import Mock

import pytest
from loguru import logger

from tm_sparsebundle.config import settings
from tm_sparsebundle.domain.models import SparsebundleConfig
from tm_sparsebundle.ui.prompts import Console


SYSTEM_UUID = "1A2B3C4D-5E6F-7081-92A3-B4C5D6E7F809"


# ==============================================================================
# Console Fixtures
# ==============================================================================


class ScriptedConsole(Console):
    """Console that answers prompts from a script and records all output."""

    def __init__(self, answers: Iterable[str], secrets: Iterable[str] = ()):
        self._answers = iter(answers)
        self._secrets = iter(secrets)
        self.prompts: List[str] = []
        self.secret_prompts: List[str] = []
        self.output: List[str] = []
        # Prompts and output interleaved in the order they happened
        self.transcript: List[str] = []
        super().__init__(
            input_func=self._next_answer,
            secret_func=self._next_secret,
            output_func=self._record_output,
        )

    def _record_output(self, message: str = "") -> None:
        self.output.append(message)
        self.transcript.append(message)

    def _next_answer(self, prompt: str) -> str:
        self.prompts.append(prompt)
        self.transcript.append(prompt)
        try:
            return next(self._answers)
        except StopIteration:
            raise EOFError from None

    def _next_secret(self, prompt: str) -> str:
        self.secret_prompts.append(prompt)
        self.transcript.append(prompt)
        try:
            return next(self._secrets)
        except StopIteration:
            raise EOFError from None

    @property
    def text(self) -> str:
        return "\n".join(self.output)


@pytest.fixture
def scripted_console() -> Callable[..., ScriptedConsole]:
    """
    Fixture providing a factory for scripted consoles.

    Returns:
        Callable taking the prompt answers (and optional secrets).
    """
    return ScriptedConsole


# ==============================================================================
# Domain Fixtures
# ==============================================================================


@pytest.fixture
def system_uuid() -> str:
    return SYSTEM_UUID


@pytest.fixture
def destination_dir(tmp_path) -> Path:
    """Fixture providing an existing destination directory."""
    destination = tmp_path / "nas" / "backups"
    destination.mkdir(parents=True)
    return destination


@pytest.fixture
def sample_config(destination_dir) -> SparsebundleConfig:
    """Fixture providing an unencrypted 500GB configuration with 16MB bands."""
    return SparsebundleConfig(
        volume_name="Backups",
        size_gb=500,
        band_size_mb=16,
        encrypted=False,
        destination=destination_dir,
        system_id=SYSTEM_UUID,
    )


@pytest.fixture
def ioreg_output() -> str:
    """Fixture providing typical ``ioreg -rd1 -c IOPlatformExpertDevice`` output."""
    return (
        '+-o MacBookPro18,3  <class IOPlatformExpertDevice, id 0x100000110, '
        "registered, matched, active, busy 0 (1234 ms), retain 37>\n"
        "  {\n"
        '    "IOPolledInterface" = "AppleARMWatchdogTimerHibernateHandler is not serializable"\n'
        '    "IOPlatformSerialNumber" = "C02XXXXXXXXX"\n'
        '    "manufacturer" = <"Apple Inc.">\n'
        f'    "IOPlatformUUID" = "{SYSTEM_UUID}"\n'
        '    "model" = <"MacBookPro18,3">\n'
        "  }\n"
    )


# ==============================================================================
# Subprocess Mock Fixtures
# ==============================================================================


def make_completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> Mock:
    result = Mock()
    result.returncode = returncode
    result.stdout = stdout
    result.stderr = stderr
    return result


@pytest.fixture
def mock_subprocess_run(mocker):
    """
    Fixture providing a mock for subprocess.run.

    Returns:
        Mock object for subprocess.run
    """
    return mocker.patch("subprocess.run")


@pytest.fixture
def mock_subprocess_success(mocker) -> Mock:
    """
    Fixture providing a mock subprocess.run that always succeeds.

    Returns:
        Mock object for subprocess.run.
    """
    return mocker.patch("subprocess.run", return_value=make_completed())


# ==============================================================================
# Logging Fixtures
# ==============================================================================


@pytest.fixture
def captured_logs() -> List[Dict]:
    """
    Fixture capturing every log record (TRACE and up) synchronously.

    Returns:
        List of loguru record dicts.
    """
    records: List[Dict] = []

    def sink(message):
        records.append(message.record)

    logger.remove()
    logger.add(sink, level="TRACE", enqueue=False)
    return records


# ==============================================================================
# Global State
# ==============================================================================


@pytest.fixture(autouse=True)
def reset_global_state(tmp_path, monkeypatch):
    """
    Auto-use fixture isolating settings and logging between tests.

    Settings are reset to defaults and pointed at a temporary file; all loguru
    sinks are removed after the test.
    """
    monkeypatch.setattr(settings, "SETTINGS_PATH", tmp_path / "settings.json")
    settings.settings_store.values = dict(settings.DEFAULT_SETTINGS)
    yield
    logger.remove()
