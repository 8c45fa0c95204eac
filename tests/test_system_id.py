"""Tests for host identification via ioreg."""

from unittest.mock import Mock

import pytest

from tm_sparsebundle.storage import system_id
from tm_sparsebundle.storage.exceptions import SystemIdentifierError


class TestParsePlatformUuid:
    """Tests for parse_platform_uuid()."""

    def test_parses_uuid(self, ioreg_output, system_uuid):
        assert system_id.parse_platform_uuid(ioreg_output) == system_uuid

    def test_missing_uuid(self):
        assert system_id.parse_platform_uuid('"model" = <"Mac">') is None

    def test_empty_output(self):
        assert system_id.parse_platform_uuid("") is None
        assert system_id.parse_platform_uuid(None) is None

    def test_empty_value(self):
        assert system_id.parse_platform_uuid('"IOPlatformUUID" = ""') is None


class TestGetSystemIdentifier:
    """Tests for get_system_identifier()."""

    def test_runs_ioreg(self, mock_subprocess_run, ioreg_output, system_uuid):
        mock_subprocess_run.return_value = Mock(returncode=0, stdout=ioreg_output, stderr="")

        assert system_id.get_system_identifier() == system_uuid
        assert mock_subprocess_run.call_args.args[0] == [
            "ioreg",
            "-rd1",
            "-c",
            "IOPlatformExpertDevice",
        ]

    def test_ioreg_not_installed(self, mock_subprocess_run):
        mock_subprocess_run.side_effect = FileNotFoundError("ioreg")

        with pytest.raises(SystemIdentifierError, match="ioreg"):
            system_id.get_system_identifier()

    def test_ioreg_fails(self, mock_subprocess_run):
        mock_subprocess_run.return_value = Mock(returncode=1, stdout="", stderr="ioreg: error")

        with pytest.raises(SystemIdentifierError, match="ioreg: error"):
            system_id.get_system_identifier()

    def test_uuid_missing_from_output(self, mock_subprocess_run):
        mock_subprocess_run.return_value = Mock(returncode=0, stdout="{}", stderr="")

        with pytest.raises(SystemIdentifierError, match="IOPlatformUUID not found"):
            system_id.get_system_identifier()
