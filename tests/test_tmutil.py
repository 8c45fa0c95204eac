"""Tests for Time Machine registration."""

from pathlib import Path
from unittest.mock import Mock

import pytest

from tm_sparsebundle.config import settings
from tm_sparsebundle.storage import tmutil
from tm_sparsebundle.storage.exceptions import InheritBackupError


BUNDLE = Path("/Volumes/NAS/1A2B.sparsebundle")


class TestBuildInheritCommand:
    """Tests for build_inherit_command()."""

    def test_uses_sudo_by_default(self):
        assert tmutil.build_inherit_command(BUNDLE) == [
            "sudo",
            "tmutil",
            "inheritbackup",
            str(BUNDLE),
        ]

    def test_without_sudo(self):
        assert tmutil.build_inherit_command(BUNDLE, use_sudo=False) == [
            "tmutil",
            "inheritbackup",
            str(BUNDLE),
        ]

    def test_setting_disables_sudo(self):
        settings.settings_store.values["inherit_with_sudo"] = False
        assert tmutil.build_inherit_command(BUNDLE)[0] == "tmutil"

    @pytest.mark.parametrize("value", ["false", "no", 0, None])
    def test_non_boolean_setting_keeps_sudo(self, value):
        settings.settings_store.values["inherit_with_sudo"] = value
        assert tmutil.build_inherit_command(BUNDLE)[0] == "sudo"


class TestInheritBackup:
    """Tests for inherit_backup()."""

    def test_success(self, mock_subprocess_success):
        tmutil.inherit_backup(BUNDLE)

        command = mock_subprocess_success.call_args.args[0]
        assert command == ["sudo", "tmutil", "inheritbackup", str(BUNDLE)]
        assert mock_subprocess_success.call_args.kwargs["input"] is None

    def test_failure_raises(self, mock_subprocess_run):
        mock_subprocess_run.return_value = Mock(
            returncode=1, stdout="", stderr="tmutil: inheritbackup requires root privileges."
        )

        with pytest.raises(InheritBackupError) as exc_info:
            tmutil.inherit_backup(BUNDLE)

        assert exc_info.value.returncode == 1
        assert "requires root" in exc_info.value.reason
        assert exc_info.value.bundle_path == BUNDLE

    def test_missing_executable(self, mock_subprocess_run):
        mock_subprocess_run.side_effect = FileNotFoundError("sudo")

        with pytest.raises(InheritBackupError):
            tmutil.inherit_backup(BUNDLE)
