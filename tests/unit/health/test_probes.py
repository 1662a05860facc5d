"""
Unit tests for the probe primitives.
"""

import subprocess
from unittest.mock import Mock, patch

import pytest

from hackatime_doctor.health.probes import (
    command_available,
    command_version,
    parse_major_version,
    path_exists,
    query_command,
)

pytestmark = pytest.mark.unit


def _completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> Mock:
    result = Mock()
    result.returncode = returncode
    result.stdout = stdout
    result.stderr = stderr
    return result


class TestCommandAvailable:
    """command_available never raises"""

    def test_nonexistent_command_returns_false(self):
        assert command_available("definitely-not-a-real-command-4d2f9a") is False

    def test_empty_command_returns_false(self):
        assert command_available("") is False

    @patch("hackatime_doctor.health.probes.subprocess.run")
    def test_zero_exit_is_available(self, mock_run):
        mock_run.return_value = _completed(0, "git version 2.43.0\n")

        assert command_available("git") is True
        args, kwargs = mock_run.call_args
        assert args[0] == ["git", "--version"]
        assert kwargs["capture_output"] is True

    @patch("hackatime_doctor.health.probes.subprocess.run")
    def test_non_zero_exit_is_unavailable(self, mock_run):
        mock_run.return_value = _completed(1, stderr="boom")

        assert command_available("node") is False

    @patch("hackatime_doctor.health.probes.subprocess.run")
    def test_permission_error_is_unavailable(self, mock_run):
        mock_run.side_effect = PermissionError("not executable")

        assert command_available("node") is False

    @patch("hackatime_doctor.health.probes.subprocess.run")
    def test_timeout_is_unavailable(self, mock_run):
        mock_run.side_effect = subprocess.TimeoutExpired(cmd=["node", "--version"], timeout=10)

        assert command_available("node") is False


class TestCommandVersion:

    @patch("hackatime_doctor.health.probes.subprocess.run")
    def test_returns_first_line(self, mock_run):
        mock_run.return_value = _completed(0, "v20.11.1\nextra\n")

        assert command_version("node") == "v20.11.1"

    @patch("hackatime_doctor.health.probes.subprocess.run")
    def test_falls_back_to_stderr(self, mock_run):
        mock_run.return_value = _completed(0, "", "tool 1.2.3\n")

        assert command_version("tool") == "tool 1.2.3"

    def test_missing_command_returns_none(self):
        assert command_version("definitely-not-a-real-command-4d2f9a") is None


class TestQueryCommand:
    """One --version run answers both availability and version"""

    @patch("hackatime_doctor.health.probes.subprocess.run")
    def test_single_invocation(self, mock_run):
        mock_run.return_value = _completed(0, "v20.11.1\n")

        assert query_command("node") == "v20.11.1"
        mock_run.assert_called_once()

    @patch("hackatime_doctor.health.probes.subprocess.run")
    def test_silent_success_is_empty_string(self, mock_run):
        mock_run.return_value = _completed(0)

        assert query_command("tool") == ""

    @patch("hackatime_doctor.health.probes.subprocess.run")
    def test_failure_is_none(self, mock_run):
        mock_run.return_value = _completed(2, stderr="unknown option")

        assert query_command("tool") is None


class TestParseMajorVersion:

    @pytest.mark.parametrize("raw, expected", [
        ("v18.17.1", 18),
        ("v16.0.0", 16),
        ("git version 2.43.0", 2),
        ("no digits here", None),
        (None, None),
    ])
    def test_parse(self, raw, expected):
        assert parse_major_version(raw) == expected


class TestPathExists:

    def test_existing_file_and_directory(self, tmp_path):
        (tmp_path / "README.md").write_text("hi")
        (tmp_path / "src").mkdir()

        assert path_exists("README.md", tmp_path) is True
        assert path_exists("src", tmp_path) is True

    def test_missing_path(self, tmp_path):
        assert path_exists("package.json", tmp_path) is False

    def test_defaults_to_working_directory(self, tmp_path, monkeypatch):
        (tmp_path / ".env").write_text("A=1")
        monkeypatch.chdir(tmp_path)

        assert path_exists(".env") is True
