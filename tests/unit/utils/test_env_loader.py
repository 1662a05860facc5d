"""
Test Environment Loader
"""

import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from hackatime_doctor.health.models import ConfigParseError
from hackatime_doctor.utils.env_loader import (
    load_doctor_config,
    merge_with_environ,
    read_env_file,
)


class TestReadEnvFile:
    """read_env_file does not touch os.environ"""

    def test_parses_values(self, tmp_path, write_env):
        env_file = write_env(tmp_path, "# comment\nHACKATIME_API_KEY=abc\nHACKATIME_API_URL='https://x'\nEMPTY\n")

        values = read_env_file(env_file)

        assert values == {"HACKATIME_API_KEY": "abc", "HACKATIME_API_URL": "https://x"}
        assert "HACKATIME_API_KEY" not in os.environ

    def test_undecodable_file_raises(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_bytes(b"\xff\xfe\xfa")

        with pytest.raises(ConfigParseError) as exc_info:
            read_env_file(env_file)

        assert ".env" in str(exc_info.value)
        assert exc_info.value.original_error is not None


class TestMergeWithEnviron:

    def test_process_values_win(self):
        merged = merge_with_environ({"A": "file", "B": "file"}, {"A": "process"})

        assert merged == {"A": "process", "B": "file"}


class TestLoadDoctorConfig:

    def test_defaults(self):
        config = load_doctor_config(environ={})

        assert config.token_rule == "non_empty"
        assert config.request_timeout == 10.0
        assert config.api_key_var == "HACKATIME_API_KEY"
        assert config.api_url_var == "HACKATIME_API_URL"

    def test_environment_overrides(self, tmp_path):
        config = load_doctor_config(environ={
            "HACKATIME_DOCTOR_PROJECT_ROOT": str(tmp_path),
            "HACKATIME_DOCTOR_TOKEN_RULE": "prefixed",
            "HACKATIME_DOCTOR_TIMEOUT": "2.5",
        })

        assert config.project_root == Path(tmp_path)
        assert config.token_rule == "prefixed"
        assert config.request_timeout == 2.5
        assert config.env_path == Path(tmp_path) / ".env"

    def test_explicit_overrides_win(self):
        config = load_doctor_config(environ={"HACKATIME_DOCTOR_TOKEN_RULE": "prefixed"}, token_rule="non_empty")

        assert config.token_rule == "non_empty"

    @pytest.mark.parametrize("name, value", [
        ("HACKATIME_DOCTOR_TOKEN_RULE", "strict"),
        ("HACKATIME_DOCTOR_TIMEOUT", "0"),
        ("HACKATIME_DOCTOR_TIMEOUT", "soon"),
    ])
    def test_invalid_values_raise(self, name, value):
        with pytest.raises(ValidationError):
            load_doctor_config(environ={name: value})
