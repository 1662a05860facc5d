"""
Environment Loader Utility
Reads the project .env file and the HACKATIME_DOCTOR_* overrides.
"""

import os
from pathlib import Path
from typing import Dict, Mapping, Optional

from dotenv import dotenv_values

from hackatime_doctor.health.models import ConfigParseError, DoctorConfig
from hackatime_doctor.utils.logger import log_config


CONFIG_ENV_PREFIX = "HACKATIME_DOCTOR_"


def read_env_file(env_file: Path) -> Dict[str, str]:
    """
    Parse an environment file without touching ``os.environ``.

    Args:
        env_file: Path to the .env file

    Returns:
        Mapping of variable names to values; keys without a value are dropped

    Raises:
        ConfigParseError: when the file cannot be read or decoded
    """
    try:
        raw = dotenv_values(env_file, encoding="utf-8")
    except (OSError, UnicodeDecodeError, ValueError) as e:
        raise ConfigParseError(
            f"Could not read {env_file.name}: {e}",
            check_name=env_file.name,
            original_error=e,
        ) from e

    values = {key: value for key, value in raw.items() if value is not None}
    log_config(f"Loaded {len(values)} variable(s) from {env_file}")
    return values


def merge_with_environ(
    file_values: Mapping[str, str],
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Combine file values with the process environment.
    Process variables win, the same way load_dotenv(override=False) behaves.
    """
    environ = os.environ if environ is None else environ
    merged = dict(file_values)
    merged.update({key: value for key, value in environ.items()})
    return merged


def load_doctor_config(
    environ: Optional[Mapping[str, str]] = None,
    **overrides,
) -> DoctorConfig:
    """
    Build a DoctorConfig from defaults, HACKATIME_DOCTOR_* variables and explicit overrides.

    Recognised variables:
        HACKATIME_DOCTOR_PROJECT_ROOT, HACKATIME_DOCTOR_TOKEN_RULE, HACKATIME_DOCTOR_TIMEOUT

    Raises:
        pydantic.ValidationError: when an override has an invalid value
    """
    environ = os.environ if environ is None else environ
    values = {}

    mapping = {
        "PROJECT_ROOT": "project_root",
        "TOKEN_RULE": "token_rule",
        "TIMEOUT": "request_timeout",
    }
    for suffix, field_name in mapping.items():
        raw = environ.get(f"{CONFIG_ENV_PREFIX}{suffix}")
        if raw:
            values[field_name] = raw.strip()
            log_config(f"{CONFIG_ENV_PREFIX}{suffix} override applied")

    values.update({key: value for key, value in overrides.items() if value is not None})
    return DoctorConfig(**values)
