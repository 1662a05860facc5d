"""
Credential validation for the Hackatime heartbeat API.

Checks escalate through three tiers and stop at the first failure:

1. the environment file is missing,
2. the API key or URL is missing (or the key breaks the token rule or is not ASCII),
3. a single test heartbeat is rejected or cannot be delivered.

Only the third tier touches the network, and it sends exactly one request.
"""

import time
from typing import Dict, List, Mapping, Optional

import requests
from pydantic import BaseModel, ConfigDict, field_validator

from hackatime_doctor.health.models import CheckResult, ConfigParseError, DoctorConfig
from hackatime_doctor.health.probes import path_exists
from hackatime_doctor.utils.env_loader import merge_with_environ, read_env_file
from hackatime_doctor.utils.logger import log_config, log_net, mask_secret

CHECK_NAME = "API key valid"
MISSING_ENV_CHECK_NAME = ".env file found"
HEARTBEAT_PATH = "/heartbeat"


class Credentials(BaseModel):
    """API key and base URL resolved once at startup."""

    model_config = ConfigDict(frozen=True)

    api_key: Optional[str] = None
    api_url: Optional[str] = None

    @field_validator("api_key", "api_url", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @property
    def heartbeat_url(self) -> Optional[str]:
        if not self.api_url:
            return None
        return f"{self.api_url.rstrip('/')}{HEARTBEAT_PATH}"


class HeartbeatPayload(BaseModel):
    """Test heartbeat sent to the tracking service."""

    branch: str = "main"
    category: str = "coding"
    cursorpos: int = 1
    entity: str = "hackatime-doctor.txt"
    type: str = "file"
    lineno: int = 1
    lines: int = 1
    project: str = "hackatime-doctor"
    time: float
    user_agent: str


def build_heartbeat_payload(user_agent: str, now: Optional[float] = None) -> HeartbeatPayload:
    return HeartbeatPayload(time=now if now is not None else time.time(), user_agent=user_agent)


def load_credentials(
    config: DoctorConfig,
    environ: Optional[Mapping[str, str]] = None,
) -> Credentials:
    """
    Parse the project .env file and resolve the credential variables.

    Raises:
        ConfigParseError: when the env file cannot be read
    """
    file_values = read_env_file(config.env_path)
    merged = merge_with_environ(file_values, environ)
    credentials = Credentials(
        api_key=merged.get(config.api_key_var),
        api_url=merged.get(config.api_url_var),
    )
    log_config(
        f"{config.api_key_var}={mask_secret(credentials.api_key or '') or '<unset>'} "
        f"{config.api_url_var}={credentials.api_url or '<unset>'}"
    )
    return credentials


def is_valid_token(
    token: Optional[str],
    rule: str = "non_empty",
    prefix: str = "ht_",
    min_length: int = 15,
) -> bool:
    """
    Apply the token validity rule.

    ``non_empty`` only requires a non-blank token. ``prefixed`` also requires
    the token to start with ``prefix`` and be longer than ``min_length``.
    """
    if not token or not token.strip():
        return False
    if rule == "prefixed":
        return token.startswith(prefix) and len(token) > min_length
    return True


class CredentialValidator:
    """
    Validates Hackatime connectivity for one doctor run.

    The HTTP session is injectable so tests can count requests.
    """

    def __init__(self, config: DoctorConfig, session: Optional[requests.Session] = None,
                 environ: Optional[Mapping[str, str]] = None) -> None:
        self.config = config
        self.session = session
        self.environ = environ

    def check(self) -> CheckResult:
        if not path_exists(self.config.env_file, self.config.project_root):
            return CheckResult(
                name=MISSING_ENV_CHECK_NAME,
                passed=False,
                help_text=self._missing_env_help(),
            )

        try:
            credentials = load_credentials(self.config, self.environ)
        except ConfigParseError as e:
            return CheckResult(
                name=CHECK_NAME,
                passed=False,
                help_text=f"{e}. Make sure every line looks like NAME=value.",
            )

        missing = self._missing_variables(credentials)
        if missing:
            return CheckResult(
                name=CHECK_NAME,
                passed=False,
                help_text=(
                    f"Missing {' and '.join(missing)} in {self.config.env_file}. "
                    f"Add {self._example_lines()} to your {self.config.env_file} file."
                ),
            )

        if not is_valid_token(credentials.api_key, self.config.token_rule,
                              self.config.token_prefix, self.config.token_min_length):
            return CheckResult(
                name=CHECK_NAME,
                passed=False,
                help_text=(
                    f"Check that your {self.config.env_file} file has "
                    f"{self.config.api_key_var}={self.config.token_prefix}..."
                ),
            )

        # HTTP headers only carry Latin-1; API keys are plain ASCII
        if not credentials.api_key.isascii():
            return CheckResult(
                name=CHECK_NAME,
                passed=False,
                help_text=(
                    f"{self.config.api_key_var} contains non-ASCII characters. "
                    f"Copy the key again from your Hackatime settings."
                ),
            )

        return self.send_test_heartbeat(credentials)

    def send_test_heartbeat(self, credentials: Credentials) -> CheckResult:
        """POST one heartbeat and judge the response status."""
        url = credentials.heartbeat_url
        payload = build_heartbeat_payload(self.config.user_agent)
        headers = {
            "Authorization": f"Bearer {credentials.api_key}",
            "Content-Type": "application/json",
        }
        log_net(f"POST {url} (timeout {self.config.request_timeout}s)")

        post = self.session.post if self.session is not None else requests.post
        try:
            response = post(
                url,
                json=payload.model_dump(),
                headers=headers,
                timeout=self.config.request_timeout,
            )
        except (requests.RequestException, UnicodeError) as e:
            log_net(f"transport failure: {e!r}")
            return CheckResult(
                name=CHECK_NAME,
                passed=False,
                help_text=f"Could not reach {url}: {e}",
            )

        status = response.status_code
        log_net(f"{url} answered HTTP {status}")
        if 200 <= status < 300:
            return CheckResult(
                name=CHECK_NAME,
                passed=True,
                info_text=f"Test heartbeat accepted by {url} (HTTP {status})",
            )

        return CheckResult(
            name=CHECK_NAME,
            passed=False,
            help_text=self._rejection_help(status, url),
        )

    def _missing_variables(self, credentials: Credentials) -> List[str]:
        missing = []
        if not credentials.api_key:
            missing.append(self.config.api_key_var)
        if not credentials.api_url:
            missing.append(self.config.api_url_var)
        return missing

    def _example_lines(self) -> str:
        return f"{self.config.api_key_var}=<your key> and {self.config.api_url_var}=<api url>"

    def _missing_env_help(self) -> str:
        if path_exists(self.config.env_example_file, self.config.project_root):
            return (
                f"Copy {self.config.env_example_file} to {self.config.env_file} "
                f"and fill in {self.config.api_key_var} and {self.config.api_url_var}."
            )
        return (
            f"Create a {self.config.env_file} file and add "
            f"{self.config.api_key_var} and {self.config.api_url_var}."
        )

    def _rejection_help(self, status: int, url: str) -> str:
        hints: Dict[int, str] = {
            401: "the API key was rejected, copy it again from your Hackatime settings",
            403: "the API key is not allowed to send heartbeats",
            404: f"the endpoint was not found, check {self.config.api_url_var}",
        }
        hint = hints.get(status)
        if status >= 500:
            hint = "the server had a problem, try again in a few minutes"
        message = f"Heartbeat request to {url} failed with HTTP {status}"
        return f"{message}: {hint}." if hint else f"{message}."
