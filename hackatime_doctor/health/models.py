"""
Doctor Check Models
Data structures shared by probes, the check aggregator and the reporter.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterator, List, Optional

from pydantic import BaseModel, Field, field_validator


TOKEN_RULES = ("non_empty", "prefixed")


class SummaryTier(Enum):
    """Overall outcome of a doctor run"""
    ALL_PASSED = "all_passed"
    NEARLY_THERE = "nearly_there"
    NEEDS_WORK = "needs_work"


@dataclass(frozen=True)
class CheckResult:
    """
    Outcome of a single doctor check.

    Attributes:
        name: Label shown next to the pass/fail marker
        passed: Whether the check succeeded
        help_text: Remediation shown when the check fails
        info_text: Extra context shown under the result (versions, endpoints)
    """
    name: str
    passed: bool
    help_text: Optional[str] = None
    info_text: Optional[str] = None


@dataclass
class CheckSuite:
    """Ordered results of one doctor run."""
    results: List[CheckResult] = field(default_factory=list)

    def add(self, result: CheckResult) -> None:
        self.results.append(result)

    def __iter__(self) -> Iterator[CheckResult]:
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def passed_count(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def failed_count(self) -> int:
        return self.total - self.passed_count

    @property
    def failed(self) -> List[CheckResult]:
        return [r for r in self.results if not r.passed]


class DoctorConfig(BaseModel):
    """
    Settings for a doctor run.

    Defaults describe a Node.js project wired to Hackatime. Individual values
    can be overridden through ``HACKATIME_DOCTOR_*`` environment variables,
    see :func:`load_doctor_config`.
    """

    project_root: Path = Field(default_factory=Path.cwd, description="Project directory to inspect")

    # Toolchain
    vcs_command: str = Field(default="git", description="Version control executable")
    runtime_command: str = Field(default="node", description="Runtime executable")
    runtime_label: str = Field(default="Node.js", description="Runtime display name")
    min_runtime_major: int = Field(default=18, description="Recommended minimum runtime major version")

    # Scaffolding
    manifest_file: str = Field(default="package.json")
    dependencies_dir: str = Field(default="node_modules")
    source_dir: str = Field(default="src")
    docs_file: str = Field(default="README.md")
    env_file: str = Field(default=".env")
    env_example_file: str = Field(default=".env.example")

    # Credentials
    api_key_var: str = Field(default="HACKATIME_API_KEY")
    api_url_var: str = Field(default="HACKATIME_API_URL")
    token_rule: str = Field(default="non_empty", description="non_empty or prefixed")
    token_prefix: str = Field(default="ht_")
    token_min_length: int = Field(default=15, description="Token must be longer than this")

    # Network
    request_timeout: float = Field(default=10.0, description="Heartbeat request timeout (seconds)")
    user_agent: str = Field(default="wakatime/v1.0.0 (hackatime-doctor) hackatime-doctor/0.1.0")

    @field_validator("token_rule")
    @classmethod
    def _check_token_rule(cls, value: str) -> str:
        if value not in TOKEN_RULES:
            raise ValueError(f"token_rule must be one of {', '.join(TOKEN_RULES)}, got {value!r}")
        return value

    @field_validator("request_timeout")
    @classmethod
    def _check_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("request_timeout must be positive")
        return value

    @property
    def env_path(self) -> Path:
        return self.project_root / self.env_file


class DoctorError(Exception):
    """
    Base error for doctor failures.

    Carries the name of the check it belongs to, when known.
    """

    def __init__(self, message: str, check_name: Optional[str] = None,
                 original_error: Optional[Exception] = None):
        super().__init__(message)
        self.check_name = check_name
        self.original_error = original_error

    def __str__(self) -> str:
        prefix = f"[{self.check_name}] " if self.check_name else ""
        return f"{prefix}{super().__str__()}"


class ConfigParseError(DoctorError):
    """The environment file exists but could not be read or parsed."""
