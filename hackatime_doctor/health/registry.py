"""
Doctor check registry.

Every check is a probe descriptor with a name, a probe and a remediation
generator. The aggregator iterates :func:`default_checks` in order, so adding
or removing a check never touches the reporting code.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, List, Optional

from hackatime_doctor.health.credentials import CredentialValidator
from hackatime_doctor.health.models import CheckResult, DoctorConfig
from hackatime_doctor.health.probes import parse_major_version, path_exists, query_command


class BaseProbe(ABC):
    """
    Base interface for every doctor check.

    ``run`` must return a CheckResult for every outcome. An exception that
    escapes is turned into a failed result by the aggregator.
    """

    name: str

    @abstractmethod
    def run(self, config: DoctorConfig) -> CheckResult:
        pass


@dataclass
class ProbeDescriptor(BaseProbe):
    """
    Declarative boolean check.

    Attributes:
        name: Label shown in the report
        probe: Returns True when the check passes
        remediation: Builds the help text shown on failure
        info: Optional builder for extra context shown on success
    """
    name: str
    probe: Callable[[DoctorConfig], bool]
    remediation: Callable[[DoctorConfig], str]
    info: Optional[Callable[[DoctorConfig], Optional[str]]] = None

    def run(self, config: DoctorConfig) -> CheckResult:
        passed = bool(self.probe(config))
        if not passed:
            return CheckResult(name=self.name, passed=False, help_text=self.remediation(config))
        info_text = self.info(config) if self.info else None
        return CheckResult(name=self.name, passed=True, info_text=info_text)


@dataclass
class ToolProbe(BaseProbe):
    """
    Toolchain check built on a single ``--version`` invocation.

    The same output decides pass/fail and feeds the info text.

    Attributes:
        name: Label shown in the report
        command: Picks the executable from the config
        remediation: Builds the help text shown on failure
        info: Optional builder turning the version line into info text
    """
    name: str
    command: Callable[[DoctorConfig], str]
    remediation: Callable[[DoctorConfig], str]
    info: Optional[Callable[[DoctorConfig, str], Optional[str]]] = None

    def run(self, config: DoctorConfig) -> CheckResult:
        version = query_command(self.command(config))
        if version is None:
            return CheckResult(name=self.name, passed=False, help_text=self.remediation(config))
        if self.info is not None:
            info_text = self.info(config, version)
        else:
            info_text = version or None
        return CheckResult(name=self.name, passed=True, info_text=info_text)


class CredentialProbe(BaseProbe):
    """Runs the credential validator; the only check that talks to the network."""

    name = "API key valid"

    def __init__(self, validator_factory: Callable[[DoctorConfig], CredentialValidator] = CredentialValidator):
        self.validator_factory = validator_factory

    def run(self, config: DoctorConfig) -> CheckResult:
        return self.validator_factory(config).check()


def _runtime_info(config: DoctorConfig, version: str) -> Optional[str]:
    if not version:
        return None
    info = f"Version {version}"
    major = parse_major_version(version)
    if major is not None and major < config.min_runtime_major:
        info += (
            f"\nConsider upgrading to {config.runtime_label} "
            f"{config.min_runtime_major}+ for best results."
        )
    return info


def _path_descriptor(name: str, attribute: str, remediation: Callable[[DoctorConfig], str]) -> ProbeDescriptor:
    return ProbeDescriptor(
        name=name,
        probe=lambda config: path_exists(getattr(config, attribute), config.project_root),
        remediation=remediation,
    )


def _scaffold_remediation(attribute: str) -> Callable[[DoctorConfig], str]:
    def remediation(config: DoctorConfig) -> str:
        item = getattr(config, attribute)
        return f"Missing {item}. Did you set up the project?"
    return remediation


def default_checks(config: Optional[DoctorConfig] = None) -> List[BaseProbe]:
    """
    Ordered doctor checks: toolchain, then scaffolding, then connectivity.

    Labels follow the configured file names.
    """
    config = config or DoctorConfig()
    return [
        ToolProbe(
            name="Git installed",
            command=lambda c: c.vcs_command,
            remediation=lambda c: "Install Git: https://git-scm.com/downloads",
        ),
        ToolProbe(
            name=f"{config.runtime_label} installed",
            command=lambda c: c.runtime_command,
            remediation=lambda c: f"Install {c.runtime_label}: https://nodejs.org/en/download",
            info=_runtime_info,
        ),
        _path_descriptor(
            f"{config.manifest_file} present", "manifest_file",
            lambda c: "Run `npm init` to create one.",
        ),
        _path_descriptor(
            f"{config.dependencies_dir} folder present", "dependencies_dir",
            lambda c: "Run `npm install` to install dependencies.",
        ),
        _path_descriptor(f"{config.source_dir} exists", "source_dir", _scaffold_remediation("source_dir")),
        _path_descriptor(f"{config.docs_file} exists", "docs_file", _scaffold_remediation("docs_file")),
        _path_descriptor(f"{config.env_file} exists", "env_file", _scaffold_remediation("env_file")),
        CredentialProbe(),
    ]
