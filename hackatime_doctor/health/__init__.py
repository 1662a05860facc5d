"""
Doctor Check System
Probes, credential validation, aggregation and reporting.
"""

from hackatime_doctor.health.models import (
    CheckResult,
    CheckSuite,
    ConfigParseError,
    DoctorConfig,
    DoctorError,
    SummaryTier,
)
from hackatime_doctor.health.reporter import DoctorReporter, classify

__all__ = [
    "CheckResult",
    "CheckSuite",
    "ConfigParseError",
    "DoctorConfig",
    "DoctorError",
    "SummaryTier",
    "DoctorReporter",
    "classify",
]
