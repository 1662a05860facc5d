"""
Check Aggregator
Runs the doctor checks in order and streams each result to the reporter.
"""

from typing import List, Optional

from hackatime_doctor.health.models import CheckResult, CheckSuite, DoctorConfig
from hackatime_doctor.health.registry import BaseProbe, default_checks
from hackatime_doctor.health.reporter import DoctorReporter
from hackatime_doctor.utils.logger import logger, log_sys


class CheckAggregator:
    """
    Runs every registered check, even after earlier failures.

    Results are printed the moment they are produced and collected into a
    CheckSuite in declaration order.
    """

    def __init__(
        self,
        config: Optional[DoctorConfig] = None,
        checks: Optional[List[BaseProbe]] = None,
        reporter: Optional[DoctorReporter] = None,
    ) -> None:
        self.config = config or DoctorConfig()
        self.checks = checks if checks is not None else default_checks(self.config)
        self.reporter = reporter or DoctorReporter()

    def run_all_checks(self) -> CheckSuite:
        suite = CheckSuite()
        log_sys(f"Running {len(self.checks)} checks in {self.config.project_root}")

        for check in self.checks:
            result = self._run_check(check)
            suite.add(result)
            self.reporter.print_result(result)

        return suite

    def run(self) -> CheckSuite:
        """Full doctor run: header, streamed checks, summary."""
        self.reporter.print_header()
        suite = self.run_all_checks()
        self.reporter.display_summary(suite)
        return suite

    def _run_check(self, check: BaseProbe) -> CheckResult:
        name = self._safe_get_name(check)
        try:
            return check.run(self.config)
        except Exception as e:
            logger.debug(f"Check '{name}' raised", exc_info=True)
            return self._create_error_result(name, e)

    def _create_error_result(self, name: str, exception: Exception) -> CheckResult:
        return CheckResult(
            name=name,
            passed=False,
            help_text=f"The check itself failed unexpectedly: {exception}",
        )

    def _safe_get_name(self, check: BaseProbe) -> str:
        return getattr(check, "name", None) or f"Unknown check ({check.__class__.__name__})"
