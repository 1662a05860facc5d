"""
Doctor Reporter
Formats check results and the final summary for the terminal.
"""

from typing import List, Optional

from hackatime_doctor.health.models import CheckResult, CheckSuite, SummaryTier
from hackatime_doctor.utils.console import Console, get_console

PASS_ICON = "✅"
FAIL_ICON = "❌"

NEARLY_THERE_MAX_FAILURES = 2

ONBOARDING_STEPS = [
    "Install the Hackatime/WakaTime extension for your editor",
    "Open your project and start coding, heartbeats are sent automatically",
    "Check your stats on the Hackatime dashboard after a few minutes",
]

BEGINNER_RESOURCES = [
    ("Git basics", "https://git-scm.com/book/en/v2/Getting-Started-About-Version-Control"),
    ("Installing Node.js", "https://nodejs.org/en/learn/getting-started/how-to-install-nodejs"),
    ("npm getting started", "https://docs.npmjs.com/getting-started"),
    ("Hackatime setup guide", "https://hackatime.hackclub.com/docs"),
]


def classify(passed: int, total: int) -> SummaryTier:
    """
    Map a pass count to a summary tier.

    0 failures is ALL_PASSED, 1-2 failures NEARLY_THERE, 3 or more NEEDS_WORK.
    """
    failures = max(total - passed, 0)
    if failures == 0:
        return SummaryTier.ALL_PASSED
    if failures <= NEARLY_THERE_MAX_FAILURES:
        return SummaryTier.NEARLY_THERE
    return SummaryTier.NEEDS_WORK


class DoctorReporter:
    """
    Prints check results as they arrive and the tiered summary at the end.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or get_console()

    def print_header(self) -> None:
        self.console.print("\n👨‍⚕️ Hackatime Doctor - System Checkup\n", style="bold bright_blue")

    def format_result(self, result: CheckResult) -> str:
        icon = PASS_ICON if result.passed else FAIL_ICON
        return f"{icon} {result.name}"

    def print_result(self, result: CheckResult) -> None:
        """One line per check, followed by indented info or help text."""
        style = "green" if result.passed else "red"
        self.console.print(self.format_result(result), style=style, markup=False)

        extra = result.info_text if result.passed else result.help_text
        if extra:
            for line in extra.splitlines():
                self.console.print(f"   {line}", style="dim" if result.passed else "yellow", markup=False)

    def display_summary(self, suite: CheckSuite) -> SummaryTier:
        tier = classify(suite.passed_count, suite.total)

        self.console.print()
        self.console.print(f"{suite.passed_count}/{suite.total} checks passed", style="bold")

        if tier is SummaryTier.ALL_PASSED:
            self._print_all_passed()
        elif tier is SummaryTier.NEARLY_THERE:
            self._print_nearly_there(suite.failed)
        else:
            self._print_needs_work(suite.failed_count)

        self._print_tips()
        return tier

    def _print_all_passed(self) -> None:
        self.console.print(f"{PASS_ICON} All checks passed! You're good to go.", style="bold green")
        self.console.print("\nNext steps:", style="bold")
        for number, step in enumerate(ONBOARDING_STEPS, 1):
            self.console.print(f"  {number}. {step}", markup=False)

    def _print_nearly_there(self, failed: List[CheckResult]) -> None:
        names = ", ".join(r.name for r in failed)
        self.console.print("⚠️ Almost there! Fix the checks above and run the doctor again.", style="bold yellow")
        self.console.print(f"   Still failing: {names}", style="yellow", markup=False)

    def _print_needs_work(self, failed_count: int) -> None:
        self.console.print(
            f"⚠️ {failed_count} checks failed. See above for help.", style="bold red"
        )
        self.console.print("\nNew to this? These guides walk through the setup:", style="bold")
        for title, url in BEGINNER_RESOURCES:
            self.console.print(f"  • {title}: {url}", markup=False)

    def _print_tips(self) -> None:
        self.console.print(
            "\n📘 Tip: Open VS Code terminal with Ctrl+` (backtick) or from Terminal > New Terminal",
            style="cyan", markup=False,
        )
        self.console.print("📘 Run this tool again anytime with: hackatime-doctor\n", style="cyan", markup=False)
