"""
CLI console module.
- Rich based output for the doctor report
- Diagnostics go through the logger module instead
"""

import os
import sys
from typing import Any, Optional

from rich.console import Console as RichConsole


class Console:
    """
    Doctor console.
    - Rich styled output
    - Output mode detection (test/plain/rich)
    """

    def __init__(self, file: Optional[Any] = None):
        self.mode: str = self._detect_output_mode()
        if self.mode == "test":
            self.console = RichConsole(file=file, width=200, soft_wrap=False, highlight=False)
        elif self.mode == "plain":
            self.console = RichConsole(file=file, no_color=True, highlight=False)
        else:
            self.console = RichConsole(file=file, highlight=False)

    def print(self, *args, **kwargs) -> None:
        """Rich console output"""
        self.console.print(*args, **kwargs)

    def _detect_output_mode(self) -> str:
        if os.environ.get("PYTEST_CURRENT_TEST"):
            return "test"
        if os.environ.get("NO_COLOR") or self.is_ci_environment() or not sys.stdout.isatty():
            return "plain"
        return "rich"

    def is_ci_environment(self) -> bool:
        """Whether we are running in CI"""
        return any(env in os.environ for env in ["CI", "GITHUB_ACTIONS", "JENKINS_URL"])


def get_console(file: Optional[Any] = None) -> Console:
    """Create a Console instance"""
    return Console(file)
