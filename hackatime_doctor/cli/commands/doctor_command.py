"""
Doctor Command Implementation
"""

import logging

import typer
from pydantic import ValidationError
from typing_extensions import Annotated

from hackatime_doctor import __version__
from hackatime_doctor.health.checker import CheckAggregator
from hackatime_doctor.health.reporter import DoctorReporter
from hackatime_doctor.utils.console import get_console
from hackatime_doctor.utils.env_loader import load_doctor_config
from hackatime_doctor.utils.logger import DEFAULT_LEVEL, setup_log_level


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"hackatime-doctor {__version__}")
        raise typer.Exit()


def doctor_command(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Print probe and network diagnostics to stderr")
    ] = False,
    version: Annotated[
        bool,
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show version and exit")
    ] = False,
) -> None:
    """
    Check that this project is ready to send heartbeats to Hackatime.

    Runs every check in order (Git, Node.js, project files, .env and the API
    key) and prints how to fix anything that fails. Always exits with code 0.
    """
    setup_log_level(logging.DEBUG if verbose else DEFAULT_LEVEL)
    console = get_console()

    try:
        config = load_doctor_config()
    except ValidationError as e:
        console.print(f"❌ Invalid HACKATIME_DOCTOR_* setting: {e}", style="red", markup=False)
        return

    try:
        CheckAggregator(config, reporter=DoctorReporter(console)).run()
    except KeyboardInterrupt:
        console.print("\n⚠️ Doctor run interrupted.", style="yellow")
