"""
Hackatime Doctor CLI - Main entry point
Routing only, the command logic lives in hackatime_doctor.cli.commands
"""

import typer

from hackatime_doctor.cli.commands.doctor_command import doctor_command


app = typer.Typer(
    help="👨‍⚕️ Hackatime Doctor - verify your project is ready for Hackatime",
    context_settings={"help_option_names": ["-h", "--help"]},
    add_completion=False,
    rich_markup_mode="rich",
)

app.command(name="doctor")(doctor_command)


def main() -> None:
    """Console script entry point."""
    app()
