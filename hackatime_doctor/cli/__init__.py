"""
Hackatime Doctor CLI
"""

from hackatime_doctor.cli.main_commands import app, main

__all__ = ["app", "main"]
