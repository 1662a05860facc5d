"""
CLI Commands Module
"""

from hackatime_doctor.cli.commands.doctor_command import doctor_command

__all__ = ["doctor_command"]
