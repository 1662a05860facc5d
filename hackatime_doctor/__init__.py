"""
Hackatime Doctor - checks that a project is ready to send heartbeats to Hackatime.
"""

__version__ = "0.1.0"
