"""
Probe primitives.

Atomic checks against the filesystem and external executables. None of them
raise: a missing binary, a crashing tool or an unreadable path all come back
as a plain ``False`` / ``None``.
"""

import re
import subprocess
from pathlib import Path
from typing import Optional, Sequence, Union

from hackatime_doctor.utils.logger import log_probe

VERSION_FLAG = "--version"
COMMAND_TIMEOUT = 10

_MAJOR_VERSION = re.compile(r"v?(\d+)\.\d+")


def _run_version_query(command: str, args: Sequence[str] = (VERSION_FLAG,)) -> Optional[subprocess.CompletedProcess]:
    try:
        return subprocess.run(
            [command, *args],
            capture_output=True,
            text=True,
            timeout=COMMAND_TIMEOUT,
        )
    except subprocess.TimeoutExpired:
        log_probe(f"'{command} {' '.join(args)}' timed out after {COMMAND_TIMEOUT}s", command)
    except OSError as e:
        # FileNotFoundError / PermissionError when the binary is missing or not executable
        log_probe(f"could not run '{command}': {e}", command)
    except ValueError as e:
        # Empty or NUL-containing command names
        log_probe(f"invalid command {command!r}: {e}", command)
    return None


def query_command(command: str) -> Optional[str]:
    """
    Run ``command --version`` once.

    Args:
        command: Executable name or path

    Returns:
        First line of the version output ("" when the tool prints nothing)
        if the process exits with status 0, otherwise None
    """
    result = _run_version_query(command)
    if result is None:
        return None
    if result.returncode != 0:
        log_probe(f"exited with status {result.returncode}", command)
        return None
    output = (result.stdout or result.stderr or "").strip()
    return output.splitlines()[0].strip() if output else ""


def command_available(command: str) -> bool:
    """Whether ``command --version`` runs and exits cleanly."""
    return query_command(command) is not None


def command_version(command: str) -> Optional[str]:
    """First line of ``command --version`` output, or None when unavailable."""
    return query_command(command) or None


def parse_major_version(version: Optional[str]) -> Optional[int]:
    """Extract the major version from strings like 'v18.17.1' or 'git version 2.43.0'."""
    if not version:
        return None
    match = _MAJOR_VERSION.search(version)
    return int(match.group(1)) if match else None


def path_exists(relative_path: Union[str, Path], root: Optional[Path] = None) -> bool:
    """
    Existence check relative to the project root.

    Args:
        relative_path: File or directory name
        root: Directory to resolve against (defaults to the working directory)
    """
    base = root if root is not None else Path.cwd()
    try:
        exists = (base / relative_path).exists()
    except OSError as e:
        log_probe(f"cannot stat {relative_path}: {e}", "path")
        return False
    log_probe(f"{relative_path} -> {'found' if exists else 'missing'}", "path")
    return exists
