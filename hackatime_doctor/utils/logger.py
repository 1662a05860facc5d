import logging
import sys

# Global logger object
logger = logging.getLogger("hackatime_doctor")

DEFAULT_LEVEL = logging.WARNING


class TerminalFormatter(logging.Formatter):
    """
    Terminal formatter: indents diagnostics so they read as sub-lines of the report.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.exc_info and record.levelno <= logging.DEBUG:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return f"   · {record.levelname.lower()}: {message}"


def _doctor_handler() -> logging.Handler:
    """The stderr handler owned by the doctor, created on first use."""
    for handler in logger.handlers:
        if isinstance(handler.formatter, TerminalFormatter):
            return handler
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(TerminalFormatter())
    logger.addHandler(handler)
    return handler


def setup_log_level(level: int = DEFAULT_LEVEL) -> None:
    """
    Set the doctor log level (-v support).
    Installs a stderr handler the first time so logs never mix with the report on stdout.
    Handlers attached by others (log capture, embedding apps) are left alone.
    """
    logger.setLevel(level)
    logger.propagate = False
    _doctor_handler().setLevel(level)

    # Silence HTTP internals unless explicitly debugging
    logging.getLogger("urllib3").setLevel(logging.WARNING if level > logging.DEBUG else logging.DEBUG)


def mask_secret(value: str, visible: int = 4) -> str:
    """Mask all but the first characters of a secret"""
    if not value:
        return ""
    if len(value) <= visible:
        return "*" * len(value)
    return value[:visible] + "*" * (len(value) - visible)


# Category helpers
# PROBE (tool / file probes), CONFIG (env + settings), NET (heartbeat call), SYS (run lifecycle)


def log_probe(message: str, probe: str = None) -> None:
    """Probe log (DEBUG)"""
    if probe:
        logger.debug(f"[PROBE:{probe}] {message}")
    else:
        logger.debug(f"[PROBE] {message}")


def log_config(message: str) -> None:
    """Configuration loading log"""
    logger.debug(f"[CONFIG] {message}")


def log_net(message: str) -> None:
    """Network log"""
    logger.debug(f"[NET] {message}")


def log_sys(message: str) -> None:
    logger.info(f"[SYS] {message}")
