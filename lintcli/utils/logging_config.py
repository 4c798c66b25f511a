"""
Logging configuration for the application.

All lintcli modules log through the ``lintcli`` logger hierarchy.
A LogContext owns that logger's output and error sinks and its level,
so every component of one invocation writes to the same destinations.
"""

import logging
import sys
from typing import Optional, TextIO

ROOT_LOGGER_NAME = "lintcli"

_LEVEL_PREFIXES = {
    logging.DEBUG: "DEBUG: ",
    logging.INFO: "",
    logging.WARNING: "WARN: ",
    logging.ERROR: "ERROR: ",
    logging.CRITICAL: "ERROR: ",
}


class PrefixFormatter(logging.Formatter):
    """Prefixes each message with a short severity tag."""

    def format(self, record: logging.LogRecord) -> str:
        prefix = _LEVEL_PREFIXES.get(record.levelno, f"{record.levelname}: ")
        text = prefix + record.getMessage()
        if record.exc_info:
            text += "\n" + self.formatException(record.exc_info)
        return text


class _BelowLevelFilter(logging.Filter):
    """Lets through records strictly below a level."""

    def __init__(self, level: int):
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.level


class LogContext:
    """
    Process-wide logging destination for one invocation.

    Records below ERROR are written to the output sink, ERROR and
    above to the error sink. The underlying logger is shared state:
    tests running several invocations in one process must call
    set_sinks and set_level between cases.
    """

    def __init__(self, name: str = ROOT_LOGGER_NAME):
        self.logger = logging.getLogger(name)
        self.logger.propagate = False
        self.out: Optional[TextIO] = None
        self.err: Optional[TextIO] = None

    def set_sinks(self, out: TextIO, err: TextIO) -> None:
        """Replace the output and error streams."""
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)

        formatter = PrefixFormatter()

        out_handler = logging.StreamHandler(out)
        out_handler.setLevel(logging.DEBUG)
        out_handler.addFilter(_BelowLevelFilter(logging.ERROR))
        out_handler.setFormatter(formatter)

        err_handler = logging.StreamHandler(err)
        err_handler.setLevel(logging.ERROR)
        err_handler.setFormatter(formatter)

        self.logger.addHandler(out_handler)
        self.logger.addHandler(err_handler)
        self.out = out
        self.err = err

    def set_level(self, level) -> None:
        """Set the minimum severity, as a name ("DEBUG") or number."""
        if isinstance(level, str):
            level = getattr(logging, level.upper())
        self.logger.setLevel(level)

    def set_verbose(self, verbose: bool) -> None:
        self.set_level(logging.DEBUG if verbose else logging.INFO)

    def is_debug_enabled(self) -> bool:
        return self.logger.isEnabledFor(logging.DEBUG)


def setup_logging(
    level: str = "INFO",
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> LogContext:
    """
    Configure logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR).
        out: Stream for informational output, stdout by default.
        err: Stream for errors, stderr by default.

    Returns:
        The configured LogContext.
    """
    context = LogContext()
    context.set_sinks(out or sys.stdout, err or sys.stderr)
    context.set_level(level)
    return context
