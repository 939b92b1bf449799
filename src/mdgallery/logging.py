"""Console logging for the mdgallery CLI.

Library modules log to ``logging.getLogger(__name__)`` and never add
handlers. Only the CLI calls setup_logging(), which routes the "mdgallery"
logger tree to the terminal:
- Debug output (per-motif details) only with --verbose
- Warnings and errors go to stderr with a level prefix
"""

import logging
import sys

LOGGER_NAME = "mdgallery"


class ConsoleFormatter(logging.Formatter):
    """Bare messages, with a "Warning:"/"Error:" prefix from WARNING up."""

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno >= logging.WARNING:
            return f"{record.levelname.capitalize()}: {record.getMessage()}"
        return record.getMessage()


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure the mdgallery logger for console output.

    Args:
        verbose: If True, show debug-level messages. Otherwise, show info and above.

    Returns:
        The configured logger instance.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.addFilter(lambda r: r.levelno < logging.WARNING)
    stdout_handler.setFormatter(ConsoleFormatter())

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)
    stderr_handler.setFormatter(ConsoleFormatter())

    logger.addHandler(stdout_handler)
    logger.addHandler(stderr_handler)
    logger.propagate = False

    return logger
