"""Logging setup for the agent-mesh CLI.

Log records always go to stderr so command output on stdout stays pipeable
(``agent-mesh agents list --json | jq``).
"""

import logging
import sys
from typing import Optional, TextIO

DEFAULT_FORMAT = "%(levelname)s %(name)s: %(message)s"
DEBUG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers that are noisy below WARNING
QUIET_LOGGERS = ("urllib3", "keyring")


def setup_logging(
    level: str = "WARNING",
    format_string: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Configure the root logger for a CLI run.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR)
        format_string: Optional custom format; DEBUG runs get timestamps
        stream: Output stream (default: stderr)

    Returns:
        The configured root logger

    Raises:
        ValueError: If the level name is unknown
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    if format_string is None:
        format_string = DEBUG_FORMAT if numeric_level <= logging.DEBUG else DEFAULT_FORMAT

    root = logging.getLogger()
    root.setLevel(numeric_level)

    # Remove existing handlers to avoid duplicates
    root.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(format_string))
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    return root
