"""Log output for a CI run.

Everything goes through the "ticketgate" logger and its children
(ticketgate.pipeline, ticketgate.resolver, ...) to stderr, so a workflow
log shows one line per stage and per ticket. The root logger is left alone.

With logging.github_annotations enabled (env LOGGING_GITHUB_ANNOTATIONS),
WARNING and ERROR lines are emitted as GitHub Actions workflow commands and
show up as annotations on the check run.
"""

import logging
import sys
from typing import TextIO

from ticketgate.config import LoggingConfig

LOGGER_NAME = "ticketgate"

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Workflow command per level; lower levels are printed as plain lines
_ANNOTATIONS = {
    logging.WARNING: "warning",
    logging.ERROR: "error",
}


def _resolve_level(level: str) -> int:
    """Map level name to logging constant. Falls back to INFO if unknown."""
    return LEVELS.get(level.upper().strip(), logging.INFO)


def _escape_command_data(message: str) -> str:
    # GitHub workflow command data encoding
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class AnnotationFormatter(logging.Formatter):
    """Formatter that turns WARNING/ERROR records into ::warning:: / ::error:: commands."""

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        command = _ANNOTATIONS.get(record.levelno)
        if command is None and record.levelno > logging.ERROR:
            command = "error"
        if command is None:
            return text
        return f"::{command}::{_escape_command_data(text)}"


def setup_logging(config: LoggingConfig | None = None, stream: TextIO | None = None) -> logging.Logger:
    """Attach a single stderr handler to the ticketgate logger and return it.

    Without a config (e.g. when the config itself failed to load) INFO and
    the default format are used. Calling it again replaces the previous
    handler. urllib3 connection chatter is only shown at DEBUG.
    """
    if config is None:
        level, fmt, annotate = logging.INFO, DEFAULT_FORMAT, False
    else:
        level = _resolve_level(config.level)
        fmt = config.format or DEFAULT_FORMAT
        annotate = config.github_annotations
    formatter = AnnotationFormatter(fmt) if annotate else logging.Formatter(fmt)

    logger = logging.getLogger(LOGGER_NAME)
    for old in list(logger.handlers):
        logger.removeHandler(old)
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(level)

    logging.getLogger("urllib3").setLevel(logging.DEBUG if level == logging.DEBUG else logging.WARNING)
    return logger
