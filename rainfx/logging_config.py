"""Structured logging configuration."""

import logging
import sys
from typing import Any, TextIO

import structlog

# Third-party loggers that are chatty at DEBUG
QUIET_LOGGERS = ("PIL", "imageio", "imageio_ffmpeg")

HANDLER_NAME = "rainfx"


def _processors(debug: bool) -> list[Any]:
    shared: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if debug:
        return shared + [structlog.dev.ConsoleRenderer(colors=True)]
    return shared + [
        structlog.processors.dict_tracebacks,
        structlog.processors.JSONRenderer(),
    ]


def _install_handler(stream: TextIO, level: int) -> logging.Handler:
    """Attach our stream handler to the root logger, replacing an earlier one."""
    root = logging.getLogger()
    for handler in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(handler)
        handler.close()

    handler = logging.StreamHandler(stream)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
    root.setLevel(level)
    return handler


def configure_logging(log_level: str = "INFO", debug: bool = False, stream: TextIO | None = None) -> logging.Handler:
    """Configure structured logging for the application.

    Safe to call repeatedly; each call replaces the previous handler.
    Logs go to stderr by default so command output on stdout stays clean.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        debug: Pretty console output instead of JSON lines
        stream: Destination stream, defaults to stderr

    Returns:
        The installed handler
    """
    level = getattr(logging, log_level.upper())
    handler = _install_handler(stream if stream is not None else sys.stderr, level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    structlog.configure(
        processors=_processors(debug),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    return handler


def bind_run_context(**values: Any) -> None:
    """Tag every following log line with run-wide values (command, seed...).

    Replaces whatever was bound before; ``None`` values are dropped.
    """
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**{k: v for k, v in values.items() if v is not None})


def get_logger(name: str | None = None):
    """Get a structured logger instance.

    Args:
        name: Logger name, defaults to calling module

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)
