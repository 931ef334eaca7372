"""Structured logging for git-ghost, silent until the embedding code opts in."""

import logging
import sys
from pathlib import Path
from typing import Any, Optional

import structlog

LIBRARY_LOGGER = "gitghost"

# Attribute marking handlers installed by setup_logging, so reconfiguring replaces them
_HANDLER_MARK = "_gitghost_handler"

# Without this, stdlib's last-resort handler would print warnings and errors to stderr
logging.getLogger(LIBRARY_LOGGER).addHandler(logging.NullHandler())


def setup_logging(verbose: bool = False, log_file: Optional[Path] = None) -> None:
    """
    Route git-ghost events to stderr and, optionally, a log file.

    Until this is called every event is dropped. Calling it again replaces
    the handlers installed by the previous call.

    Args:
        verbose: If True, set log level to DEBUG, otherwise CRITICAL (silent)
        log_file: Optional path to a log file receiving the same records
    """
    log_level = logging.DEBUG if verbose else logging.CRITICAL

    library_logger = logging.getLogger(LIBRARY_LOGGER)
    library_logger.setLevel(log_level)
    library_logger.propagate = False

    for handler in list(library_logger.handlers):
        if getattr(handler, _HANDLER_MARK, False):
            library_logger.removeHandler(handler)
            handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(logging.Formatter("%(message)s"))
        setattr(handler, _HANDLER_MARK, True)
        library_logger.addHandler(handler)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


def get_logger(name: str = LIBRARY_LOGGER) -> Any:
    """
    Get a structlog logger writing through a stdlib logger under ``gitghost``.

    The stdlib logger is bound explicitly rather than taken from structlog's
    global logger factory, whose default prints to stdout. Loggers are not
    cached, so a later setup_logging call applies to module-level loggers.

    Args:
        name: Dotted logger name, normally the calling module's ``__name__``

    Returns:
        A structlog BoundLogger instance
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
