"""structlog setup for hosts embedding command context assembly.

Events are rendered by a handler on the ``command_context`` stdlib logger
rather than the root logger, so configuring this package leaves the host's
own logging untouched.
"""

import logging
import sys
from typing import IO, Any

import structlog

from command_context.config import LoggingSettings, settings

PACKAGE_LOGGER = "command_context"

_HANDLER_NAME = "command_context.structlog"


def _shared_processors() -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def _renderer(log_format: str) -> list[Any]:
    if log_format == "console":
        return [structlog.dev.ConsoleRenderer(colors=False)]
    return [
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]


def configure_logging(
    logging_settings: LoggingSettings | None = None,
    stream: IO[str] | None = None,
) -> logging.Handler:
    """Route structlog events from this package to a stream.

    Calling it again replaces the previously installed handler.

    Args:
        logging_settings: Level and format; defaults to settings.logging
        stream: Destination stream; defaults to stderr

    Returns:
        The installed handler
    """
    config = logging_settings or settings.logging
    shared = _shared_processors()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared,
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *_renderer(config.format),
        ],
    )
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(formatter)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for existing in list(package_logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            package_logger.removeHandler(existing)
    package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, config.level))
    package_logger.propagate = False

    return handler
