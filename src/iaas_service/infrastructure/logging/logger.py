"""Structured logging setup built on structlog."""

import logging
import sys
from typing import Optional

import structlog

_ROOT_LOGGER_NAME = "iaas_service"
_configured_handler: Optional[logging.Handler] = None


def _shared_processors() -> list:
    return [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]


def setup_logging(
    log_level: str = "INFO",
    json_format: bool = False,
    stream=None,
) -> logging.Logger:
    """
    Set up structured logging for the service layer using structlog.

    Records emitted through stdlib loggers (``get_logger``) are rendered by a
    ``structlog.stdlib.ProcessorFormatter``, so ``extra={...}`` context ends up
    as key/value pairs in the output.

    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Render JSON lines instead of the console format
        stream: Output stream, defaults to stderr

    Returns:
        The package root logger
    """
    global _configured_handler

    renderer = (
        structlog.processors.JSONRenderer()
        if json_format
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_shared_processors(),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ],
    )

    root = logging.getLogger(_ROOT_LOGGER_NAME)
    if _configured_handler is not None:
        root.removeHandler(_configured_handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(formatter)
    root.addHandler(handler)
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    _configured_handler = handler

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_shared_processors(),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    return root


def get_logger(name: str) -> logging.Logger:
    """Get a stdlib logger; names outside the package are nested under it."""
    if name != _ROOT_LOGGER_NAME and not name.startswith(_ROOT_LOGGER_NAME + "."):
        name = f"{_ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
