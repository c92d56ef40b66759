"""Structured logging with structlog.

Call ``setup_logging`` once at startup; modules obtain loggers with
``get_logger(__name__)`` and log snake_case events with keyword fields::

    logger.info("permissions_saved", user_id="1234", changed_by="9999")
"""

import logging
import sys

import structlog

_logging_configured: bool = False

_NOISY_LOGGERS = ("uvicorn.access", "psycopg.pool", "keycloak")


def setup_logging(log_level: str = "INFO", debug: bool = False) -> None:
    """Configure structlog on top of stdlib logging (JSON unless debug)."""
    global _logging_configured

    if _logging_configured:
        return

    level = getattr(logging, log_level.upper(), logging.INFO)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]

    structlog.configure(
        processors=shared_processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.dev.ConsoleRenderer()
        if debug
        else structlog.processors.JSONRenderer(),
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _logging_configured = True


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Named structured logger; use the module's ``__name__``."""
    return structlog.get_logger(name)
