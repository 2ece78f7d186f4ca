"""
Logging configuration for Daybook
"""

import logging
from typing import TYPE_CHECKING, cast

import structlog
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from daybook.config import Settings


def setup_logging(settings: "Settings | None" = None) -> None:
    """Set up structured logging with rich formatting"""
    from daybook.config import get_settings

    settings = settings or get_settings()

    # Development mode enables tracing
    if settings.is_development:
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            show_time=True,
            show_path=True,
            markup=False,
            rich_tracebacks=True,
        )
    ]
    if settings.log_file is not None:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(settings.log_file, encoding="utf-8"))

    # Configure standard library logging
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=handlers,
        force=True,
    )

    # Configure structlog
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            (
                structlog.processors.JSONRenderer()
                if settings.log_format == "json"
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if settings.is_development:
        get_logger("daybook").debug(
            "Development mode is enabled, tracing is activated"
        )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance"""
    logger = structlog.get_logger(name)
    return cast("structlog.stdlib.BoundLogger", logger)


def preview(content: str | None, max_length: int = 50) -> str:
    """Shorten user content before it goes into a log line"""
    if content is None:
        return ""
    flat = content.replace("\n", "\\n")
    if len(flat) > max_length:
        return flat[:max_length] + "..."
    return flat
