"""
Structured logging configuration for Hyperion.

This module configures structlog on top of the standard library logging
so that the engine, the readers and the CLI share one logging setup.
Task output lines are logged through the ``hyperion.output`` logger
unless a different output sink is injected into the run.

Functions:
    setup_logging(): Initialize logging configuration
    get_logger(name): Get configured logger instance

Configuration:
    Logging behavior is controlled by the settings (environment variables
    with the ``HYPERION_`` prefix):
    - LOG_LEVEL: Minimum log level (DEBUG/INFO/WARNING/ERROR/CRITICAL)
    - LOG_FORMAT: Output format (json/text)
    - LOG_FILE_PATH: Optional file output path
    - DEBUG / ENVIRONMENT: Enable rich console output for development

Example:
    >>> from hyperion.core.logging.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Task group started", group="build", parallel=False)
"""

import logging
import logging.config
import sys
from pathlib import Path

import structlog
from rich.console import Console
from rich.logging import RichHandler

from hyperion.core.config.settings import settings


def setup_logging() -> None:
    """
    Initialize logging configuration.

    Configures the structlog processor chain and the standard library
    root logger. The handler is selected from the settings:
        - Development or debug: Rich console handler on stderr
        - Otherwise: plain stream handler on stderr
        - File: additional file handler when LOG_FILE_PATH is configured

    Example:
        >>> from hyperion.core.logging.logger import setup_logging
        >>> setup_logging()  # Call once at application startup
    """

    # Configure structlog processors
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    handlers = []

    if settings.DEBUG or settings.ENVIRONMENT == "development":
        console = Console(stderr=True)
        rich_handler = RichHandler(
            console=console,
            show_time=True,
            show_level=True,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
        rich_handler.setLevel(settings.LOG_LEVEL)
        handlers.append(rich_handler)
    else:
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setLevel(settings.LOG_LEVEL)
        handlers.append(stream_handler)

    if settings.LOG_FILE_PATH:
        file_path = Path(settings.LOG_FILE_PATH)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(file_path)
        file_handler.setLevel(settings.LOG_LEVEL)
        handlers.append(file_handler)

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        handlers=handlers,
        format="%(message)s",
    )

    # asyncio reports subprocess transport details at debug level
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a configured structured logger instance.

    Args:
        name (str): Logger name, typically __name__ of the calling module

    Returns:
        structlog.stdlib.BoundLogger: Configured logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("set variable", name="version", value="1.2.3")

    Note:
        If logging hasn't been configured yet, this function will
        automatically call setup_logging() to ensure proper initialization.
    """
    if not structlog.is_configured():
        setup_logging()
    return structlog.get_logger(name)


def bind_run_context(**context) -> structlog.stdlib.BoundLogger:
    """
    Create a logger with bound run context.

    Used by the engine to tag every log entry of a task group run with
    the group title, so interleaved output of parallel groups stays
    readable.

    Example:
        >>> logger = bind_run_context(group="deploy")
        >>> logger.info("Task finished", task="upload", success=True)
    """
    return get_logger("hyperion.run").bind(**context)


# Setup logging on import
setup_logging()
