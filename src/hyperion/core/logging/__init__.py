"""
Hyperion Logging Module - Structured Application Logging.

Provides the structlog based logging used by the readers, the execution
engine and the command line interface.

Components:
    - logger: Logging configuration and factory functions

Example:
    >>> from hyperion.core.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Document loaded", path="pipeline.yml", groups=2)
"""

from .logger import bind_run_context, get_logger, setup_logging

__all__ = ["get_logger", "setup_logging", "bind_run_context"]
