"""
Core configuration management for Hyperion.

This module provides centralized configuration management using Pydantic
settings with support for environment variables, `.env` files and type
validation. All runtime knobs of the engine are defined here with
sensible defaults.

Classes:
    Settings: Main configuration class with all application settings

Environment Variables:
    Every setting can be overridden with an environment variable using the
    ``HYPERION_`` prefix and the attribute name, for example
    ``HYPERION_MAX_PARALLEL_TASKS=4``.

Example:
    >>> from hyperion.core.config.settings import Settings
    >>> settings = Settings()
    >>> print(settings.SHELL)
    bash

Configuration Sections:
    - Application: name, version, environment
    - Logging: level, format and optional log file
    - Execution: shells, container runtime executable, parallelism
"""

from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Attributes:
        APP_NAME: Application name identifier
        APP_VERSION: Current application version
        ENVIRONMENT: Deployment environment (development/testing/production)
        DEBUG: Enable debug mode with rich console logging

        LOG_LEVEL: Logging level (DEBUG/INFO/WARNING/ERROR/CRITICAL)
        LOG_FORMAT: Log format (json/text)
        LOG_FILE_PATH: Path for log file output (optional)

        SHELL: Shell used to run script tasks on the host
        CONTAINER_SHELL: Shell used to run scripts inside containers
        DOCKER_EXECUTABLE: Container runtime command line client
        DOCKER_CHECK_TIMEOUT: Seconds to wait for the runtime check
        MAX_PARALLEL_TASKS: Upper bound of concurrently running tasks
            inside one parallel task group

    Example:
        >>> settings = Settings(MAX_PARALLEL_TASKS=2)
        >>> print(settings.MAX_PARALLEL_TASKS)
        2
    """

    # Application
    APP_NAME: str = "Hyperion"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "production"
    DEBUG: bool = False

    # Logging Configuration
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"
    LOG_FILE_PATH: Optional[str] = None

    # Execution Configuration
    SHELL: str = "bash"
    CONTAINER_SHELL: str = "/bin/sh"
    DOCKER_EXECUTABLE: str = "docker"
    DOCKER_CHECK_TIMEOUT: float = 10.0
    MAX_PARALLEL_TASKS: int = 8

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Validate logging level is a supported value.

        Args:
            v (str): The log level value to validate

        Returns:
            str: The validated and normalized log level

        Raises:
            ValueError: If log level is not supported
        """
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of: {valid_levels}")
        return v.upper()

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format is either json or text"""
        if v.lower() not in ("json", "text"):
            raise ValueError("LOG_FORMAT must be one of: ['json', 'text']")
        return v.lower()

    @field_validator("MAX_PARALLEL_TASKS")
    @classmethod
    def validate_max_parallel_tasks(cls, v: int) -> int:
        """Validate that at least one task may run at a time"""
        if v < 1:
            raise ValueError("MAX_PARALLEL_TASKS must be at least 1")
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="HYPERION_",
        case_sensitive=True,
        extra="ignore",
    )


def get_settings() -> Settings:
    """Get application settings instance"""
    return Settings()


settings = Settings()
