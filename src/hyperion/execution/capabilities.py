"""
Checks for external capabilities required by some task kinds.

Docker container and docker image tasks can only be read when a container
runtime answers ``docker info``. The check result is cached for the
lifetime of the process; ``reset_capabilities()`` clears it.
"""

import shutil
import subprocess
from functools import lru_cache

from hyperion.core.config.settings import settings
from hyperion.core.exceptions.custom_exceptions import CapabilityError
from hyperion.core.logging.logger import get_logger

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def has_container_runtime() -> bool:
    """
    Check whether the container runtime is installed and reachable.

    Returns:
        bool: True when ``DOCKER_EXECUTABLE info`` exits with 0 in time
    """
    executable = shutil.which(settings.DOCKER_EXECUTABLE)
    if executable is None:
        logger.debug(
            "Container runtime not found", executable=settings.DOCKER_EXECUTABLE
        )
        return False

    try:
        completed = subprocess.run(
            [executable, "info"],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            timeout=settings.DOCKER_CHECK_TIMEOUT,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.debug("Container runtime check failed", error=str(e))
        return False

    return completed.returncode == 0


def require_container_runtime() -> None:
    """
    Raise when no container runtime is reachable.

    Raises:
        CapabilityError: If has_container_runtime() is False
    """
    if not has_container_runtime():
        raise CapabilityError(
            "Docker seems to be missing; cannot process document!",
            error_code="CONTAINER_RUNTIME_MISSING",
            details={"executable": settings.DOCKER_EXECUTABLE},
        )


def reset_capabilities() -> None:
    """Forget cached check results"""
    has_container_runtime.cache_clear()
