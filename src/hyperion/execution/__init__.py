"""
Execution collaborators used by the tasks: variable substitution, process
running and capability checks.
"""

from .capabilities import has_container_runtime, require_container_runtime
from .process import LineCallback, ProcessResult, ProcessRunner
from .templating import render_code

__all__ = [
    "ProcessRunner",
    "ProcessResult",
    "LineCallback",
    "render_code",
    "has_container_runtime",
    "require_container_runtime",
]
