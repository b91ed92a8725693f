"""
Custom exception hierarchy for Hyperion error handling.

This module defines the structured exceptions raised while reading and
running pipeline documents. Each exception carries a human-readable
message, a machine-readable error code and a details dictionary with the
context needed to fix the document or the environment.

Exception Hierarchy:
    HyperionError (base)
    ├── ConfigurationError: Settings and environment problems
    │   └── DocumentFormatError: Malformed pipeline documents (read phase)
    ├── CapabilityError: Required external capability is missing
    ├── ResolutionError: Unresolved variable reference in task code
    ├── ExecutionError: A task process could not be started
    └── PipelineError: Generic pipeline run failures

Propagation:
    - Read-phase errors (DocumentFormatError) abort the whole document
      before any task runs.
    - Run-phase errors (ResolutionError, ExecutionError) are captured in
      the failing task's TaskResult and never escape the task group.

Example:
    >>> raise DocumentFormatError(
    ...     "The task fields are not correct!",
    ...     error_code="TASK_FIELDS_MISMATCH",
    ...     details={"unknown": ["cod"], "missing": ["code"]},
    ... )
"""

from typing import Any, Dict, Optional


class HyperionError(Exception):
    """
    Base exception class for all Hyperion errors.

    Attributes:
        message (str): Human-readable error description
        error_code (str): Machine-readable error identifier, defaults to
            the class name
        details (Dict[str, Any]): Additional contextual information

    Example:
        >>> raise HyperionError(
        ...     "Pipeline document could not be processed",
        ...     error_code="DOCUMENT_ERROR",
        ...     details={"path": "pipeline.yml"},
        ... )
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class ConfigurationError(HyperionError):
    """
    Raised when settings or the runtime environment are invalid.

    Common scenarios:
        - Invalid environment variable values
        - Unsupported document file format
        - Document file missing or unreadable
    """

    pass


class DocumentFormatError(ConfigurationError):
    """
    Raised when a pipeline document does not have the expected shape.

    Covers every read-phase failure:
        - unknown, missing or duplicate fields on a node
        - values that cannot be converted to the expected type
        - unknown task types
        - task kinds whose required capability is unavailable

    Example:
        >>> raise DocumentFormatError(
        ...     "The task group fields are not correct!",
        ...     error_code="TASK_GROUP_FIELDS_MISMATCH",
        ...     details={"unknown": ["paralel"], "missing": []},
        ... )
    """

    pass


class CapabilityError(HyperionError):
    """
    Raised when an external capability such as a container runtime is
    required but cannot be reached.
    """

    pass


class ResolutionError(HyperionError):
    """
    Raised when task code references a variable that is neither in the
    task group's variables nor in the model, or when the code is not a
    valid template.
    """

    pass


class ExecutionError(HyperionError):
    """Raised when a task process cannot be started"""

    pass


class PipelineError(HyperionError):
    """Raised when pipeline execution fails"""

    pass
