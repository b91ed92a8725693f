"""
Base class for all task kinds.

A task is a piece of code, given inline or as the path of an existing file,
that is rendered against the current variables and executed by a concrete
task kind. Every task owns a Variable that receives its output and may
carry tags used to select tasks for a run.

Task Lifecycle:
    1. Constructed by a task reader while the document is read
    2. Run exactly once per pipeline run by its task group
    3. Only the variable's value changes, once per run

Run Algorithm (template method):
    1. Load the code (file content when the code is a path to a file)
    2. Substitute variable references (group variables, then model)
    3. Execute with the concrete kind's execute()
    4. Extract the variable value from the output
    5. Return a TaskResult; resolution and start-up errors become a
       failed result instead of an exception

Example:
    >>> class EchoTask(AbstractTask):
    ...     kind = "echo"
    ...     async def execute(self, code, parameters):
    ...         return await parameters.runner.run(["echo", code])
"""

import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import ClassVar, Dict, List, Mapping, Sequence, Tuple

from hyperion.components.parameters import TaskParameters, TaskResult
from hyperion.core.exceptions.custom_exceptions import ExecutionError, ResolutionError
from hyperion.core.logging.logger import get_logger
from hyperion.data.variable import Variable
from hyperion.execution.process import ProcessResult
from hyperion.execution.templating import render_code

_ENV_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def exported_environment(variables: Mapping[str, str]) -> Dict[str, str]:
    """Variables whose names are usable as environment variable names"""
    return {
        name: value for name, value in variables.items() if _ENV_NAME.match(name)
    }


class AbstractTask(ABC):
    """
    Abstract base class for script, docker container and docker image
    tasks.

    Attributes:
        title (str): Task title used in logs and reports
        code (str): Inline code or path of a file with the code
        variable (Variable): Result slot of the task
        kind (str): Discriminator used in documents ("type" field)
    """

    kind: ClassVar[str] = ""

    def __init__(self, title: str, code: str):
        self.title = title
        self.code = code
        self.variable = Variable()
        self._tags: List[str] = []
        self.logger = get_logger(f"{__name__}.{self.__class__.__name__}")

    @property
    def tags(self) -> Tuple[str, ...]:
        return tuple(self._tags)

    def add_tag(self, tag: str) -> None:
        """Add a tag unless the task already has it"""
        if tag not in self._tags:
            self._tags.append(tag)

    def is_selected(self, tag_filter: Sequence[str]) -> bool:
        """
        Whether the task runs for the given tag filter.

        An empty filter selects every task. A non-empty filter selects the
        tasks sharing at least one tag with it; tasks without tags are
        never selected by a non-empty filter.
        """
        if not tag_filter:
            return True
        return any(tag in tag_filter for tag in self._tags)

    def is_regular_file(self) -> bool:
        """Whether the code is the path of an existing regular file"""
        try:
            return Path(self.code).is_file()
        except (OSError, ValueError):
            return False

    def load_code(self) -> str:
        """
        Provide the code to render.

        Raises:
            ExecutionError: If the code file exists but cannot be read
        """
        if not self.is_regular_file():
            return self.code
        try:
            return Path(self.code).read_text()
        except OSError as e:
            raise ExecutionError(
                f"Failed to read task code from {self.code}: {e}",
                error_code="CODE_READ_ERROR",
                details={"path": self.code},
            ) from e

    async def run(self, parameters: TaskParameters) -> TaskResult:
        """
        Run the task once.

        Args:
            parameters: Model, group variables and execution collaborators

        Returns:
            TaskResult: Snapshot of the variable and the success flag
        """
        try:
            code = render_code(
                self.load_code(),
                parameters.variable_values(),
                parameters.model.to_dict(),
            )
            process_result = await self.execute(code, parameters)
        except (ResolutionError, ExecutionError) as e:
            self.logger.error(
                "Task failed before completion",
                task=self.title,
                error_code=e.error_code,
                error=e.message,
            )
            self.variable.value = ""
            return TaskResult(
                variable=self.variable.snapshot(), success=False, error=e.message
            )

        self.variable.value = self.variable.extract(process_result.lines)
        if not process_result.success:
            self.logger.error(
                "Task exited with failure",
                task=self.title,
                exit_code=process_result.exit_code,
            )
        return TaskResult(
            variable=self.variable.snapshot(),
            success=process_result.success,
            output=tuple(process_result.lines),
        )

    @abstractmethod
    async def execute(self, code: str, parameters: TaskParameters) -> ProcessResult:
        """
        Execute rendered code.

        This method must be implemented by every task kind.

        Args:
            code (str): Code with all variable references substituted
            parameters (TaskParameters): Runner, output sink and variables

        Returns:
            ProcessResult: Exit code and output lines

        Raises:
            ExecutionError: If the process cannot be started
        """
        pass

    def _identity(self) -> tuple:
        return (
            self.kind,
            self.title,
            self.code,
            self.variable.name,
            self.variable.regex,
            self.variable.group,
            self.tags,
        )

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, AbstractTask) or type(self) is not type(other):
            return NotImplemented
        return self._identity() == other._identity()

    def __repr__(self) -> str:
        name = self.__class__.__name__
        return f"{name}(title={self.title!r}, tags={list(self.tags)!r})"
