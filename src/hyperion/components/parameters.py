"""
Per-invocation input and output of a task run.

Classes:
    TaskParameters: Read-only view on the model and the group's variables
        plus the collaborators a task needs to execute
    TaskResult: Variable and success flag produced by one task run
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional, Tuple

from hyperion.components.model import Model
from hyperion.core.logging.logger import get_logger
from hyperion.data.variable import Variable
from hyperion.execution.process import ProcessRunner

OutputSink = Callable[[str], None]

_output_logger = get_logger("hyperion.output")


def log_output_line(line: str) -> None:
    """Default output sink writing task output to the log"""
    _output_logger.info(line)


@dataclass(frozen=True)
class TaskParameters:
    """
    Everything a task can see while it runs.

    Attributes:
        model (Model): Document model (read-only during the run)
        variables (Mapping[str, Variable]): Live read-only view of the task
            group's variables
        runner (ProcessRunner): Process execution collaborator
        sink (OutputSink): Receives every output line of the task
    """

    model: Model
    variables: Mapping[str, Variable]
    runner: ProcessRunner = field(default_factory=ProcessRunner)
    sink: OutputSink = log_output_line

    @classmethod
    def of(
        cls,
        model: Model,
        variables: Mapping[str, Variable],
        *,
        runner: Optional[ProcessRunner] = None,
        sink: Optional[OutputSink] = None,
    ) -> "TaskParameters":
        """Build parameters wrapping the variables in a read-only view"""
        if not isinstance(variables, MappingProxyType):
            variables = MappingProxyType(variables)
        return cls(
            model=model,
            variables=variables,
            runner=runner or ProcessRunner(),
            sink=sink or log_output_line,
        )

    def variable_values(self) -> Dict[str, str]:
        """Current group variable values by name"""
        return {name: variable.value for name, variable in self.variables.items()}


@dataclass(frozen=True)
class TaskResult:
    """
    Result of one task run.

    Attributes:
        variable (Variable): Snapshot of the task's variable after the run
        success (bool): True when the task's process exited with 0
        output (Tuple[str, ...]): Output lines of the task
        error (Optional[str]): Reason when the task could not run at all
    """

    variable: Variable
    success: bool
    output: Tuple[str, ...] = ()
    error: Optional[str] = None
