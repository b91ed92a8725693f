"""
Hyperion Components - In-memory pipeline object model.

A document is made of a model (document-wide attributes) and an ordered
list of task groups. Each task group owns its tasks and the variables the
tasks produce while the group runs.

Components:
    - model: Document-wide attributes
    - parameters: Per-task input (TaskParameters) and output (TaskResult)
    - tasks: Script, docker container and docker image tasks
    - task_group: Sequential and parallel execution of tasks
    - document: Ordered execution of task groups
"""

from .document import Document
from .model import Model
from .parameters import OutputSink, TaskParameters, TaskResult, log_output_line
from .task_group import TaskGroup
from .tasks import (
    AbstractTask,
    DockerContainerTask,
    DockerImageTask,
    DockerTask,
    ScriptTask,
)

__all__ = [
    "Document",
    "Model",
    "TaskGroup",
    "TaskParameters",
    "TaskResult",
    "OutputSink",
    "log_output_line",
    "AbstractTask",
    "ScriptTask",
    "DockerTask",
    "DockerContainerTask",
    "DockerImageTask",
]
