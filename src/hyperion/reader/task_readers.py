"""
Readers for the task nodes of a task group.

A task node is a mapping whose ``type`` field selects the reader (a
missing ``type`` means ``script``). Every reader shares the common task
fields and adds its own fields to the schema:

    script            code (required); title, type, variable, tags
    docker-container  common fields plus image-name (required),
                      image-version and platform
    docker-image      same fields as docker-container

Docker task readers check that a container runtime is reachable before the
node is validated, so a document with docker tasks fails while it is read
and not in the middle of a run.

Registry:
    TaskReaderFactory maps type values to reader classes. New task kinds
    register their reader at import time:

    >>> TaskReaderFactory.register("script", ScriptTaskReader)
    >>> reader = TaskReaderFactory.create("script", task_group)
    >>> reader.read({"code": "echo hello"})
"""

from typing import Any, Callable, ClassVar, Dict, List, Optional, Type

from hyperion.components.task_group import TaskGroup
from hyperion.components.tasks import (
    AbstractTask,
    DockerContainerTask,
    DockerImageTask,
    DockerTask,
    ScriptTask,
)
from hyperion.core.exceptions.custom_exceptions import (
    CapabilityError,
    DocumentFormatError,
)
from hyperion.execution.capabilities import require_container_runtime
from hyperion.reader.base import NodeReader
from hyperion.reader.fields import DocumentReaderFields as Fields
from hyperion.reader.fields import TaskType
from hyperion.reader.matcher import FieldSchema
from hyperion.reader.tags_reader import TagsReader
from hyperion.reader.variable_reader import VariableReader

TaskCreator = Callable[[str, str], AbstractTask]
CapabilityCheck = Callable[[], None]

BASE_TASK_SCHEMA = (
    FieldSchema()
    .require_exactly_once(Fields.CODE.value)
    .allow(Fields.TITLE.value)
    .allow(Fields.TYPE.value)
    .allow(Fields.VARIABLE.value)
    .allow(Fields.TAGS.value)
)

DOCKER_TASK_SCHEMA = (
    BASE_TASK_SCHEMA.require_exactly_once(Fields.IMAGE_NAME.value)
    .allow(Fields.IMAGE_VERSION.value)
    .allow(Fields.PLATFORM.value)
)


class BaseTaskReader(NodeReader):
    """
    Reads the fields shared by all task kinds.

    The task object is built by the task creator, a callable taking the
    title and the code. It defaults to the reader's task class.

    Attributes:
        task_group (TaskGroup): Group receiving the task
        task_creator (TaskCreator): Builds the task object
    """

    node_kind = "task"
    task_class: ClassVar[Type[AbstractTask]] = ScriptTask
    schema: ClassVar[FieldSchema] = BASE_TASK_SCHEMA

    def __init__(
        self, task_group: TaskGroup, task_creator: Optional[TaskCreator] = None
    ):
        super().__init__()
        self.task_group = task_group
        self.task_creator = task_creator or self.task_class

    def check_capabilities(self) -> None:
        """Hook for readers whose task kind needs an external capability"""

    def read(self, node: Any) -> None:
        self.check_capabilities()
        node = self.require_mapping(node)
        self.schema.validate(sorted(node), self.node_kind)

        title = ""
        if Fields.TITLE.value in node:
            title = self.require_text(node[Fields.TITLE.value], Fields.TITLE.value)
        code = self.require_text(node[Fields.CODE.value], Fields.CODE.value)

        task = self.task_creator(title, code)
        self.read_specific(task, node)

        if Fields.VARIABLE.value in node:
            VariableReader(task.variable).read(node[Fields.VARIABLE.value])
        if Fields.TAGS.value in node:
            TagsReader(task).read(node[Fields.TAGS.value])

        self.task_group.add(task)
        self.logger.debug(
            "Read task", group=self.task_group.title, task=title, kind=task.kind
        )

    def read_specific(self, task: AbstractTask, node: Dict[str, Any]) -> None:
        """Hook for the fields of a concrete task kind"""


class ScriptTaskReader(BaseTaskReader):
    """Reads a script task"""

    task_class = ScriptTask


class DockerTaskReader(BaseTaskReader):
    """
    Reads the fields shared by the docker task kinds.

    Args:
        task_group: Group receiving the task
        task_creator: Builds the task object
        capability_check: Raises CapabilityError when no container runtime
            is reachable (default: require_container_runtime)
    """

    schema = DOCKER_TASK_SCHEMA

    def __init__(
        self,
        task_group: TaskGroup,
        task_creator: Optional[TaskCreator] = None,
        capability_check: Optional[CapabilityCheck] = None,
    ):
        super().__init__(task_group, task_creator)
        self.capability_check = capability_check or require_container_runtime

    def check_capabilities(self) -> None:
        try:
            self.capability_check()
        except CapabilityError as e:
            raise DocumentFormatError(
                e.message, error_code=e.error_code, details=e.details
            ) from e

    def read_specific(self, task: AbstractTask, node: Dict[str, Any]) -> None:
        if not isinstance(task, DockerTask):
            raise TypeError(
                f"{self.__class__.__name__} creates docker tasks, "
                f"got {type(task).__name__}"
            )
        task.image_name = self.require_text(
            node[Fields.IMAGE_NAME.value], Fields.IMAGE_NAME.value
        )
        if Fields.IMAGE_VERSION.value in node:
            task.image_version = self.require_text(
                node[Fields.IMAGE_VERSION.value], Fields.IMAGE_VERSION.value
            )
        if Fields.PLATFORM.value in node:
            task.platform = self.require_text(
                node[Fields.PLATFORM.value], Fields.PLATFORM.value
            )


class DockerContainerTaskReader(DockerTaskReader):
    """Reads a task running its code inside a docker container"""

    node_kind = "Docker container task"
    task_class = DockerContainerTask


class DockerImageTaskReader(DockerTaskReader):
    """Reads a task building a docker image"""

    node_kind = "Docker image task"
    task_class = DockerImageTask


class TaskReaderFactory:
    """
    Registry of task readers by task type.

    Usage Patterns:
        Registration (at module import):
        >>> TaskReaderFactory.register("script", ScriptTaskReader)

        Creation:
        >>> reader = TaskReaderFactory.create("script", task_group)

        Discovery:
        >>> TaskReaderFactory.list_types()
        ['script', 'docker-container', 'docker-image']
    """

    _readers: Dict[str, Type[BaseTaskReader]] = {}

    @classmethod
    def register(cls, task_type: str, reader_class: Type[BaseTaskReader]):
        """
        Register a reader class for a task type.

        Duplicate types overwrite previous registrations.
        """
        cls._readers[task_type] = reader_class

    @classmethod
    def create(cls, task_type: str, task_group: TaskGroup) -> BaseTaskReader:
        """
        Create the reader for a task type.

        Raises:
            DocumentFormatError: If the task type is unknown
        """
        if task_type not in cls._readers:
            raise DocumentFormatError(
                f"Unknown task type: {task_type}",
                error_code="UNKNOWN_TASK_TYPE",
                details={"type": task_type, "known": cls.list_types()},
            )
        return cls._readers[task_type](task_group)

    @classmethod
    def for_node(cls, node: Any, task_group: TaskGroup) -> BaseTaskReader:
        """Create the reader selected by the ``type`` field of a task node"""
        task_type = TaskType.SCRIPT.value
        if isinstance(node, dict) and Fields.TYPE.value in node:
            task_type = node[Fields.TYPE.value]
            if not isinstance(task_type, str):
                raise DocumentFormatError(
                    "The task type must be a string!",
                    error_code="INVALID_FIELD_TYPE",
                    details={"field": Fields.TYPE.value},
                )
        return cls.create(task_type, task_group)

    @classmethod
    def list_types(cls) -> List[str]:
        return list(cls._readers.keys())


TaskReaderFactory.register(TaskType.SCRIPT.value, ScriptTaskReader)
TaskReaderFactory.register(TaskType.DOCKER_CONTAINER.value, DockerContainerTaskReader)
TaskReaderFactory.register(TaskType.DOCKER_IMAGE.value, DockerImageTaskReader)
