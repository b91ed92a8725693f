"""
Reader for one entry of the ``taskgroups`` list.

    taskgroups:
      - title: build
        parallel: false
        tasks:
          - code: make all
"""

from typing import Any

from hyperion.components.document import Document
from hyperion.components.task_group import TaskGroup
from hyperion.core.exceptions.custom_exceptions import DocumentFormatError
from hyperion.reader.base import NodeReader
from hyperion.reader.fields import DocumentReaderFields as Fields
from hyperion.reader.matcher import FieldSchema
from hyperion.reader.task_readers import TaskReaderFactory

TASK_GROUP_SCHEMA = (
    FieldSchema()
    .require_exactly_once(Fields.TITLE.value)
    .require_exactly_once(Fields.TASKS.value)
    .allow(Fields.PARALLEL.value)
)


class TaskGroupReader(NodeReader):
    """Reads a task group with its tasks and adds it to the document"""

    node_kind = "task group"

    def __init__(self, document: Document):
        super().__init__()
        self.document = document

    def read(self, node: Any) -> None:
        node = self.require_mapping(node)
        TASK_GROUP_SCHEMA.validate(sorted(node), self.node_kind)

        title = self.require_text(node[Fields.TITLE.value], Fields.TITLE.value)
        if not title.strip():
            raise DocumentFormatError(
                "The task group title must not be empty!",
                error_code="EMPTY_TASK_GROUP_TITLE",
            )

        parallel = False
        if Fields.PARALLEL.value in node:
            parallel = self.require_bool(
                node[Fields.PARALLEL.value], Fields.PARALLEL.value
            )

        task_group = TaskGroup(title, parallel)
        tasks = self.require_list(node[Fields.TASKS.value], Fields.TASKS.value)
        for task_node in tasks:
            TaskReaderFactory.for_node(task_node, task_group).read(task_node)

        self.document.add(task_group)
        self.logger.debug(
            "Read task group",
            group=title,
            parallel=parallel,
            tasks=len(task_group.tasks),
        )
