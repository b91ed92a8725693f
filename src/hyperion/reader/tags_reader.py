"""
Reader for the ``tags`` field of a task.
"""

from typing import Any

from hyperion.components.tasks.base import AbstractTask
from hyperion.reader.base import NodeReader
from hyperion.reader.fields import DocumentReaderFields as Fields


class TagsReader(NodeReader):
    """Adds every string of a list node as tag of the task"""

    node_kind = "task"

    def __init__(self, task: AbstractTask):
        super().__init__()
        self.task = task

    def read(self, node: Any) -> None:
        for item in self.require_list(node, Fields.TAGS.value):
            self.task.add_tag(self.require_text(item, Fields.TAGS.value))
