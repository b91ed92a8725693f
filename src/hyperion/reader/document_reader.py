"""
Reader turning a pipeline document file into a Document.

Document Structure:
    model (optional): Mapping of attributes available to all tasks
    taskgroups (required): List of task groups, each with a title, an
        optional ``parallel`` flag and a list of tasks

Example:
    >>> document = DocumentReader("pipeline.yml").read()
    >>> [group.title for group in document.task_groups]
    ['build', 'test']
"""

from pathlib import Path
from typing import Any, Dict, Union

from hyperion.components.document import Document
from hyperion.reader.base import NodeReader
from hyperion.reader.fields import DocumentReaderFields as Fields
from hyperion.reader.loader import load_document_tree
from hyperion.reader.matcher import FieldSchema
from hyperion.reader.model_reader import ModelReader
from hyperion.reader.task_group_reader import TaskGroupReader

DOCUMENT_SCHEMA = (
    FieldSchema()
    .require_exactly_once(Fields.TASKGROUPS.value)
    .allow(Fields.MODEL.value)
)


class DocumentReader(NodeReader):
    """
    Reads a complete document.

    Any problem with the document raises a DocumentFormatError before a
    single task ran.

    Args:
        path: Path of a YAML or JSON document
    """

    node_kind = "document"

    def __init__(self, path: Union[str, Path]):
        super().__init__()
        self.path = Path(path)

    def read(self, node: Any = None) -> Document:
        """
        Read the document.

        Args:
            node: Already loaded document tree; the file is loaded when
                omitted

        Returns:
            Document: The pipeline described by the document

        Raises:
            DocumentFormatError: If the document is not valid
        """
        tree: Dict[str, Any] = (
            load_document_tree(self.path) if node is None else node
        )
        tree = self.require_mapping(tree)
        document = Document()
        DOCUMENT_SCHEMA.validate(sorted(tree), self.node_kind)

        if Fields.MODEL.value in tree:
            ModelReader(document.model).read(tree[Fields.MODEL.value])

        task_groups = self.require_list(
            tree[Fields.TASKGROUPS.value], Fields.TASKGROUPS.value
        )
        for task_group_node in task_groups:
            TaskGroupReader(document).read(task_group_node)

        self.logger.info(
            "Read document",
            path=str(self.path),
            task_groups=len(document.task_groups),
        )
        return document
