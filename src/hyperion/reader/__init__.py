"""
Hyperion Reader Module - Schema validated document reading.

Turns a YAML or JSON pipeline document into the in-memory pipeline
objects. Every node kind has its own reader which validates the field
names of the node with a FieldSchema before it builds anything, so typos
in a document are reported as errors instead of being ignored.

Components:
    - loader: Loads document files into a generic node tree
    - matcher: FieldSchema, the closed required/allowed field contract
    - document_reader: Entry point, DocumentReader(path).read()
    - task_group_reader, task_readers: Task groups and task kinds
    - model_reader, variable_reader, tags_reader: Nested nodes

Example:
    >>> from hyperion.reader import DocumentReader
    >>> document = DocumentReader("pipeline.yml").read()
    >>> document.run()
"""

from .base import NodeReader
from .document_reader import DocumentReader
from .fields import DocumentReaderFields, TaskType
from .loader import load_document_tree
from .matcher import FieldSchema
from .model_reader import AttributeMapReader, ModelReader
from .tags_reader import TagsReader
from .task_group_reader import TaskGroupReader
from .task_readers import (
    BaseTaskReader,
    DockerContainerTaskReader,
    DockerImageTaskReader,
    DockerTaskReader,
    ScriptTaskReader,
    TaskReaderFactory,
)
from .variable_reader import VariableReader

__all__ = [
    "DocumentReader",
    "DocumentReaderFields",
    "TaskType",
    "FieldSchema",
    "NodeReader",
    "load_document_tree",
    "AttributeMapReader",
    "ModelReader",
    "VariableReader",
    "TagsReader",
    "TaskGroupReader",
    "BaseTaskReader",
    "ScriptTaskReader",
    "DockerTaskReader",
    "DockerContainerTaskReader",
    "DockerImageTaskReader",
    "TaskReaderFactory",
]
