"""
Hyperion - Document driven task pipelines

Hyperion reads a YAML or JSON document describing groups of tasks (shell
scripts, commands inside docker containers, docker image builds) together
with shared model data, validates the document and runs the tasks. Tasks
pass results to later tasks through named variables, and runs can be
limited to tasks carrying given tags.

Key Features:
    - Closed schema validation of every document node
    - Sequential and parallel task groups
    - Variables referenced in task code with Jinja2 templates
    - Model attributes shared by all tasks of a document
    - Tag based selection of the tasks to run
    - Structured logging and environment based settings

Modules:
    core: Configuration, logging and exceptions
    data: Attributes and variables
    reader: Document loading and schema validated readers
    components: Document, task groups and tasks
    execution: Templating, process running and capability checks
    cli: Command-line interface

Example:
    >>> from hyperion import DocumentReader
    >>> document = DocumentReader("pipeline.yml").read()
    >>> document.run(tags=["build"])
    True
"""

__version__ = "0.1.0"
__description__ = (
    "Task pipeline engine running groups of script and docker tasks "
    "described in YAML or JSON documents."
)

from hyperion.components.document import Document
from hyperion.core.config.settings import Settings
from hyperion.core.logging.logger import get_logger
from hyperion.reader.document_reader import DocumentReader

__all__ = [
    "Document",
    "DocumentReader",
    "Settings",
    "get_logger",
]
