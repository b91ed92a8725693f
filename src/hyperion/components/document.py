"""
Pipeline document: the model plus the ordered task groups.
"""

import asyncio
from typing import List, Optional, Sequence, Tuple

from hyperion.components.model import Model
from hyperion.components.parameters import OutputSink
from hyperion.components.task_group import TaskGroup
from hyperion.core.logging.logger import get_logger
from hyperion.execution.process import ProcessRunner

logger = get_logger(__name__)


class Document:
    """
    Root of a pipeline read from a document file.

    Task groups run in declaration order. A group only starts when all
    previous groups succeeded.

    Example:
        >>> document = DocumentReader("pipeline.yml").read()
        >>> document.run(tags=["build"])
        True
    """

    def __init__(self) -> None:
        self.model = Model()
        self._task_groups: List[TaskGroup] = []

    @property
    def task_groups(self) -> Tuple[TaskGroup, ...]:
        return tuple(self._task_groups)

    def add(self, task_group: TaskGroup) -> None:
        self._task_groups.append(task_group)

    async def run_async(
        self,
        tags: Sequence[str] = (),
        *,
        runner: Optional[ProcessRunner] = None,
        sink: Optional[OutputSink] = None,
    ) -> bool:
        """
        Run all task groups, stopping after the first failed group.

        Args:
            tags: Tag filter applied to every group; empty runs all tasks
            runner: Process execution collaborator shared by all groups
            sink: Receives the output lines of every task

        Returns:
            bool: True when every group succeeded
        """
        runner = runner or ProcessRunner()
        for index, task_group in enumerate(self._task_groups):
            if not await task_group.run(self.model, tags, runner=runner, sink=sink):
                remaining = len(self._task_groups) - index - 1
                logger.error(
                    "Task group failed, stopping document",
                    group=task_group.title,
                    remaining_groups=remaining,
                )
                return False
        return True

    def run(
        self,
        tags: Sequence[str] = (),
        *,
        runner: Optional[ProcessRunner] = None,
        sink: Optional[OutputSink] = None,
    ) -> bool:
        """Synchronous wrapper around run_async()"""
        return asyncio.run(self.run_async(tags, runner=runner, sink=sink))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return (
            self.model == other.model and self._task_groups == other._task_groups
        )

    def __repr__(self) -> str:
        return f"Document(model={self.model!r}, task_groups={len(self._task_groups)})"
