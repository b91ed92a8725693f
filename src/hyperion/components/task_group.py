"""
Task groups and their execution.

A task group is an ordered list of tasks that run either one after another
or concurrently. The group owns a variable map that collects each task's
result variable as the task completes; the map is shared with every task
of the group through its TaskParameters.

Scheduling:
    Sequential: Tasks run in declaration order. Every task sees the
        variables of all tasks that ran before it.
    Parallel: Tasks are dispatched together with asyncio.gather, bounded
        by settings.MAX_PARALLEL_TASKS. Variable writes are serialized by a
        lock. Tasks of a parallel group must not depend on each other's
        variables.

Outcome:
    The group succeeds when every executed task succeeded. Tasks skipped by
    the tag filter do not count, so a group whose tasks were all skipped
    succeeds. A failing task never stops its siblings, and a parallel group
    only reports after all of its tasks finished. A task raising an
    unexpected error is logged and counted as failed in both modes.

Example:
    >>> group = TaskGroup("build", parallel=False)
    >>> group.add(ScriptTask("hello", "echo hello world"))
    >>> asyncio.run(group.run(Model()))
    True
"""

import asyncio
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from hyperion.components.model import Model
from hyperion.components.parameters import OutputSink, TaskParameters, TaskResult
from hyperion.components.tasks.base import AbstractTask
from hyperion.core.config.settings import settings
from hyperion.core.logging.logger import bind_run_context
from hyperion.data.variable import Variable
from hyperion.execution.process import ProcessRunner


class TaskGroup:
    """
    Named, ordered list of tasks with a scheduling mode.

    Attributes:
        title (str): Group title
        parallel (bool): Run the tasks concurrently (fixed at construction)
        tasks (Tuple[AbstractTask, ...]): Tasks in declaration order
        variables (Mapping[str, Variable]): Read-only view of the results
    """

    def __init__(self, title: str, parallel: bool = False):
        self.title = title
        self._parallel = parallel
        self._tasks: List[AbstractTask] = []
        self._variables: Dict[str, Variable] = {}

    @property
    def parallel(self) -> bool:
        return self._parallel

    @property
    def tasks(self) -> Tuple[AbstractTask, ...]:
        return tuple(self._tasks)

    @property
    def variables(self) -> Mapping[str, Variable]:
        return MappingProxyType(self._variables)

    def add(self, task: AbstractTask) -> None:
        self._tasks.append(task)

    async def run(
        self,
        model: Model,
        tag_filter: Sequence[str] = (),
        *,
        runner: Optional[ProcessRunner] = None,
        sink: Optional[OutputSink] = None,
    ) -> bool:
        """
        Run the selected tasks of the group.

        Args:
            model: Document model used to resolve variable references
            tag_filter: Tags selecting the tasks to run; empty runs all
            runner: Process execution collaborator (default ProcessRunner)
            sink: Receives task output lines (default: log)

        Returns:
            bool: True when every executed task succeeded
        """
        logger = bind_run_context(group=self.title)
        self._variables.clear()
        runner = runner or ProcessRunner()

        selected = []
        for task in self._tasks:
            if task.is_selected(tag_filter):
                selected.append(task)
            else:
                logger.debug("Skipping task not matching tags", task=task.title)

        logger.info(
            "Running task group",
            parallel=self._parallel,
            tasks=len(selected),
            skipped=len(self._tasks) - len(selected),
        )

        lock = asyncio.Lock()
        if self._parallel:
            success = await self._run_parallel(
                selected, model, runner, sink, lock, logger
            )
        else:
            success = await self._run_sequential(
                selected, model, runner, sink, lock, logger
            )

        logger.info("Task group finished", success=success)
        return success

    async def _run_sequential(self, tasks, model, runner, sink, lock, logger) -> bool:
        success = True
        for task in tasks:
            try:
                result = await self._run_task(task, model, runner, sink, lock, logger)
            except Exception as e:
                logger.error(
                    "Task raised an unexpected error", task=task.title, error=str(e)
                )
                success = False
                continue
            if not result.success:
                success = False
        return success

    async def _run_parallel(self, tasks, model, runner, sink, lock, logger) -> bool:
        semaphore = asyncio.Semaphore(settings.MAX_PARALLEL_TASKS)

        async def run_bounded(task: AbstractTask) -> TaskResult:
            async with semaphore:
                return await self._run_task(task, model, runner, sink, lock, logger)

        results = await asyncio.gather(
            *(run_bounded(task) for task in tasks), return_exceptions=True
        )

        success = True
        for task, result in zip(tasks, results):
            if isinstance(result, BaseException):
                logger.error(
                    "Task raised an unexpected error",
                    task=task.title,
                    error=str(result),
                )
                success = False
            elif not result.success:
                success = False
        return success

    async def _run_task(self, task, model, runner, sink, lock, logger) -> TaskResult:
        parameters = TaskParameters.of(
            model, self._variables, runner=runner, sink=sink
        )
        logger.debug("Running task", task=task.title, kind=task.kind)
        result = await task.run(parameters)
        await self._store(result, lock, logger)
        logger.info("Task finished", task=task.title, success=result.success)
        return result

    async def _store(self, result: TaskResult, lock: asyncio.Lock, logger) -> None:
        async with lock:
            self._variables[result.variable.name] = result.variable
        logger.info(f"set variable {result.variable.name}={result.variable.value}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TaskGroup):
            return NotImplemented
        return (
            self.title == other.title
            and self._parallel == other._parallel
            and self._tasks == other._tasks
        )

    def __repr__(self) -> str:
        return (
            f"TaskGroup(title={self.title!r}, parallel={self._parallel!r}, "
            f"tasks={len(self._tasks)})"
        )
