"""Business logic for Tasks"""

import logging
from typing import Awaitable, Callable, List, Optional, TypeVar
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard import config
from taskboard.features.tasks.domain import (
    Task,
    TaskCreate,
    TaskNotFoundError,
    TaskStats,
    TaskStatus,
    TaskUpdate,
)
from taskboard.features.tasks.repository import TaskRepository

module_logger = logging.getLogger(__name__)

T = TypeVar("T")


async def run_action(
    name: str,
    action: Callable[[], Awaitable[T]],
    logger: logging.Logger,
    debug: bool = False,
) -> T:
    """
    Run one service action with start/success/failure logging.

    Start and success lines are only emitted when ``debug`` is on; failures
    are always logged and then re-raised unchanged.
    """
    if debug:
        logger.debug(f"Action started: {name}")
    try:
        result = await action()
    except TaskNotFoundError as e:
        logger.warning(f"Action failed: {name}: {e}")
        raise
    except Exception as e:
        logger.error(f"Action failed: {name}: {type(e).__name__}: {e}", exc_info=True)
        raise
    if debug:
        logger.debug(f"Action completed successfully: {name} ({type(result).__name__})")
    return result


class TaskService:
    """Service layer for task business logic"""

    def __init__(
        self,
        db: AsyncSession,
        logger: Optional[logging.Logger] = None,
        debug: Optional[bool] = None,
    ):
        self.repository = TaskRepository(db)
        self.logger = logger or module_logger
        self.debug = config.APP_DEBUG if debug is None else debug

    async def _run(self, name: str, action: Callable[[], Awaitable[T]]) -> T:
        return await run_action(name, action, self.logger, self.debug)

    async def _get_or_raise(self, task_id: int) -> Task:
        task = await self.repository.find_by_id(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    async def get_task(self, task_id: int) -> Task:
        """
        Get a single task by ID.

        Raises:
            TaskNotFoundError: If the task does not exist
        """
        return await self._run("GetTask", lambda: self._get_or_raise(task_id))

    async def list_tasks(
        self,
        status: Optional[TaskStatus] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Task]:
        """List tasks newest first, optionally filtered by status."""
        return await self._run(
            "ListTasks",
            lambda: self.repository.find_all(status=status, limit=limit, offset=offset),
        )

    async def create_task(self, data: TaskCreate) -> Task:
        """
        Create a new task.

        Args:
            data: Validated task fields (title and status required)

        Returns:
            The persisted task with id and timestamps
        """
        async def action() -> Task:
            task = await self.repository.create(data)
            self.logger.info(f"Created task {task.id} with status '{task.status.value}'")
            return task

        return await self._run("CreateTask", action)

    async def update_task(self, task_id: int, data: TaskUpdate) -> Task:
        """
        Apply a partial update to a task.

        Fields not set on ``data`` keep their previous value.

        Returns:
            The refreshed task

        Raises:
            TaskNotFoundError: If the task does not exist
        """
        async def action() -> Task:
            task = await self.repository.update(task_id, data)
            if task is None:
                raise TaskNotFoundError(task_id)
            self.logger.info(f"Updated task {task_id}: {sorted(data.model_fields_set)}")
            return task

        return await self._run("UpdateTask", action)

    async def delete_task(self, task_id: int) -> bool:
        """
        Permanently delete a task.

        Raises:
            TaskNotFoundError: If the task does not exist
        """
        async def action() -> bool:
            deleted = await self.repository.delete(task_id)
            if not deleted:
                raise TaskNotFoundError(task_id)
            self.logger.info(f"Deleted task {task_id}")
            return deleted

        return await self._run("DeleteTask", action)

    async def mark_completed(self, task_id: int) -> Task:
        """
        Move a task to completed. A task that is already completed is
        returned unchanged without a write.
        """
        return await self._run(
            "MarkTaskCompleted",
            lambda: self._transition(task_id, TaskStatus.COMPLETED),
        )

    async def mark_pending(self, task_id: int) -> Task:
        """
        Move a task back to pending. A task that is already pending is
        returned unchanged without a write.
        """
        return await self._run(
            "MarkTaskPending",
            lambda: self._transition(task_id, TaskStatus.PENDING),
        )

    async def _transition(self, task_id: int, target: TaskStatus) -> Task:
        task = await self._get_or_raise(task_id)
        if task.status == target:
            self.logger.debug(f"Task {task_id} already {target.value}")
            return task

        if target == TaskStatus.COMPLETED:
            updated = await self.repository.mark_completed(task_id)
        else:
            updated = await self.repository.mark_pending(task_id)

        if updated is None:
            # Deleted between the read and the write
            raise TaskNotFoundError(task_id)
        self.logger.info(f"Task {task_id} marked {target.value}")
        return updated

    async def get_stats(self) -> TaskStats:
        """
        Compute task statistics from the live collection.

        Returns:
            TaskStats with total/completed/pending counts and the completion
            percentage (0.0 when there are no tasks)
        """
        async def action() -> TaskStats:
            total_tasks = await self.repository.count()
            completed_tasks = await self.repository.count(TaskStatus.COMPLETED)
            pending_tasks = await self.repository.count(TaskStatus.PENDING)
            return TaskStats.from_counts(total_tasks, completed_tasks, pending_tasks)

        return await self._run("GetTaskStats", action)
