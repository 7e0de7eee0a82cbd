"""SQLAlchemy repository for Tasks"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import and_, func, select

# SQLAlchemy ORM models
from taskboard.db.models.task import Task as TaskORM

# Pydantic domain models (feature-local)
from taskboard.features.tasks.domain import Task, TaskCreate, TaskStatus, TaskUpdate, ensure_utc, utc_now

logger = logging.getLogger(__name__)


class TaskRepository:
    """Repository for Task operations using SQLAlchemy"""

    def __init__(self, db: AsyncSession):
        """
        Initialize the repository with a database session.

        Args:
            db: SQLAlchemy async database session
        """
        self.db = db

    async def _get_orm(self, task_id: int) -> Optional[TaskORM]:
        return await self.db.get(TaskORM, task_id)

    async def find_by_id(self, task_id: int) -> Optional[Task]:
        """Find a single task by ID"""
        orm_task = await self._get_orm(task_id)
        if orm_task is None:
            return None
        return self._to_domain_model(orm_task)

    async def find_all(
        self,
        status: Optional[TaskStatus] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Task]:
        """
        Find tasks, newest first.

        Args:
            status: Only return tasks with this status (all statuses when None)
            limit: Maximum number of tasks to return
            offset: Number of tasks to skip

        Returns:
            List of Task domain models
        """
        stmt = select(TaskORM).order_by(TaskORM.created_at.desc(), TaskORM.id.desc())

        if status is not None:
            stmt = stmt.where(TaskORM.status == TaskStatus(status).value)

        if limit:
            stmt = stmt.limit(limit)

        if offset:
            stmt = stmt.offset(offset)

        return await self._fetch(stmt)

    async def find_overdue(self, now: Optional[datetime] = None) -> List[Task]:
        """Find pending tasks whose due date has passed"""
        now = ensure_utc(now or utc_now())
        stmt = (
            select(TaskORM)
            .where(
                and_(
                    TaskORM.status == TaskStatus.PENDING.value,
                    TaskORM.due_date.is_not(None),
                    TaskORM.due_date < now,
                )
            )
            .order_by(TaskORM.due_date.asc())
        )
        return await self._fetch(stmt)

    async def find_due_today(self, now: Optional[datetime] = None) -> List[Task]:
        """Find tasks due on the current (UTC) calendar day"""
        now = ensure_utc(now or utc_now())
        start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)
        stmt = (
            select(TaskORM)
            .where(
                and_(
                    TaskORM.due_date >= start_of_day,
                    TaskORM.due_date < start_of_day + timedelta(days=1),
                )
            )
            .order_by(TaskORM.due_date.asc())
        )
        return await self._fetch(stmt)

    async def find_due_within(self, days: int, now: Optional[datetime] = None) -> List[Task]:
        """Find tasks due between now and now + days (inclusive)"""
        now = ensure_utc(now or utc_now())
        stmt = (
            select(TaskORM)
            .where(
                and_(
                    TaskORM.due_date >= now,
                    TaskORM.due_date <= now + timedelta(days=days),
                )
            )
            .order_by(TaskORM.due_date.asc())
        )
        return await self._fetch(stmt)

    async def create(self, data: TaskCreate) -> Task:
        """Insert a new task and return it with its generated fields"""
        values = data.model_dump()
        values["status"] = TaskStatus(values["status"]).value
        orm_task = TaskORM(**values)

        self.db.add(orm_task)
        await self.db.commit()
        await self.db.refresh(orm_task)

        return self._to_domain_model(orm_task)

    async def update(self, task_id: int, data: TaskUpdate) -> Optional[Task]:
        """
        Apply a partial update to a task.

        Only fields explicitly set on ``data`` are written.

        Returns:
            The refreshed Task, or None if the task does not exist
        """
        orm_task = await self._get_orm(task_id)
        if orm_task is None:
            return None

        values = data.model_dump(exclude_unset=True)
        if not values:
            # No fields to update
            return self._to_domain_model(orm_task)

        for key, value in values.items():
            if key == "status" and value is not None:
                value = TaskStatus(value).value
            setattr(orm_task, key, value)

        await self.db.commit()
        await self.db.refresh(orm_task)

        return self._to_domain_model(orm_task)

    async def mark_completed(self, task_id: int) -> Optional[Task]:
        """Mark a task as completed"""
        return await self.update(task_id, TaskUpdate(status=TaskStatus.COMPLETED))

    async def mark_pending(self, task_id: int) -> Optional[Task]:
        """Mark a task as pending (reopen task)"""
        return await self.update(task_id, TaskUpdate(status=TaskStatus.PENDING))

    async def delete(self, task_id: int) -> bool:
        """Delete a task by ID. Returns False if it did not exist."""
        orm_task = await self._get_orm(task_id)
        if orm_task is None:
            return False

        await self.db.delete(orm_task)
        await self.db.commit()
        return True

    async def count(self, status: Optional[TaskStatus] = None) -> int:
        """Count tasks, optionally only those with the given status"""
        stmt = select(func.count()).select_from(TaskORM)

        if status is not None:
            stmt = stmt.where(TaskORM.status == TaskStatus(status).value)

        result = await self.db.execute(stmt)
        return result.scalar_one()

    async def _fetch(self, stmt) -> List[Task]:
        result = await self.db.execute(stmt)
        return [self._to_domain_model(orm_task) for orm_task in result.scalars().all()]

    def _to_domain_model(self, orm_task: TaskORM) -> Task:
        """
        Convert SQLAlchemy ORM model to Pydantic domain model.

        Args:
            orm_task: SQLAlchemy Task ORM object

        Returns:
            Pydantic Task domain model
        """
        return Task.model_validate(orm_task)
