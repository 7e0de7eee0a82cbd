# tests/factories.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from itertools import count
from typing import Any

from taskboard.features.tasks.domain import Task, TaskCreate, TaskStatus
from taskboard.features.tasks.repository import TaskRepository

_ids = count(1)

NOW = datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)


def build_task(**overrides: Any) -> Task:
    """
    Unsaved Task domain model for pure derived-field tests.

    Timestamps default to NOW; pass due_date / status to shape the case.
    """
    fields: dict[str, Any] = {
        "id": next(_ids),
        "title": "Review API endpoints",
        "description": None,
        "status": TaskStatus.PENDING,
        "due_date": None,
        "created_at": NOW,
        "updated_at": NOW,
    }
    fields.update(overrides)
    return Task(**fields)


async def create_task(repository: TaskRepository, **overrides: Any) -> Task:
    """Persist a task directly through the repository (no request validation)."""
    fields: dict[str, Any] = {
        "title": "Implement payment processing",
        "description": "Wire up the checkout flow",
        "status": TaskStatus.PENDING,
        "due_date": None,
    }
    fields.update(overrides)
    return await repository.create(TaskCreate(**fields))


def days_from_now(days: float) -> datetime:
    return datetime.now(timezone.utc) + timedelta(days=days)
