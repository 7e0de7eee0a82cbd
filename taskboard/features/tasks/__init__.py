"""Tasks feature module"""

from taskboard.features.tasks.api import router, dashboard_router
from taskboard.features.tasks.repository import TaskRepository
from taskboard.features.tasks.service import TaskService
from taskboard.features.tasks.domain import (
    PriorityLevel,
    Task,
    TaskCreate,
    TaskNotFoundError,
    TaskStats,
    TaskStatus,
    TaskUpdate,
)

__all__ = [
    "router",
    "dashboard_router",
    "TaskRepository",
    "TaskService",
    "PriorityLevel",
    "Task",
    "TaskCreate",
    "TaskNotFoundError",
    "TaskStats",
    "TaskStatus",
    "TaskUpdate",
]
