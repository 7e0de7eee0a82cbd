"""Request and response schemas for Tasks API"""

from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from taskboard.features.tasks.domain import (
    Task,
    TaskCreate,
    TaskStats,
    TaskStatus,
    TaskUpdate,
    ensure_utc,
    utc_now,
)

TITLE_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 1000


class StatusFilter(str, Enum):
    """Status filter for task listing"""
    ALL = "all"
    PENDING = "pending"
    COMPLETED = "completed"

    def to_status(self) -> Optional[TaskStatus]:
        if self == StatusFilter.ALL:
            return None
        return TaskStatus(self.value)


def _empty_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _parse_due_date(value: Any) -> Any:
    """Accept '' (cleared), a plain 'YYYY-MM-DD' date or anything pydantic parses as datetime."""
    value = _empty_to_none(value)
    if isinstance(value, str) and len(value) == 10:
        try:
            return datetime.combine(date.fromisoformat(value), time.min, tzinfo=timezone.utc)
        except ValueError:
            return value
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    return value


def _check_title(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("The task title is required")
    if len(value) > TITLE_MAX_LENGTH:
        raise ValueError(f"The task title cannot exceed {TITLE_MAX_LENGTH} characters")
    return value


class CreateTaskRequest(BaseModel):
    """Request model for creating a task"""
    title: str
    description: Optional[str] = Field(None, max_length=DESCRIPTION_MAX_LENGTH)
    status: TaskStatus
    due_date: Optional[datetime] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        return _check_title(value)

    @field_validator("description", mode="before")
    @classmethod
    def blank_description(cls, value: Any) -> Any:
        return _empty_to_none(value)

    @field_validator("due_date", mode="before")
    @classmethod
    def parse_due_date(cls, value: Any) -> Any:
        return _parse_due_date(value)

    @field_validator("due_date")
    @classmethod
    def due_date_not_in_past(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is None:
            return None
        value = ensure_utc(value)
        if value.date() < utc_now().date():
            raise ValueError("The due date cannot be in the past")
        return value

    def to_create(self) -> TaskCreate:
        return TaskCreate(**self.model_dump())


class UpdateTaskRequest(BaseModel):
    """
    Request model for updating a task.

    Every field is optional; only the fields present in the request are
    applied. An empty string for description or due_date clears the field.
    """
    title: Optional[str] = None
    description: Optional[str] = Field(None, max_length=DESCRIPTION_MAX_LENGTH)
    status: Optional[TaskStatus] = None
    due_date: Optional[datetime] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: Optional[str]) -> str:
        if value is None:
            raise ValueError("The task title is required")
        return _check_title(value)

    @field_validator("status")
    @classmethod
    def validate_status(cls, value: Optional[TaskStatus]) -> TaskStatus:
        if value is None:
            raise ValueError("The task status is required")
        return value

    @field_validator("description", mode="before")
    @classmethod
    def blank_description(cls, value: Any) -> Any:
        return _empty_to_none(value)

    @field_validator("due_date", mode="before")
    @classmethod
    def parse_due_date(cls, value: Any) -> Any:
        return _parse_due_date(value)

    def to_update(self) -> TaskUpdate:
        return TaskUpdate(**self.model_dump(exclude_unset=True))


class TaskResponse(BaseModel):
    """Single task with derived fields"""
    task: Task


class TaskListResponse(BaseModel):
    """Filtered task listing"""
    tasks: List[Task]
    count: int
    current_filter: StatusFilter


class DeleteResponse(BaseModel):
    """Response model for task deletion"""
    success: bool
    message: str


class DashboardResponse(BaseModel):
    """Latest tasks plus aggregate statistics"""
    tasks: List[Task]
    stats: TaskStats
