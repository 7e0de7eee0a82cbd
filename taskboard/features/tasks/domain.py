"""Domain models for Tasks feature"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class TaskStatus(str, Enum):
    """Lifecycle state of a task"""
    PENDING = "pending"
    COMPLETED = "completed"


STATUSES = [status.value for status in TaskStatus]

STATUS_TEXT = {
    TaskStatus.PENDING: "Pending",
    TaskStatus.COMPLETED: "Completed",
}


class PriorityLevel(str, Enum):
    """Urgency bucket derived from completion state and due date proximity"""
    COMPLETED = "completed"
    OVERDUE = "overdue"
    URGENT = "urgent"
    HIGH = "high"
    MEDIUM = "medium"
    NORMAL = "normal"


# Upper bounds (inclusive, in days until due) for the due-date buckets
PRIORITY_THRESHOLDS = (
    (1, PriorityLevel.URGENT),
    (3, PriorityLevel.HIGH),
    (7, PriorityLevel.MEDIUM),
)


class TaskNotFoundError(LookupError):
    """Raised when a task id does not exist"""

    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"Task {task_id} not found")


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def days_between(now: datetime, due_date: datetime) -> int:
    """Whole days from now until due_date, truncated toward zero."""
    return int((ensure_utc(due_date) - ensure_utc(now)) / timedelta(days=1))


def format_due_date(due_date: datetime) -> str:
    """Short date like 'Dec 25, 2024'."""
    return f"{due_date:%b} {due_date.day}, {due_date.year}"


def task_is_overdue(
    status: TaskStatus,
    due_date: Optional[datetime],
    now: Optional[datetime] = None,
) -> bool:
    if status != TaskStatus.PENDING or due_date is None:
        return False
    return ensure_utc(due_date) < ensure_utc(now or utc_now())


def classify_priority(
    status: TaskStatus,
    due_date: Optional[datetime],
    now: Optional[datetime] = None,
) -> PriorityLevel:
    """
    Classify a task into a priority bucket.

    First match wins:
    1. completed
    2. overdue (pending and due date has passed)
    3. normal when there is no due date
    4. urgent / high / medium by days until due, otherwise normal
    """
    now = now or utc_now()

    if status == TaskStatus.COMPLETED:
        return PriorityLevel.COMPLETED
    if task_is_overdue(status, due_date, now):
        return PriorityLevel.OVERDUE
    if due_date is None:
        return PriorityLevel.NORMAL

    days = days_between(now, due_date)
    for limit, level in PRIORITY_THRESHOLDS:
        if days <= limit:
            return level
    return PriorityLevel.NORMAL


class TaskBase(BaseModel):
    """Base task fields"""
    title: str
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.PENDING
    due_date: Optional[datetime] = None

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value)


class TaskCreate(TaskBase):
    """Task creation model"""
    pass


class TaskUpdate(BaseModel):
    """Task update model - all fields optional, only set fields are written"""
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    due_date: Optional[datetime] = None

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value)


class Task(TaskBase):
    """
    Complete task domain model.

    Derived fields are computed on every read from ``status``, ``due_date``
    and the current time; the ``*_at`` methods take an explicit reference time.
    """
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def normalize_timestamps(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    def is_pending(self) -> bool:
        return self.status == TaskStatus.PENDING

    def is_overdue_at(self, now: Optional[datetime] = None) -> bool:
        return task_is_overdue(self.status, self.due_date, now)

    def days_until_due_at(self, now: Optional[datetime] = None) -> Optional[int]:
        if self.due_date is None:
            return None
        return days_between(now or utc_now(), self.due_date)

    def priority_level_at(self, now: Optional[datetime] = None) -> PriorityLevel:
        return classify_priority(self.status, self.due_date, now)

    @computed_field
    @property
    def status_text(self) -> str:
        return STATUS_TEXT[self.status]

    @computed_field
    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED

    @computed_field
    @property
    def is_overdue(self) -> bool:
        return self.is_overdue_at()

    @computed_field
    @property
    def days_until_due(self) -> Optional[int]:
        return self.days_until_due_at()

    @computed_field
    @property
    def formatted_due_date(self) -> Optional[str]:
        if self.due_date is None:
            return None
        return format_due_date(self.due_date)

    @computed_field
    @property
    def priority_level(self) -> PriorityLevel:
        return self.priority_level_at()


class TaskStats(BaseModel):
    """Aggregate statistics over all tasks"""
    total_tasks: int = Field(..., ge=0)
    completed_tasks: int = Field(..., ge=0)
    pending_tasks: int = Field(..., ge=0)
    completion_percentage: float = 0.0

    @classmethod
    def from_counts(cls, total_tasks: int, completed_tasks: int, pending_tasks: int) -> "TaskStats":
        """
        Build stats from row counts.

        The percentage is rounded half-up to two decimals; an empty
        collection yields 0.0.
        """
        return cls(
            total_tasks=total_tasks,
            completed_tasks=completed_tasks,
            pending_tasks=pending_tasks,
            completion_percentage=completion_percentage(completed_tasks, total_tasks),
        )


def completion_percentage(completed_tasks: int, total_tasks: int) -> float:
    if total_tasks <= 0:
        return 0.0
    ratio = Decimal(completed_tasks * 100) / Decimal(total_tasks)
    return float(ratio.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
