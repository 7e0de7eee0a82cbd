# tests/test_task_domain.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from taskboard.features.tasks.domain import (
    STATUSES,
    PriorityLevel,
    TaskStats,
    TaskStatus,
    classify_priority,
    completion_percentage,
    days_between,
)

from .factories import NOW, build_task


def test_statuses_constant() -> None:
    assert STATUSES == ["pending", "completed"]


def test_status_text_and_is_completed() -> None:
    pending = build_task(status=TaskStatus.PENDING)
    completed = build_task(status=TaskStatus.COMPLETED)

    assert pending.status_text == "Pending"
    assert completed.status_text == "Completed"
    assert pending.is_completed is False
    assert completed.is_completed is True
    assert pending.is_pending() is True
    assert completed.is_pending() is False


def test_pending_task_with_past_due_date_is_overdue() -> None:
    task = build_task(due_date=NOW - timedelta(days=1))

    assert task.is_overdue_at(NOW) is True
    assert task.priority_level_at(NOW) == PriorityLevel.OVERDUE


@pytest.mark.parametrize("due_offset", [timedelta(days=-30), timedelta(hours=-1), timedelta(days=2), None])
def test_completed_task_is_never_overdue(due_offset: timedelta | None) -> None:
    due_date = NOW + due_offset if due_offset is not None else None
    task = build_task(status=TaskStatus.COMPLETED, due_date=due_date)

    assert task.is_overdue_at(NOW) is False
    assert task.priority_level_at(NOW) == PriorityLevel.COMPLETED


def test_task_without_due_date() -> None:
    pending = build_task(due_date=None)
    completed = build_task(status=TaskStatus.COMPLETED, due_date=None)

    assert pending.is_overdue_at(NOW) is False
    assert pending.days_until_due_at(NOW) is None
    assert pending.formatted_due_date is None
    assert pending.priority_level_at(NOW) == PriorityLevel.NORMAL
    assert completed.priority_level_at(NOW) == PriorityLevel.COMPLETED


def test_marking_complete_clears_overdue_on_next_read() -> None:
    task = build_task(due_date=NOW - timedelta(days=3))
    assert task.is_overdue_at(NOW) is True

    task.status = TaskStatus.COMPLETED

    assert task.is_overdue_at(NOW) is False
    assert task.priority_level_at(NOW) == PriorityLevel.COMPLETED


@pytest.mark.parametrize(
    ("due_in", "expected"),
    [
        (timedelta(hours=6), PriorityLevel.URGENT),
        (timedelta(days=1, hours=23), PriorityLevel.URGENT),
        (timedelta(days=2), PriorityLevel.HIGH),
        (timedelta(days=3, hours=12), PriorityLevel.HIGH),
        (timedelta(days=5), PriorityLevel.MEDIUM),
        (timedelta(days=7, hours=23), PriorityLevel.MEDIUM),
        (timedelta(days=8), PriorityLevel.NORMAL),
        (timedelta(days=30), PriorityLevel.NORMAL),
    ],
)
def test_priority_buckets_by_days_until_due(due_in: timedelta, expected: PriorityLevel) -> None:
    task = build_task(due_date=NOW + due_in)

    assert task.priority_level_at(NOW) == expected


def test_priority_is_monotonic_in_days_until_due() -> None:
    rank = {
        PriorityLevel.OVERDUE: 4,
        PriorityLevel.URGENT: 3,
        PriorityLevel.HIGH: 2,
        PriorityLevel.MEDIUM: 1,
        PriorityLevel.NORMAL: 0,
    }
    offsets = [timedelta(hours=h) for h in range(-72, 24 * 12, 5)]
    levels = [classify_priority(TaskStatus.PENDING, NOW + offset, NOW) for offset in offsets]

    ranks = [rank[level] for level in levels]
    assert ranks == sorted(ranks, reverse=True)


def test_days_until_due_truncates_toward_zero() -> None:
    assert days_between(NOW, NOW + timedelta(days=6, hours=23)) == 6
    assert days_between(NOW, NOW + timedelta(days=7)) == 7
    assert days_between(NOW, NOW - timedelta(hours=12)) == 0
    assert days_between(NOW, NOW - timedelta(days=2, hours=1)) == -2


def test_days_until_due_is_negative_for_past_dates() -> None:
    task = build_task(due_date=NOW - timedelta(days=4))

    assert task.days_until_due_at(NOW) == -4


def test_naive_due_date_is_treated_as_utc() -> None:
    task = build_task(due_date=datetime(2025, 3, 12, 12, 0))

    assert task.due_date.tzinfo == timezone.utc
    assert task.days_until_due_at(NOW) == 2


def test_formatted_due_date() -> None:
    task = build_task(due_date=datetime(2024, 12, 25, tzinfo=timezone.utc))
    single_digit_day = build_task(due_date=datetime(2025, 1, 5, 9, 30, tzinfo=timezone.utc))

    assert task.formatted_due_date == "Dec 25, 2024"
    assert single_digit_day.formatted_due_date == "Jan 5, 2025"


def test_serialized_task_includes_derived_fields() -> None:
    task = build_task(due_date=datetime.now(timezone.utc) + timedelta(days=5, hours=1))

    data = task.model_dump(mode="json")

    assert data["status"] == "pending"
    assert data["status_text"] == "Pending"
    assert data["is_completed"] is False
    assert data["is_overdue"] is False
    assert data["days_until_due"] == 5
    assert data["priority_level"] == "medium"
    assert data["formatted_due_date"] is not None


def test_stats_for_empty_collection() -> None:
    stats = TaskStats.from_counts(0, 0, 0)

    assert stats.model_dump() == {
        "total_tasks": 0,
        "completed_tasks": 0,
        "pending_tasks": 0,
        "completion_percentage": 0.0,
    }


@pytest.mark.parametrize(
    ("completed", "total", "expected"),
    [
        (2, 4, 50.0),
        (1, 3, 33.33),
        (2, 3, 66.67),
        (3, 3, 100.0),
        (0, 5, 0.0),
        # Exact half at the third decimal rounds up
        (1, 160, 0.63),
        (1, 8, 12.5),
    ],
)
def test_completion_percentage(completed: int, total: int, expected: float) -> None:
    assert completion_percentage(completed, total) == expected
