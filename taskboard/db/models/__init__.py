"""SQLAlchemy ORM models"""

from taskboard.db.models.task import Task

__all__ = ["Task"]
