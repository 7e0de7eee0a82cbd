"""SQLAlchemy ORM model for tasks table"""

from sqlalchemy import CheckConstraint, Column, Integer, String, DateTime, Text
from sqlalchemy.sql import func

from taskboard.db.base import Base


class Task(Base):
    """
    SQLAlchemy ORM model for the tasks table.
    Derived fields (priority, overdue flag, ...) live on the domain model.
    """
    __tablename__ = "tasks"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'completed')",
            name="ck_tasks_status",
        ),
    )

    # Primary key
    id = Column(Integer, primary_key=True, index=True)

    # Task information
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    # Status values are the domain TaskStatus enum values
    status = Column(
        String(20),
        default="pending",
        nullable=False,
        index=True,
    )
    due_date = Column(DateTime(timezone=True), nullable=True, index=True)

    # Timestamps
    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )

    def __repr__(self) -> str:
        return f"<Task(id={self.id}, title='{self.title}', status='{self.status}')>"
