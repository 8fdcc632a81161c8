"""
Task model for personal to-do items owned by a single user.

Architecture:
    User → Task

Lifecycle:
    PENDING, IN_PROGRESS and COMPLETED may be set in any order; only
    membership in the enumeration is enforced. The owner is fixed at
    creation time.
"""

import enum

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Index, String, Text
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import relationship, validates

from app.models.base import SCHEMA_NAME, Base, TimestampMixin, UUIDMixin


class TaskStatus(str, enum.Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class TaskPriority(str, enum.Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class Task(Base, UUIDMixin, TimestampMixin):
    """
    A to-do item belonging to exactly one user.

    Only the owner may read, modify or delete it; every query in the task
    handler filters on ``owner_id``.
    """

    __tablename__ = "tasks"
    __table_args__ = (
        Index("ix_tasks_owner_id", "owner_id"),
        Index("ix_tasks_owner_id_status", "owner_id", "status"),
        Index("ix_tasks_owner_id_created_at", "owner_id", "created_at"),
        {"schema": SCHEMA_NAME},
    )

    title = Column(
        String(200),
        nullable=False,
        comment="Short, non-empty task title",
    )

    description = Column(
        Text,
        nullable=True,
        comment="Optional free-form details",
    )

    status = Column(
        Enum(TaskStatus, name="task_status", schema=SCHEMA_NAME),
        nullable=False,
        default=TaskStatus.PENDING,
        comment="PENDING / IN_PROGRESS / COMPLETED",
    )

    priority = Column(
        Enum(TaskPriority, name="task_priority", schema=SCHEMA_NAME),
        nullable=False,
        default=TaskPriority.MEDIUM,
        comment="LOW / MEDIUM / HIGH",
    )

    due_date = Column(
        DateTime(timezone=True),
        nullable=True,
        comment="Due day stored as midnight UTC",
    )

    owner_id = Column(
        PG_UUID(as_uuid=True),
        ForeignKey(f"{SCHEMA_NAME}.users.id", ondelete="CASCADE"),
        nullable=False,
        comment="User who created and owns this task",
    )

    owner = relationship(
        "User",
        back_populates="tasks",
        doc="User who owns this task",
    )

    @validates("title")
    def validate_title(self, key, value):
        if value is None or not value.strip():
            raise ValueError("title must not be empty")
        return value

    @validates("owner_id")
    def validate_owner_id(self, key, value):
        current = self.__dict__.get("owner_id")
        if current is not None and current != value:
            raise ValueError("owner_id cannot be changed once set")
        return value

    def __repr__(self):
        return (
            f"<Task(id={self.id}, "
            f"status='{self.status}', "
            f"owner_id='{self.owner_id}', "
            f"title='{(self.title or '')[:50]}')>"
        )
