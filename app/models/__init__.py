"""
Database models for the task manager service.

Architecture: User → Task ownership pattern.
"""

from app.models.task import Task, TaskPriority, TaskStatus
from app.models.user import User

__all__ = [
    "User",
    "Task",
    "TaskStatus",
    "TaskPriority",
]
