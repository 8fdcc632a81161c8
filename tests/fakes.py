# tests/fakes.py

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta
from typing import Any

from sqlalchemy.exc import IntegrityError

from app.models import Task, TaskStatus, User

BASE_TIME = datetime(2025, 1, 1, tzinfo=UTC)


class _Clock:
    """Strictly increasing timestamps so creation order is deterministic."""

    def __init__(self) -> None:
        self.ticks = 0

    def now(self) -> datetime:
        self.ticks += 1
        return BASE_TIME + timedelta(seconds=self.ticks)


class FakeUserDBHandler:
    """
    In-memory stand-in for UserDBHandler.

    Enforces the unique email index by raising IntegrityError, like the
    database would.
    """

    def __init__(self, clock: _Clock | None = None) -> None:
        self.clock = clock or _Clock()
        self.users: dict[uuid.UUID, User] = {}
        self.email_lookups: list[str] = []

    async def get(self, id: Any, *, db=None) -> User | None:
        return self.users.get(id)

    async def get_user_by_email(self, email: str, *, db=None) -> User | None:
        self.email_lookups.append(email)
        wanted = email.strip().lower()
        return next((u for u in self.users.values() if u.email == wanted), None)

    async def create(self, obj_dict: dict[str, Any], *, db=None) -> User:
        user = User(**obj_dict)
        if any(u.email == user.email for u in self.users.values()):
            raise IntegrityError("INSERT INTO users", {}, Exception("duplicate email"))
        user.id = uuid.uuid4()
        user.created_at = user.updated_at = self.clock.now()
        self.users[user.id] = user
        return user

    async def update(self, db_obj: User, update_data: dict[str, Any], *, db=None) -> User:
        new_email = update_data.get("email")
        if new_email and any(
            u.email == new_email.lower() and u.id != db_obj.id
            for u in self.users.values()
        ):
            raise IntegrityError("UPDATE users", {}, Exception("duplicate email"))
        for field, value in update_data.items():
            setattr(db_obj, field, value)
        db_obj.updated_at = self.clock.now()
        return db_obj


class FakeTaskDBHandler:
    """In-memory stand-in for TaskDBHandler."""

    def __init__(self, clock: _Clock | None = None) -> None:
        self.clock = clock or _Clock()
        self.tasks: dict[uuid.UUID, Task] = {}

    async def create_task(self, obj_dict: dict[str, Any], *, db=None) -> Task:
        task = Task(**obj_dict)
        task.id = uuid.uuid4()
        task.status = task.status or TaskStatus.PENDING
        task.created_at = task.updated_at = self.clock.now()
        self.tasks[task.id] = task
        return task

    async def get(self, id: Any, *, db=None) -> Task | None:
        return self.tasks.get(id)

    async def get_tasks(
        self, owner_id: uuid.UUID, status: TaskStatus | None = None, *, db=None
    ) -> list[Task]:
        tasks = [
            t
            for t in self.tasks.values()
            if t.owner_id == owner_id and (status is None or t.status == status)
        ]
        return sorted(tasks, key=lambda t: t.created_at, reverse=True)

    async def get_owned_task_by_user(
        self, task_id: uuid.UUID, owner_id: uuid.UUID, *, db=None
    ) -> Task | None:
        task = self.tasks.get(task_id)
        if task is None or task.owner_id != owner_id:
            return None
        return task

    async def count_tasks_by_status(
        self, owner_id: uuid.UUID, *, db=None
    ) -> dict[TaskStatus, int]:
        counts = {task_status: 0 for task_status in TaskStatus}
        for task in self.tasks.values():
            if task.owner_id == owner_id:
                counts[task.status] += 1
        return counts

    async def update(self, db_obj: Task, update_data: dict[str, Any], *, db=None) -> Task:
        for field, value in update_data.items():
            setattr(db_obj, field, value)
        db_obj.updated_at = self.clock.now()
        return db_obj

    async def remove(self, id: Any, *, db=None) -> Task | None:
        return self.tasks.pop(id, None)
