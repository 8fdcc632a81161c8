"""
Task lifecycle service.

Every operation takes the caller's user id as its first argument and only
ever touches tasks owned by that user. A task that does not exist and a task
owned by someone else produce the same TaskNotFoundOrForbiddenError, so task
ids belonging to other users cannot be probed.
"""

from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from app.db_handlers import TaskDBHandler
from app.exceptions import TaskNotFoundOrForbiddenError
from app.models import Task, TaskStatus
from app.schemas import TaskCreate, TaskResponse, TaskSummary, TaskUpdate
from app.utils.logger import setup_logger

logger = setup_logger(__name__)


def _as_uuid(task_id: uuid.UUID | str) -> uuid.UUID:
    if isinstance(task_id, uuid.UUID):
        return task_id
    try:
        return uuid.UUID(str(task_id))
    except ValueError as e:
        raise TaskNotFoundOrForbiddenError() from e


class TaskService:
    def __init__(self, task_handler: TaskDBHandler | None = None):
        self.task_handler = task_handler or TaskDBHandler()

    async def _get_owned(
        self, owner_id: uuid.UUID, task_id: uuid.UUID | str, db: AsyncSession
    ) -> Task:
        task = await self.task_handler.get_owned_task_by_user(
            _as_uuid(task_id), owner_id, db=db
        )
        if task is None:
            logger.info(f"Task {task_id} not accessible to user {owner_id}")
            raise TaskNotFoundOrForbiddenError()
        return task

    async def create(
        self, owner_id: uuid.UUID, data: TaskCreate, *, db: AsyncSession = None
    ) -> TaskSummary:
        task = await self.task_handler.create_task(
            {
                "title": data.title,
                "description": data.description,
                "status": data.status,
                "priority": data.priority,
                "due_date": data.due_date,
                "owner_id": owner_id,
            },
            db=db,
        )
        logger.info(f"Created task {task.id} for user {owner_id}")
        return TaskSummary.model_validate(task)

    async def list(
        self,
        owner_id: uuid.UUID,
        status: TaskStatus | None = None,
        *,
        db: AsyncSession = None,
    ) -> list[TaskResponse]:
        """All of the owner's tasks, newest first, optionally with one status."""
        tasks = await self.task_handler.get_tasks(owner_id, status, db=db)
        return [TaskResponse.model_validate(task) for task in tasks]

    async def find_by_id(
        self, owner_id: uuid.UUID, task_id: uuid.UUID | str, *, db: AsyncSession = None
    ) -> TaskResponse:
        task = await self._get_owned(owner_id, task_id, db)
        return TaskResponse.model_validate(task)

    async def update(
        self,
        owner_id: uuid.UUID,
        task_id: uuid.UUID | str,
        data: TaskUpdate,
        *,
        db: AsyncSession = None,
    ) -> TaskResponse:
        """Apply only the fields present in ``data`` to an owned task."""
        task = await self._get_owned(owner_id, task_id, db)
        changes = data.changes()
        if changes:
            task = await self.task_handler.update(task, changes, db=db)
            logger.info(f"Updated task {task.id}: {sorted(changes)}")
        return TaskResponse.model_validate(task)

    async def delete(
        self, owner_id: uuid.UUID, task_id: uuid.UUID | str, *, db: AsyncSession = None
    ) -> TaskResponse:
        """Remove an owned task and return it as it was before removal."""
        task = await self._get_owned(owner_id, task_id, db)
        snapshot = TaskResponse.model_validate(task)
        await self.task_handler.remove(task.id, db=db)
        logger.info(f"Deleted task {task.id} of user {owner_id}")
        return snapshot
