from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db_handlers.base import BaseDBHandler, check_local_db
from app.models.task import Task, TaskStatus
from app.utils.logger import setup_logger

logger = setup_logger("task_db_handler")


class TaskDBHandler(BaseDBHandler[Task]):
    def __init__(self):
        super().__init__(Task)

    @check_local_db
    async def create_task(
        self, obj_dict: dict[str, Any], *, db: AsyncSession = None
    ) -> Task:
        """Create a new task bound to ``obj_dict['owner_id']``."""
        return await super().create(obj_dict, db=db)

    @check_local_db
    async def get_tasks(
        self,
        owner_id: uuid.UUID,
        status: TaskStatus | None = None,
        *,
        db: AsyncSession = None,
    ) -> list[Task]:
        """Get an owner's tasks, newest first, optionally filtered by status."""
        query_params: dict[str, Any] = {
            "owner_id": owner_id,
            "order_by": [Task.created_at.desc(), Task.id.desc()],
        }
        if status is not None:
            query_params["status"] = status
        return await super().get_multi_by_attributes(db=db, **query_params)

    @check_local_db
    async def get_owned_task_by_user(
        self, task_id: uuid.UUID, owner_id: uuid.UUID, *, db: AsyncSession = None
    ) -> Task | None:
        """Get a task only if it belongs to ``owner_id``."""
        try:
            stmt = select(Task).where(Task.id == task_id, Task.owner_id == owner_id)
            result = await db.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving task {task_id} for owner {owner_id}: {e}")
            raise

    @check_local_db
    async def count_tasks_by_status(
        self, owner_id: uuid.UUID, *, db: AsyncSession = None
    ) -> dict[TaskStatus, int]:
        """Count an owner's tasks per status in a single grouped query."""
        try:
            stmt = (
                select(Task.status, func.count(Task.id))
                .where(Task.owner_id == owner_id)
                .group_by(Task.status)
            )
            result = await db.execute(stmt)
            counts = {task_status: 0 for task_status in TaskStatus}
            for task_status, count in result.all():
                counts[TaskStatus(task_status)] = count
            return counts
        except SQLAlchemyError as e:
            logger.error(f"Error counting tasks for owner {owner_id}: {e}")
            raise
