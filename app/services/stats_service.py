# Per-user task completion statistics

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from app.db_handlers import TaskDBHandler, UserDBHandler
from app.exceptions import UserNotFoundError
from app.models import TaskStatus
from app.schemas import TaskStats, UserInfo, UserStatsResponse


def completed_percentage(completed: int, total: int) -> float:
    if total <= 0:
        return 0
    return round(completed / total * 100, 2)


class StatsService:
    def __init__(
        self,
        user_handler: UserDBHandler | None = None,
        task_handler: TaskDBHandler | None = None,
    ):
        self.user_handler = user_handler or UserDBHandler()
        self.task_handler = task_handler or TaskDBHandler()

    async def summarize(
        self, owner_id: uuid.UUID, *, db: AsyncSession = None
    ) -> UserStatsResponse:
        user = await self.user_handler.get(owner_id, db=db)
        if user is None:
            raise UserNotFoundError()

        counts = await self.task_handler.count_tasks_by_status(owner_id, db=db)
        total = sum(counts.values())
        completed = counts.get(TaskStatus.COMPLETED, 0)

        stats = TaskStats(
            total_tasks=total,
            completed_tasks=completed,
            in_progress_tasks=counts.get(TaskStatus.IN_PROGRESS, 0),
            pending_tasks=counts.get(TaskStatus.PENDING, 0),
            completed_percentage=completed_percentage(completed, total),
        )
        profile = UserInfo.model_validate(user)
        return UserStatsResponse(**profile.model_dump(), stats=stats)
