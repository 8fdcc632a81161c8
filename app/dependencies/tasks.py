from fastapi import Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_app_db
from app.dependencies.auth import get_current_user
from app.dependencies.services import get_task_service
from app.schemas import AuthenticatedIdentity, TaskResponse
from app.services.task_service import TaskService


async def get_owned_task(
    task_id: str = Path(..., description="The ID of the task"),
    db: AsyncSession = Depends(get_app_db),
    current_user: AuthenticatedIdentity = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    """
    Dependency to get a task, ensuring the current user is the owner.

    Raises UnauthenticatedError (401) without a valid token. A malformed id,
    a missing task and a task owned by another user all raise the same
    TaskNotFoundOrForbiddenError (403).
    """
    return await task_service.find_by_id(current_user.id, task_id, db=db)
