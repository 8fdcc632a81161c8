"""
Task API routes - CRUD for the caller's own tasks.

All routes require a bearer token. Reading, updating or deleting a task that
is missing or belongs to someone else returns 403 in both cases.
"""


from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_app_db
from app.dependencies.auth import get_current_user
from app.dependencies.services import get_task_service
from app.dependencies.tasks import get_owned_task
from app.models import TaskStatus
from app.schemas import (
    AuthenticatedIdentity,
    TaskCreate,
    TaskResponse,
    TaskSummary,
    TaskUpdate,
)
from app.services.task_service import TaskService
router = APIRouter(prefix="/api")


@router.get("/")
async def read_root():
    """API health check endpoint."""
    return {"message": "Task Manager API is running!"}


@router.get("/tasks", response_model=list[TaskResponse], tags=["Tasks"])
async def list_tasks(
    status_filter: TaskStatus | None = Query(
        None, alias="status", description="Only return tasks with this status"
    ),
    current_user: AuthenticatedIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_app_db),
    task_service: TaskService = Depends(get_task_service),
):
    """List the caller's tasks, newest first."""
    return await task_service.list(current_user.id, status_filter, db=db)


@router.post(
    "/tasks",
    response_model=TaskSummary,
    status_code=status.HTTP_201_CREATED,
    tags=["Tasks"],
)
async def create_task(
    task_data: TaskCreate,
    current_user: AuthenticatedIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_app_db),
    task_service: TaskService = Depends(get_task_service),
):
    """Create a task owned by the caller. Returns id, title and description."""
    return await task_service.create(current_user.id, task_data, db=db)


@router.get("/tasks/{task_id}", response_model=TaskResponse, tags=["Tasks"])
async def get_task(task: TaskResponse = Depends(get_owned_task)):
    return task


@router.patch("/tasks/{task_id}", response_model=TaskResponse, tags=["Tasks"])
async def update_task(
    task_id: str,
    task_data: TaskUpdate,
    current_user: AuthenticatedIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_app_db),
    task_service: TaskService = Depends(get_task_service),
):
    """Partially update one of the caller's tasks."""
    return await task_service.update(current_user.id, task_id, task_data, db=db)


@router.delete("/tasks/{task_id}", response_model=TaskResponse, tags=["Tasks"])
async def delete_task(
    task_id: str,
    current_user: AuthenticatedIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_app_db),
    task_service: TaskService = Depends(get_task_service),
):
    """Delete one of the caller's tasks and return it as it was."""
    return await task_service.delete(current_user.id, task_id, db=db)
