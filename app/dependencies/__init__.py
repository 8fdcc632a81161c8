from app.dependencies.auth import get_current_user
from app.dependencies.services import (
    get_auth_service,
    get_stats_service,
    get_task_service,
    get_user_service,
)
from app.dependencies.tasks import get_owned_task

__all__ = [
    "get_current_user",
    "get_owned_task",
    "get_auth_service",
    "get_user_service",
    "get_task_service",
    "get_stats_service",
]
