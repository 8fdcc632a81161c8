"""
User API routes: registration, profile management and task statistics.

Everything under ``/me`` acts on the caller resolved from the bearer token;
no route accepts a user id from the client.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_app_db
from app.dependencies.auth import get_current_user
from app.dependencies.services import get_stats_service, get_user_service
from app.schemas import (
    AuthenticatedIdentity,
    UserCreatedResponse,
    UserInfo,
    UserRegister,
    UserStatsResponse,
    UserUpdate,
)
from app.services.stats_service import StatsService
from app.services.user_service import UserService

router = APIRouter(prefix="/api/users", tags=["User Management"])


@router.post(
    "", response_model=UserCreatedResponse, status_code=status.HTTP_201_CREATED
)
async def register_user(
    user_data: UserRegister,
    db: AsyncSession = Depends(get_app_db),
    user_service: UserService = Depends(get_user_service),
):
    """Register a new user. The password is stored only as a bcrypt hash."""
    return await user_service.register(user_data, db=db)


@router.get("/me", response_model=UserInfo)
async def get_my_profile(
    current_user: AuthenticatedIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_app_db),
    user_service: UserService = Depends(get_user_service),
):
    return await user_service.get_profile(current_user.id, db=db)


@router.patch("/me", response_model=UserInfo)
async def update_my_profile(
    user_data: UserUpdate,
    current_user: AuthenticatedIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_app_db),
    user_service: UserService = Depends(get_user_service),
):
    """Update the caller's name and/or email."""
    return await user_service.update_profile(current_user.id, user_data, db=db)


@router.get("/me/stats", response_model=UserStatsResponse)
async def get_my_stats(
    current_user: AuthenticatedIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_app_db),
    stats_service: StatsService = Depends(get_stats_service),
):
    """Profile plus total, completed and in-progress task counts."""
    return await stats_service.summarize(current_user.id, db=db)
