"""
Service providers for FastAPI dependency injection.

Tests swap these out through ``app.dependency_overrides``.
"""

from fastapi import Depends

from app.config import SecurityConfig, settings
from app.services.auth_service import AuthService
from app.services.stats_service import StatsService
from app.services.task_service import TaskService
from app.services.user_service import UserService
from app.utils.auth import PasswordHasher, TokenManager


def get_security_config() -> SecurityConfig:
    return settings.security


def get_password_hasher(
    config: SecurityConfig = Depends(get_security_config),
) -> PasswordHasher:
    return PasswordHasher(config)


def get_token_manager(
    config: SecurityConfig = Depends(get_security_config),
) -> TokenManager:
    return TokenManager(config)


def get_auth_service(
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenManager = Depends(get_token_manager),
) -> AuthService:
    return AuthService(hasher, tokens)


def get_user_service(
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> UserService:
    return UserService(hasher)


def get_task_service() -> TaskService:
    return TaskService()


def get_stats_service() -> StatsService:
    return StatsService()
