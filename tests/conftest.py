"""
This file contains shared fixtures and configuration for the test suite.

Pytest will automatically discover and use the fixtures defined in this file.

The services are wired to the in-memory handlers from ``tests/fakes.py`` so
no database is needed. The HTTP tests build the real application with
``create_app`` and swap the service providers through
``app.dependency_overrides``.
"""

from collections.abc import AsyncGenerator, Callable

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.config import SecurityConfig
from app.services.auth_service import AuthService
from app.services.stats_service import StatsService
from app.services.task_service import TaskService
from app.services.user_service import UserService
from app.utils.auth import PasswordHasher, TokenManager
from tests.fakes import FakeTaskDBHandler, FakeUserDBHandler, _Clock


@pytest.fixture
def security_config() -> SecurityConfig:
    # Lowest bcrypt cost keeps the suite fast
    return SecurityConfig(
        secret_key="test-secret-key",
        algorithm="HS256",
        access_token_expire_minutes=5,
        bcrypt_rounds=4,
    )


@pytest.fixture
def hasher(security_config: SecurityConfig) -> PasswordHasher:
    return PasswordHasher(security_config)


@pytest.fixture
def token_manager(security_config: SecurityConfig) -> TokenManager:
    return TokenManager(security_config)


@pytest.fixture
def clock() -> _Clock:
    return _Clock()


@pytest.fixture
def user_handler(clock: _Clock) -> FakeUserDBHandler:
    return FakeUserDBHandler(clock)


@pytest.fixture
def task_handler(clock: _Clock) -> FakeTaskDBHandler:
    return FakeTaskDBHandler(clock)


@pytest.fixture
def auth_service(hasher, token_manager, user_handler) -> AuthService:
    return AuthService(hasher, token_manager, user_handler=user_handler)


@pytest.fixture
def user_service(hasher, user_handler) -> UserService:
    return UserService(hasher, user_handler=user_handler)


@pytest.fixture
def task_service(task_handler) -> TaskService:
    return TaskService(task_handler=task_handler)


@pytest.fixture
def stats_service(user_handler, task_handler) -> StatsService:
    return StatsService(user_handler=user_handler, task_handler=task_handler)


@pytest.fixture
def app(
    security_config, auth_service, user_service, task_service, stats_service
) -> FastAPI:
    """
    Create a new application instance wired to the in-memory services.
    """
    from app.db import get_app_db
    from app.dependencies.services import (
        get_auth_service,
        get_security_config,
        get_stats_service,
        get_task_service,
        get_user_service,
    )
    from main import create_app

    async def no_db() -> AsyncGenerator[None, None]:
        yield None

    app_ = create_app()
    app_.dependency_overrides[get_app_db] = no_db
    app_.dependency_overrides[get_security_config] = lambda: security_config
    app_.dependency_overrides[get_auth_service] = lambda: auth_service
    app_.dependency_overrides[get_user_service] = lambda: user_service
    app_.dependency_overrides[get_task_service] = lambda: task_service
    app_.dependency_overrides[get_stats_service] = lambda: stats_service
    return app_


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """
    Test client for making API requests.

    Not used as a context manager, so the lifespan (which connects to the
    database) never runs.
    """
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def register_and_login(client: TestClient) -> Callable[..., dict[str, str]]:
    """Register a user over HTTP and return ready-to-use auth headers."""

    def _register_and_login(
        email: str, password: str = "password123", name: str = "Test User"
    ) -> dict[str, str]:
        response = client.post(
            "/api/users", json={"name": name, "email": email, "password": password}
        )
        assert response.status_code == 201, response.text
        response = client.post(
            "/api/auth/login", json={"email": email, "password": password}
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _register_and_login
