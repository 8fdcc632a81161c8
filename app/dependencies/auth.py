"""
Authentication dependencies for FastAPI route protection.
"""


from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_app_db
from app.dependencies.services import get_auth_service
from app.exceptions import UnauthenticatedError
from app.schemas import AuthenticatedIdentity
from app.services.auth_service import AuthService

# Missing credentials are reported by get_current_user, not by HTTPBearer
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: AsyncSession = Depends(get_app_db),
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthenticatedIdentity:
    """
    Dependency resolving the caller's identity from the bearer token.

    A missing header, a non-bearer scheme, an invalid or expired token and a
    token whose user no longer exists all raise the same UnauthenticatedError.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError()

    return await auth_service.resolve_identity(credentials.credentials, db=db)
