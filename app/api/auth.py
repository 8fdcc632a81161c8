# Authentication API routes for login and identity lookup

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_app_db
from app.dependencies.auth import get_current_user
from app.dependencies.services import get_auth_service
from app.schemas import AuthenticatedIdentity, Token, UserLogin
from app.services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post("/login", response_model=Token)
async def login_user(
    credentials: UserLogin,
    db: AsyncSession = Depends(get_app_db),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Authenticate user and return JWT token for API access."""
    return await auth_service.login(credentials.email, credentials.password, db=db)


@router.get("/me", response_model=AuthenticatedIdentity)
async def get_current_identity(
    current_user: AuthenticatedIdentity = Depends(get_current_user),
):
    """Return the identity carried by the caller's token."""
    return current_user
