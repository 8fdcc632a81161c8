# Authentication service: credential checks, token issuance and token resolution

import asyncio
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from app.db_handlers import UserDBHandler
from app.exceptions import InvalidCredentialsError, UnauthenticatedError
from app.schemas import AuthenticatedIdentity, Token
from app.utils.auth import PasswordHasher, TokenManager
from app.utils.logger import setup_logger

logger = setup_logger(__name__)


class AuthService:
    """
    Trust boundary of the service.

    Unknown emails and wrong passwords fail with the same
    InvalidCredentialsError after the same amount of bcrypt work. Only the
    user's id and email ever leave this class.
    """

    def __init__(
        self,
        hasher: PasswordHasher,
        tokens: TokenManager,
        user_handler: UserDBHandler | None = None,
    ):
        self.hasher = hasher
        self.tokens = tokens
        self.user_handler = user_handler or UserDBHandler()

    async def authenticate(
        self, email: str, password: str, *, db: AsyncSession = None
    ) -> AuthenticatedIdentity:
        user = await self.user_handler.get_user_by_email(email, db=db)

        if user is None:
            await asyncio.to_thread(self.hasher.verify_dummy, password)
            logger.info("Login rejected: invalid credentials")
            raise InvalidCredentialsError()

        if not await asyncio.to_thread(
            self.hasher.verify, password, user.hashed_password
        ):
            logger.info("Login rejected: invalid credentials")
            raise InvalidCredentialsError()

        return AuthenticatedIdentity(id=user.id, email=user.email)

    def issue_token(self, identity: AuthenticatedIdentity) -> str:
        return self.tokens.sign({"sub": str(identity.id), "email": identity.email})

    async def login(
        self, email: str, password: str, *, db: AsyncSession = None
    ) -> Token:
        identity = await self.authenticate(email, password, db=db)
        logger.info(f"User {identity.id} logged in")
        return Token(access_token=self.issue_token(identity), token_type="bearer")

    async def resolve_identity(
        self, token: str, *, db: AsyncSession = None
    ) -> AuthenticatedIdentity:
        """Verify a bearer token and make sure its subject still exists."""
        claims = self.tokens.verify(token)
        try:
            user_id = uuid.UUID(claims.subject)
        except ValueError as e:
            raise UnauthenticatedError() from e

        user = await self.user_handler.get(user_id, db=db)
        if user is None:
            raise UnauthenticatedError()

        return AuthenticatedIdentity(id=user.id, email=user.email)
