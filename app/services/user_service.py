# User registration and profile management

import asyncio
import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db_handlers import UserDBHandler
from app.exceptions import DuplicateEmailError, UserNotFoundError
from app.schemas import UserCreatedResponse, UserInfo, UserRegister, UserUpdate
from app.utils.auth import PasswordHasher
from app.utils.logger import setup_logger

logger = setup_logger(__name__)


class UserService:
    def __init__(
        self, hasher: PasswordHasher, user_handler: UserDBHandler | None = None
    ):
        self.hasher = hasher
        self.user_handler = user_handler or UserDBHandler()

    async def register(
        self, data: UserRegister, *, db: AsyncSession = None
    ) -> UserCreatedResponse:
        """Create an account. The email must not belong to any existing user."""
        if await self.user_handler.get_user_by_email(data.email, db=db):
            raise DuplicateEmailError()

        hashed_password = await asyncio.to_thread(self.hasher.hash, data.password)
        try:
            user = await self.user_handler.create(
                {
                    "name": data.name,
                    "email": data.email,
                    "hashed_password": hashed_password,
                },
                db=db,
            )
        except IntegrityError as e:
            # A concurrent registration won the unique index
            raise DuplicateEmailError() from e

        logger.info(f"Registered user {user.id}")
        return UserCreatedResponse.model_validate(user)

    async def get_profile(
        self, user_id: uuid.UUID, *, db: AsyncSession = None
    ) -> UserInfo:
        user = await self.user_handler.get(user_id, db=db)
        if user is None:
            raise UserNotFoundError()
        return UserInfo.model_validate(user)

    async def update_profile(
        self, user_id: uuid.UUID, data: UserUpdate, *, db: AsyncSession = None
    ) -> UserInfo:
        """Change name and/or email. Omitted or null fields are left as they are."""
        user = await self.user_handler.get(user_id, db=db)
        if user is None:
            raise UserNotFoundError()

        changes = {
            field: value
            for field, value in data.model_dump(include=data.model_fields_set).items()
            if value is not None
        }
        if "email" in changes and changes["email"] != user.email:
            existing = await self.user_handler.get_user_by_email(changes["email"], db=db)
            if existing is not None and existing.id != user.id:
                raise DuplicateEmailError()

        if changes:
            try:
                user = await self.user_handler.update(user, changes, db=db)
            except IntegrityError as e:
                raise DuplicateEmailError() from e
            logger.info(f"Updated profile of user {user.id}: {sorted(changes)}")

        return UserInfo.model_validate(user)
