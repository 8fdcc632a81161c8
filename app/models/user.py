"""
User model for authentication and task ownership.

Architecture:
    User → Task

Key Features:
    - bcrypt password hash that no read path returns
    - Case-insensitive unique email (stored lower-cased)
    - Automatic timestamp tracking
"""

from sqlalchemy import Column, Index, String
from sqlalchemy.orm import relationship, validates

from app.models.base import SCHEMA_NAME, Base, TimestampMixin, UUIDMixin


class User(Base, UUIDMixin, TimestampMixin):
    """
    Registered account that owns tasks.

    Users are created by registration and only mutated through profile
    updates (name and email). They are never deleted by the API.
    """

    __tablename__ = "users"
    __table_args__ = (
        Index("ix_users_email", "email", unique=True),
        {"schema": SCHEMA_NAME},
    )

    email = Column(
        String(255),
        nullable=False,
        comment="Unique, lower-cased email used for login",
    )

    name = Column(
        String(100),
        nullable=False,
        comment="Display name",
    )

    hashed_password = Column(
        String(255),
        nullable=False,
        comment="bcrypt hash of the user's password",
    )

    tasks = relationship(
        "Task",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
        doc="Tasks owned by this user",
    )

    @validates("email")
    def normalize_email(self, key, value):
        return value.strip().lower() if value else value

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}')>"
