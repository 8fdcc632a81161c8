"""
Base classes and mixins shared by the task manager database models.

Every table lives in the schema configured by ``TASK_MANAGER_SCHEMA`` and
gets a UUID primary key plus database-managed creation and update timestamps.
"""

import uuid

from sqlalchemy import Column, DateTime
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql.functions import now as db_now

from app.config import settings


Base = declarative_base()


class TimestampMixin:
    """created_at / updated_at columns maintained by the database."""

    created_at = Column(
        DateTime(timezone=True),
        server_default=db_now(),
        nullable=False,
        comment="Timestamp when the record was created",
    )
    updated_at = Column(
        DateTime(timezone=True),
        server_default=db_now(),
        onupdate=db_now(),
        nullable=False,
        comment="Timestamp when the record was last updated",
    )


class UUIDMixin:
    """UUID4 primary key generated on the application side."""

    id = Column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        index=True,
        comment="Primary key using UUID4 format",
    )


SCHEMA_NAME = settings.schema_name

__all__ = ["Base", "TimestampMixin", "UUIDMixin", "SCHEMA_NAME"]
