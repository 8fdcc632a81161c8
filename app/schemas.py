from datetime import UTC, date, datetime, time
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.task import TaskPriority, TaskStatus


def normalize_email(value: str) -> str:
    value = value.strip().lower()
    local, sep, domain = value.partition("@")
    if not sep or not local or "." not in domain or " " in value:
        raise ValueError("Invalid email address")
    return value


def parse_due_date(value: Any) -> datetime | None:
    """
    Parse an ISO date or datetime (string or object) to midnight UTC of that day.

    Offset-aware datetimes are converted to UTC before the day is taken; naive
    ones are read as UTC. ``None`` stays ``None``.
    """
    if value is None:
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip())
        except ValueError as e:
            raise ValueError("due_date must be a date in YYYY-MM-DD format") from e
    if isinstance(value, datetime):
        value = value.astimezone(UTC).date() if value.tzinfo else value.date()
    if not isinstance(value, date):
        raise ValueError("due_date must be a date in YYYY-MM-DD format")
    return datetime.combine(value, time.min, tzinfo=UTC)


# ===== Users & authentication =====


class UserRegister(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Display name")
    email: str = Field(..., max_length=255, description="Email used for login")
    password: str = Field(
        ..., min_length=3, max_length=128, description="Password for the new account"
    )

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return normalize_email(v)


class UserLogin(BaseModel):
    email: str = Field(..., description="Email for login")
    password: str = Field(..., description="Password for login")


class UserUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    email: str | None = Field(None, max_length=255)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        return normalize_email(v) if v is not None else None


class Token(BaseModel):
    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")


class AuthenticatedIdentity(BaseModel):
    """The only user data that leaves the authenticator."""

    id: UUID
    email: str

    model_config = ConfigDict(from_attributes=True, frozen=True)


class UserCreatedResponse(BaseModel):
    id: UUID
    email: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserInfo(BaseModel):
    id: UUID = Field(..., description="User unique identifier")
    email: str
    name: str
    created_at: datetime
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class TaskStats(BaseModel):
    total_tasks: int = 0
    completed_tasks: int = 0
    in_progress_tasks: int = 0
    pending_tasks: int = 0
    completed_percentage: float = 0


class UserStatsResponse(UserInfo):
    stats: TaskStats


# ===== Tasks =====


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: datetime | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("title must not be blank")
        return v

    @field_validator("due_date", mode="before")
    @classmethod
    def validate_due_date(cls, v: Any) -> datetime | None:
        return parse_due_date(v)


class TaskUpdate(BaseModel):
    """
    Partial update. Only fields present in the request body are applied.

    Sending ``null`` clears ``description`` or ``due_date``; ``title``,
    ``status`` and ``priority`` cannot be cleared.
    """

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: datetime | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str:
        if v is None or not v.strip():
            raise ValueError("title must not be blank")
        return v

    @field_validator("status", "priority")
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("field cannot be null")
        return v

    @field_validator("due_date", mode="before")
    @classmethod
    def validate_due_date(cls, v: Any) -> datetime | None:
        return parse_due_date(v)

    def changes(self) -> dict[str, Any]:
        """The fields the caller actually supplied."""
        return self.model_dump(include=self.model_fields_set)


class TaskSummary(BaseModel):
    id: UUID
    title: str
    description: str | None = None

    model_config = ConfigDict(from_attributes=True)


class TaskResponse(BaseModel):
    id: UUID
    title: str
    description: str | None = None
    status: TaskStatus
    priority: TaskPriority
    due_date: datetime | None = None
    owner_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
