import uuid
from datetime import datetime
from sqlmodel import SQLModel, Field


class UserBase(SQLModel):
    email: str = Field(unique=True, index=True)
    full_name: str | None = Field(default=None, max_length=100)


class User(UserBase, table=True):
    __tablename__ = "users"  # type: ignore[assignment]

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    created_at: datetime = Field(default_factory=datetime.now, index=True)


class UserPublic(UserBase):
    id: uuid.UUID
    created_at: datetime


class UserWithStats(UserPublic):
    """User row as listed in the admin console."""

    item_count: int = 0
