import uuid
from datetime import datetime
from typing import Any
from sqlalchemy import JSON, Column
from sqlmodel import SQLModel, Field


class AdminSetting(SQLModel, table=True):
    """Platform configuration entry; `value` holds any JSON value."""

    __tablename__ = "admin_settings"  # type: ignore[assignment]

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    key: str = Field(unique=True, index=True, max_length=100)
    value: Any = Field(sa_column=Column(JSON, nullable=False))
    description: str | None = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class AdminSettingPublic(SQLModel):
    key: str
    value: Any
    description: str | None
    updated_at: datetime


class AdminSettingUpdate(SQLModel):
    value: Any
