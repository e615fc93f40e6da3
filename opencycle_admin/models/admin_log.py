"""Admin audit log model. Rows are written once and never updated."""

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any
from sqlalchemy import JSON, Column
from sqlmodel import SQLModel, Field


class AdminLogBase(SQLModel):
    admin_id: uuid.UUID | None = Field(
        default=None, foreign_key="users.id", ondelete="SET NULL", index=True
    )
    action: str = Field(index=True, max_length=100)
    target_type: str | None = Field(default=None, max_length=50)
    target_id: uuid.UUID | None = None
    details: dict[str, Any] | None = Field(default=None, sa_column=Column(JSON))
    ip_address: str | None = Field(default=None, max_length=45)
    user_agent: str | None = None


class AdminLog(AdminLogBase, table=True):
    __tablename__ = "admin_logs"  # type: ignore[assignment]

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    created_at: datetime = Field(default_factory=datetime.now, index=True)


class AdminLogPublic(AdminLogBase):
    id: uuid.UUID
    created_at: datetime


@dataclass(frozen=True)
class RequestContext:
    """Request metadata recorded alongside admin actions."""

    ip_address: str | None = None
    user_agent: str | None = None
