"""Engagement tables: item views, favorites and messages."""

import uuid
from datetime import datetime
from sqlmodel import SQLModel, Field


class ItemView(SQLModel, table=True):
    """One view of an item; `user_id` is empty for anonymous visitors."""

    __tablename__ = "item_views"  # type: ignore[assignment]

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    item_id: uuid.UUID = Field(foreign_key="items.id", ondelete="CASCADE", index=True)
    user_id: uuid.UUID | None = Field(
        default=None, foreign_key="users.id", ondelete="SET NULL", index=True
    )
    created_at: datetime = Field(default_factory=datetime.now, index=True)


class Favorite(SQLModel, table=True):
    __tablename__ = "favorites"  # type: ignore[assignment]

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: uuid.UUID = Field(foreign_key="users.id", ondelete="CASCADE")
    item_id: uuid.UUID = Field(foreign_key="items.id", ondelete="CASCADE", index=True)
    created_at: datetime = Field(default_factory=datetime.now)


class Message(SQLModel, table=True):
    __tablename__ = "messages"  # type: ignore[assignment]

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    sender_id: uuid.UUID = Field(foreign_key="users.id", ondelete="CASCADE")
    receiver_id: uuid.UUID = Field(foreign_key="users.id", ondelete="CASCADE")
    item_id: uuid.UUID | None = Field(
        default=None, foreign_key="items.id", ondelete="SET NULL"
    )
    content: str
    created_at: datetime = Field(default_factory=datetime.now)
