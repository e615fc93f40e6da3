import uuid
from datetime import datetime
from sqlmodel import SQLModel, Field


class ItemBase(SQLModel):
    title: str = Field(max_length=200)
    description: str = ""
    category: str = Field(index=True, max_length=50)
    is_available: bool = Field(default=True, index=True)


class Item(ItemBase, table=True):
    __tablename__ = "items"  # type: ignore[assignment]

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: uuid.UUID = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    created_at: datetime = Field(default_factory=datetime.now, index=True)


class ItemPublic(ItemBase):
    id: uuid.UUID
    user_id: uuid.UUID
    created_at: datetime


class ItemWithStats(ItemPublic):
    """Item row as listed in the admin console, with engagement counters."""

    view_count: int = 0
    favorite_count: int = 0


class ItemAvailabilityUpdate(SQLModel):
    is_available: bool
