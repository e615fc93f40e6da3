"""Analytics and statistics models for the admin dashboard."""

import uuid
import datetime as dt
from typing import Any, Literal
from sqlmodel import SQLModel


class PlatformSnapshot(SQLModel):
    """Platform-wide counters, each read independently."""

    total_users: int
    total_items: int
    total_views: int
    total_favorites: int
    total_messages: int
    total_reports: int
    active_users_today: int
    new_users_today: int
    new_items_today: int
    pending_reports: int


class GrowthPoint(SQLModel):
    """One day of a growth series."""

    date: dt.date
    new_count: int
    cumulative_count: int


class CategoryShare(SQLModel):
    """Share of available items in one category."""

    category: str
    item_count: int
    percentage: float


class ReportStats(SQLModel):
    """Report counts by status."""

    pending: int
    reviewed: int
    resolved: int
    dismissed: int


class TopItem(SQLModel):
    id: uuid.UUID
    title: str
    views: int
    favorites: int


class TopUser(SQLModel):
    id: uuid.UUID
    name: str
    items: int
    views: int


class ActivityEntry(SQLModel):
    """Entry of the recent activity feed."""

    id: str  # Format: "<type>-<uuid>"
    type: Literal["user", "item", "report"]
    title: str
    description: str
    timestamp: dt.datetime
    status: str | None = None


class MetricResult(SQLModel):
    """Outcome of a single dashboard metric."""

    status: Literal["ok", "unavailable"]
    data: Any = None
    error: str | None = None
