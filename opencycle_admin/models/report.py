import uuid
from datetime import datetime
from sqlmodel import SQLModel, Field
from opencycle_admin.models.enums import ReportReason, ReportStatus


class ReportBase(SQLModel):
    reason: ReportReason
    description: str | None = None
    reporter_id: uuid.UUID | None = Field(
        default=None, foreign_key="users.id", ondelete="SET NULL"
    )
    reported_item_id: uuid.UUID | None = Field(
        default=None, foreign_key="items.id", ondelete="CASCADE"
    )
    reported_user_id: uuid.UUID | None = Field(
        default=None, foreign_key="users.id", ondelete="CASCADE"
    )


class Report(ReportBase, table=True):
    __tablename__ = "reports"  # type: ignore[assignment]

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    status: ReportStatus = Field(default=ReportStatus.PENDING, index=True)
    admin_notes: str | None = None
    created_at: datetime = Field(default_factory=datetime.now, index=True)
    updated_at: datetime = Field(default_factory=datetime.now)


class ReportPublic(ReportBase):
    id: uuid.UUID
    status: ReportStatus
    admin_notes: str | None
    created_at: datetime
    updated_at: datetime


class ReportUpdate(SQLModel):
    status: ReportStatus
    admin_notes: str | None = None
