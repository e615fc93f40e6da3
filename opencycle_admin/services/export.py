"""Platform data export."""

from datetime import datetime, timezone
from sqlmodel import Session, select, col

from opencycle_admin.models.item import Item, ItemPublic
from opencycle_admin.models.user import User, UserPublic


def export_platform_data(session: Session) -> dict:
    """
    Dump every user and item as plain JSON-ready dictionaries.

    Returns:
        dict: `{"users": [...], "items": [...], "export_date": "<ISO 8601 UTC>"}`.
    """
    users = session.exec(select(User).order_by(col(User.created_at))).all()
    items = session.exec(select(Item).order_by(col(Item.created_at))).all()
    return {
        "users": [UserPublic.model_validate(u).model_dump(mode="json") for u in users],
        "items": [ItemPublic.model_validate(i).model_dump(mode="json") for i in items],
        "export_date": datetime.now(timezone.utc).isoformat(),
    }
