"""Item moderation service."""

import uuid
from sqlmodel import Session, select, func, col, or_

from opencycle_admin.models.item import Item, ItemPublic, ItemWithStats
from opencycle_admin.services.utils import (
    get_or_404,
    item_favorite_counts,
    item_view_counts,
)


def list_items(
    session: Session,
    *,
    category: str | None = None,
    is_available: bool | None = None,
    search: str | None = None,
    offset: int = 0,
    limit: int = 100,
) -> list[ItemWithStats]:
    """
    Retrieve items with their view and favorite totals, newest first.

    Parameters:
        category: Only items in this category.
        is_available: Only available (True) or withdrawn (False) items.
        search: Case-insensitive match on title or description.
        offset: Number of records to skip.
        limit: Maximum number of records to return.
    """
    views = item_view_counts()
    favorites = item_favorite_counts()
    statement = (
        select(
            Item,
            func.coalesce(views.c.views, 0),
            func.coalesce(favorites.c.favorites, 0),
        )
        .outerjoin(views, views.c.item_id == Item.id)
        .outerjoin(favorites, favorites.c.item_id == Item.id)
    )
    if category:
        statement = statement.where(Item.category == category)
    if is_available is not None:
        statement = statement.where(Item.is_available == is_available)
    if search:
        pattern = f"%{search}%"
        statement = statement.where(
            or_(col(Item.title).ilike(pattern), col(Item.description).ilike(pattern))
        )
    statement = (
        statement.order_by(col(Item.created_at).desc()).offset(offset).limit(limit)
    )

    return [
        ItemWithStats.model_validate(
            item, update={"view_count": view_count, "favorite_count": favorite_count}
        )
        for item, view_count, favorite_count in session.exec(statement).all()
    ]


def set_item_availability(
    session: Session, item_id: uuid.UUID, is_available: bool
) -> Item:
    """
    Mark an item as available or withdrawn.

    Raises:
        NotFoundError: If the item doesn't exist.
    """
    item = get_or_404(session, Item, item_id, "Item")
    item.is_available = is_available
    session.add(item)
    session.commit()
    session.refresh(item)
    return item


def delete_item(session: Session, item_id: uuid.UUID) -> ItemPublic:
    """
    Delete an item.

    Returns:
        ItemPublic: Copy of the deleted item, taken before deletion.

    Raises:
        NotFoundError: If the item doesn't exist.
    """
    item = get_or_404(session, Item, item_id, "Item")
    deleted = ItemPublic.model_validate(item)
    session.delete(item)
    session.commit()
    return deleted
