"""Shared service layer utilities."""

import uuid
from typing import TypeVar, Type
from sqlalchemy import Subquery
from sqlmodel import Session, select, func

from opencycle_admin.exceptions.crud import NotFoundError
from opencycle_admin.models.engagement import Favorite, ItemView

T = TypeVar("T")


def get_or_404(
    session: Session,
    model_class: Type[T],
    entity_id: uuid.UUID,
    entity_name: str | None = None,
) -> T:
    """
    Retrieve an entity by primary key or raise NotFoundError.

    Uses session.get(), which checks the identity map before querying the database.

    Raises:
        NotFoundError: If entity doesn't exist.

    Example:
        item = get_or_404(session, Item, item_id, "Item")
    """
    entity = session.get(model_class, entity_id)
    if not entity:
        name = entity_name or model_class.__name__
        raise NotFoundError(name, entity_id)
    return entity


def item_view_counts() -> Subquery:
    """Per-item view totals, as a subquery with columns `item_id` and `views`."""
    return (
        select(ItemView.item_id, func.count().label("views"))
        .group_by(ItemView.item_id)
        .subquery()
    )


def item_favorite_counts() -> Subquery:
    """Per-item favorite totals, as a subquery with columns `item_id` and `favorites`."""
    return (
        select(Favorite.item_id, func.count().label("favorites"))
        .group_by(Favorite.item_id)
        .subquery()
    )
