"""Item moderation router."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from opencycle_admin.core.dependencies import get_current_admin, get_request_context
from opencycle_admin.database.database import get_session
from opencycle_admin.models.admin_log import RequestContext
from opencycle_admin.models.enums import AdminAction, AdminTargetType
from opencycle_admin.models.item import ItemAvailabilityUpdate, ItemPublic, ItemWithStats
from opencycle_admin.models.user import User
from opencycle_admin.services import admin_log as admin_log_service
from opencycle_admin.services import item as item_service

router = APIRouter(
    prefix="/admin/items",
    tags=["items"],
    dependencies=[Depends(get_current_admin)],
)


@router.get("/", response_model=list[ItemWithStats])
def read_items(
    *,
    session: Annotated[Session, Depends(get_session)],
    category: str | None = Query(None, description="Only items in this category"),
    is_available: bool | None = Query(None, description="Filter on availability"),
    search: str | None = Query(None, description="Match in title or description"),
    offset: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
) -> list[ItemWithStats]:
    """
    List items with their view and favorite counts, newest first.

    ### Query Parameters:
    - **category**: Exact category name
    - **is_available**: `true` for listed items, `false` for withdrawn ones
    - **search**: Case-insensitive match on title or description
    - **offset** / **limit**: Pagination (limit 1-500, default 100)
    """
    return item_service.list_items(
        session,
        category=category,
        is_available=is_available,
        search=search,
        offset=offset,
        limit=limit,
    )


@router.patch("/{item_id}/availability", response_model=ItemPublic)
def update_item_availability(
    *,
    session: Annotated[Session, Depends(get_session)],
    current_admin: Annotated[User, Depends(get_current_admin)],
    context: Annotated[RequestContext, Depends(get_request_context)],
    item_id: uuid.UUID,
    availability: ItemAvailabilityUpdate,
) -> ItemPublic:
    """
    List or withdraw an item.

    The change is recorded in the admin log.

    Raises:
        `404 NotFoundError`: If the item doesn't exist.
    """
    item = ItemPublic.model_validate(
        item_service.set_item_availability(
            session, item_id, availability.is_available
        )
    )
    admin_log_service.record_admin_action(
        session,
        current_admin.id,
        AdminAction.ITEM_AVAILABILITY_CHANGED,
        AdminTargetType.ITEM,
        item.id,
        {"is_available": item.is_available, "title": item.title},
        context,
    )
    return item


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(
    *,
    session: Annotated[Session, Depends(get_session)],
    current_admin: Annotated[User, Depends(get_current_admin)],
    context: Annotated[RequestContext, Depends(get_request_context)],
    item_id: uuid.UUID,
) -> None:
    """
    Delete an item permanently.

    The deletion is recorded in the admin log with the item's title and owner.

    Raises:
        `404 NotFoundError`: If the item doesn't exist.
    """
    deleted = item_service.delete_item(session, item_id)
    admin_log_service.record_admin_action(
        session,
        current_admin.id,
        AdminAction.ITEM_DELETED,
        AdminTargetType.ITEM,
        deleted.id,
        {"title": deleted.title, "owner_id": str(deleted.user_id)},
        context,
    )
