"""User management router."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from opencycle_admin.core.dependencies import get_current_admin, get_request_context
from opencycle_admin.database.database import get_session
from opencycle_admin.exceptions import ValidationError
from opencycle_admin.models.admin_log import RequestContext
from opencycle_admin.models.enums import AdminAction, AdminTargetType
from opencycle_admin.models.user import User, UserPublic, UserWithStats
from opencycle_admin.services import admin_log as admin_log_service
from opencycle_admin.services import user as user_service
from opencycle_admin.utils.validation import mask_email

router = APIRouter(
    prefix="/admin/users",
    tags=["users"],
    dependencies=[Depends(get_current_admin)],
)


@router.get("/", response_model=list[UserWithStats])
def read_users(
    *,
    session: Annotated[Session, Depends(get_session)],
    search: str | None = Query(None, description="Match in email or full name"),
    offset: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
) -> list[UserWithStats]:
    """List users with the number of items each posted, newest first."""
    return user_service.list_users(session, search=search, offset=offset, limit=limit)


@router.get("/{user_id}", response_model=UserPublic)
def read_user(
    session: Annotated[Session, Depends(get_session)],
    user_id: uuid.UUID,
) -> UserPublic:
    return UserPublic.model_validate(user_service.get_user(session, user_id))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    *,
    session: Annotated[Session, Depends(get_session)],
    current_admin: Annotated[User, Depends(get_current_admin)],
    context: Annotated[RequestContext, Depends(get_request_context)],
    user_id: uuid.UUID,
) -> None:
    """
    Delete a user account and, through the database's cascade rules, their content.

    The deletion is recorded in the admin log with the masked email of the account.

    Raises:
        `404 NotFoundError`: If the user doesn't exist.
        `422 ValidationError`: If an administrator tries to delete their own account.
    """
    if user_id == current_admin.id:
        raise ValidationError("You cannot delete your own account", field="user_id")

    deleted = user_service.delete_user(session, user_id)
    admin_log_service.record_admin_action(
        session,
        current_admin.id,
        AdminAction.USER_DELETED,
        AdminTargetType.USER,
        deleted.id,
        {"email": mask_email(deleted.email)},
        context,
    )
