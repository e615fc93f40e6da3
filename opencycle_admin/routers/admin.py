"""Admin log and data export router."""

import uuid
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from opencycle_admin.core.dependencies import get_current_admin, get_request_context
from opencycle_admin.database.database import get_session
from opencycle_admin.models.admin_log import AdminLogPublic, RequestContext
from opencycle_admin.models.enums import AdminAction, AdminTargetType
from opencycle_admin.models.user import User
from opencycle_admin.services import admin_log as admin_log_service
from opencycle_admin.services import export as export_service

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(get_current_admin)],
)


@router.get("/logs", response_model=list[AdminLogPublic])
def read_admin_logs(
    *,
    session: Annotated[Session, Depends(get_session)],
    action: AdminAction | None = Query(None),
    target_type: AdminTargetType | None = Query(None),
    admin_id: uuid.UUID | None = Query(None),
    offset: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
) -> list[AdminLogPublic]:
    """
    Browse the admin log, newest first.

    ### Query Parameters:
    - **action**: Only entries for this action, e.g. `item_deleted`
    - **target_type**: `user`, `item`, `report` or `setting`
    - **admin_id**: Only entries written by this administrator
    - **offset** / **limit**: Pagination (limit 1-500, default 100)
    """
    logs = admin_log_service.list_admin_logs(
        session,
        action=action.value if action else None,
        target_type=target_type.value if target_type else None,
        admin_id=admin_id,
        offset=offset,
        limit=limit,
    )
    return [AdminLogPublic.model_validate(entry) for entry in logs]


@router.get("/export", response_model=dict[str, Any])
def export_data(
    *,
    session: Annotated[Session, Depends(get_session)],
    current_admin: Annotated[User, Depends(get_current_admin)],
    context: Annotated[RequestContext, Depends(get_request_context)],
) -> dict[str, Any]:
    """
    Export all users and items as JSON.

    The export itself is recorded in the admin log with the number of rows it contained.
    """
    data = export_service.export_platform_data(session)
    admin_log_service.record_admin_action(
        session,
        current_admin.id,
        AdminAction.DATA_EXPORTED,
        details={"users": len(data["users"]), "items": len(data["items"])},
        context=context,
    )
    return data
