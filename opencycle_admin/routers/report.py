"""Report review router."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from opencycle_admin.core.dependencies import get_current_admin, get_request_context
from opencycle_admin.database.database import get_session
from opencycle_admin.models.admin_log import RequestContext
from opencycle_admin.models.enums import AdminAction, AdminTargetType, ReportStatus
from opencycle_admin.models.report import ReportPublic, ReportUpdate
from opencycle_admin.models.user import User
from opencycle_admin.services import admin_log as admin_log_service
from opencycle_admin.services import report as report_service

router = APIRouter(
    prefix="/admin/reports",
    tags=["reports"],
    dependencies=[Depends(get_current_admin)],
)


@router.get("/", response_model=list[ReportPublic])
def read_reports(
    *,
    session: Annotated[Session, Depends(get_session)],
    status: ReportStatus | None = Query(None, description="Only reports in this status"),
    offset: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
) -> list[ReportPublic]:
    """
    List reports, newest first.

    ### Query Parameters:
    - **status**: `pending`, `reviewed`, `resolved` or `dismissed`
    - **offset** / **limit**: Pagination (limit 1-500, default 100)
    """
    reports = report_service.list_reports(
        session, status=status, offset=offset, limit=limit
    )
    return [ReportPublic.model_validate(r) for r in reports]


@router.get("/{report_id}", response_model=ReportPublic)
def read_report(
    session: Annotated[Session, Depends(get_session)],
    report_id: uuid.UUID,
) -> ReportPublic:
    return ReportPublic.model_validate(report_service.get_report(session, report_id))


@router.patch("/{report_id}", response_model=ReportPublic)
def review_report(
    *,
    session: Annotated[Session, Depends(get_session)],
    current_admin: Annotated[User, Depends(get_current_admin)],
    context: Annotated[RequestContext, Depends(get_request_context)],
    report_id: uuid.UUID,
    report_update: ReportUpdate,
) -> ReportPublic:
    """
    Set a report's status and admin notes.

    ## Example Request

    ```json
    {"status": "resolved", "admin_notes": "Item removed, owner warned."}
    ```

    The review is recorded in the admin log with the previous and new status.

    Raises:
        `404 NotFoundError`: If the report doesn't exist.
        `422 Unprocessable Content`: If the status is not one of the known values.
    """
    previous_status = report_service.get_report(session, report_id).status
    report = ReportPublic.model_validate(
        report_service.update_report_status(session, report_id, report_update)
    )
    admin_log_service.record_admin_action(
        session,
        current_admin.id,
        AdminAction.REPORT_STATUS_CHANGED,
        AdminTargetType.REPORT,
        report.id,
        {
            "previous_status": previous_status.value,
            "status": report.status.value,
            "admin_notes": report.admin_notes,
        },
        context,
    )
    return report
