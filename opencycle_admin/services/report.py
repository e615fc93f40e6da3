"""Report review service."""

import uuid
from datetime import datetime
from sqlmodel import Session, select, col

from opencycle_admin.models.enums import ReportStatus
from opencycle_admin.models.report import Report, ReportUpdate
from opencycle_admin.services.utils import get_or_404


def list_reports(
    session: Session,
    *,
    status: ReportStatus | None = None,
    offset: int = 0,
    limit: int = 100,
) -> list[Report]:
    """
    Retrieve reports, newest first.

    Parameters:
        session: Database session.
        status: Only reports in this status.
        offset: Number of records to skip.
        limit: Maximum number of records to return.

    Returns:
        list[Report]: Matching reports.
    """
    statement = select(Report)
    if status is not None:
        statement = statement.where(Report.status == status)
    statement = (
        statement.order_by(col(Report.created_at).desc()).offset(offset).limit(limit)
    )
    return list(session.exec(statement).all())


def get_report(session: Session, report_id: uuid.UUID) -> Report:
    """
    Retrieve a report by ID.

    Raises:
        NotFoundError: If the report doesn't exist.
    """
    return get_or_404(session, Report, report_id, "Report")


def update_report_status(
    session: Session, report_id: uuid.UUID, report_update: ReportUpdate
) -> Report:
    """
    Record an administrator's review of a report.

    Sets the new status and admin notes, and refreshes `updated_at`. Notes left out of the
    update are cleared, matching the review form which always submits its notes field.

    Raises:
        NotFoundError: If the report doesn't exist.
    """
    report = get_report(session, report_id)
    report.status = report_update.status
    report.admin_notes = (report_update.admin_notes or "").strip() or None
    report.updated_at = datetime.now()
    session.add(report)
    session.commit()
    session.refresh(report)
    return report
