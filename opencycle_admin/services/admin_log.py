"""Admin audit log service.

The log is append-only: this module offers a write and reads, and nothing that
updates or deletes a row. Writing never raises into the caller, since a failed
audit entry must not undo or block the moderation action it describes.
"""

import uuid
from enum import Enum
from typing import Any
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select, col

from opencycle_admin.models.admin_log import AdminLog, RequestContext
from opencycle_admin.utils.validation import coerce_uuid


def record_admin_action(
    session: Session,
    admin_id: uuid.UUID | None,
    action: str,
    target_type: str | None = None,
    target_id: Any = None,
    details: dict[str, Any] | None = None,
    context: RequestContext | None = None,
) -> AdminLog | None:
    """
    Append one entry to the admin log.

    The caller's own changes must already be committed: a failure here rolls the session back.
    A `target_id` that is not a UUID is stored as null, and its raw value is kept in
    `details["raw_target_id"]` so the entry stays complete. The insert is attempted once.

    Parameters:
        session (Session): Database session.
        admin_id (uuid.UUID | None): The acting administrator.
        action (str): Action name, see `AdminAction`.
        target_type (str | None): Kind of record acted on, see `AdminTargetType`.
        target_id (Any): Identifier of the record acted on.
        details (dict | None): Structured payload describing the action; not mutated.
        context (RequestContext | None): Originating address and client agent, when known.

    Returns:
        AdminLog | None: The stored entry, or None if it could not be written.
    """
    if isinstance(action, Enum):
        action = action.value
    if isinstance(target_type, Enum):
        target_type = target_type.value

    parsed_target_id = coerce_uuid(target_id)
    entry_details = dict(details) if details else None
    if target_id is not None and parsed_target_id is None:
        entry_details = {**(entry_details or {}), "raw_target_id": str(target_id)}

    context = context or RequestContext()
    entry = AdminLog(
        admin_id=admin_id,
        action=action,
        target_type=target_type,
        target_id=parsed_target_id,
        details=entry_details,
        ip_address=context.ip_address,
        user_agent=context.user_agent,
    )

    try:
        session.add(entry)
        session.commit()
        session.refresh(entry)
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(
            f"Failed to record admin action '{action}' on {target_type}:{target_id}: {e}"
        )
        return None

    logger.info(f"Admin action '{action}' recorded on {target_type}:{parsed_target_id}")
    return entry


def list_admin_logs(
    session: Session,
    *,
    action: str | None = None,
    target_type: str | None = None,
    admin_id: uuid.UUID | None = None,
    offset: int = 0,
    limit: int = 100,
) -> list[AdminLog]:
    """
    Retrieve admin log entries, newest first, optionally filtered.
    """
    statement = select(AdminLog)
    if action:
        statement = statement.where(AdminLog.action == action)
    if target_type:
        statement = statement.where(AdminLog.target_type == target_type)
    if admin_id:
        statement = statement.where(AdminLog.admin_id == admin_id)
    statement = (
        statement.order_by(col(AdminLog.created_at).desc()).offset(offset).limit(limit)
    )
    return list(session.exec(statement).all())
