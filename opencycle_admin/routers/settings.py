"""Platform settings router."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends
from sqlmodel import Session

from opencycle_admin.core.dependencies import get_current_admin, get_request_context
from opencycle_admin.database.database import get_session
from opencycle_admin.models.admin_log import RequestContext
from opencycle_admin.models.admin_setting import AdminSettingPublic, AdminSettingUpdate
from opencycle_admin.models.enums import AdminAction, AdminTargetType
from opencycle_admin.models.user import User
from opencycle_admin.services import admin_log as admin_log_service
from opencycle_admin.services import settings as settings_service

router = APIRouter(
    prefix="/admin/settings",
    tags=["settings"],
    dependencies=[Depends(get_current_admin)],
)


@router.get("/", response_model=dict[str, Any])
def read_settings(
    session: Annotated[Session, Depends(get_session)],
) -> dict[str, Any]:
    """
    Get every platform setting as a key -> value mapping.

    Settings never stored are reported with their default.
    """
    return settings_service.get_all_settings(session)


@router.get("/entries", response_model=list[AdminSettingPublic])
def read_setting_entries(
    session: Annotated[Session, Depends(get_session)],
) -> list[AdminSettingPublic]:
    """List the stored setting rows with their descriptions and last update time."""
    return [
        AdminSettingPublic.model_validate(row)
        for row in settings_service.list_settings(session)
    ]


@router.get("/{key}", response_model=dict[str, Any])
def read_setting(
    session: Annotated[Session, Depends(get_session)],
    key: str,
) -> dict[str, Any]:
    """
    Get one setting.

    Raises:
        `404 NotFoundError`: If the key is not a known setting.
    """
    return {"key": key, "value": settings_service.get_setting(session, key)}


@router.put("/{key}", response_model=AdminSettingPublic)
def update_setting(
    *,
    session: Annotated[Session, Depends(get_session)],
    current_admin: Annotated[User, Depends(get_current_admin)],
    context: Annotated[RequestContext, Depends(get_request_context)],
    key: str,
    setting_in: AdminSettingUpdate,
) -> AdminSettingPublic:
    """
    Change a setting.

    ## Example Request

    ```json
    {"value": 25}
    ```

    The value must match the setting's type (for instance a strict boolean for
    `maintenance_mode`, an integer of at least 1 for `max_items_per_user`).

    Raises:
        `404 NotFoundError`: If the key is not a known setting.
        `422 ValidationError`: If the value does not fit the setting; `field` names the key.
    """
    settings_service.validate_setting(key, setting_in.value)
    old_value = settings_service.get_setting(session, key)
    setting = AdminSettingPublic.model_validate(
        settings_service.set_setting(session, key, setting_in.value)
    )
    admin_log_service.record_admin_action(
        session,
        current_admin.id,
        AdminAction.SETTING_UPDATED,
        AdminTargetType.SETTING,
        None,
        {"key": key, "old_value": old_value, "new_value": setting.value},
        context,
    )
    return setting
