"""Platform configuration service over the `admin_settings` table.

Values are JSON. Every known key declares its type, and writes are validated
against it before they reach the table. The service stores settings; enforcing
them is up to whoever reads them.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Annotated, Any

from loguru import logger
from pydantic import StrictBool, StringConstraints, TypeAdapter, Field
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select, col

from opencycle_admin.exceptions import NotFoundError, ValidationError
from opencycle_admin.models.admin_setting import AdminSetting

SiteText = Annotated[str, StringConstraints(strict=True, max_length=200)]
NonEmptyText = Annotated[
    str, StringConstraints(strict=True, min_length=1, max_length=100)
]
ContactEmail = Annotated[
    str, StringConstraints(strict=True, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
]
PositiveInt = Annotated[int, Field(strict=True, ge=1)]


@dataclass(frozen=True)
class SettingDefinition:
    default: Any
    description: str
    adapter: TypeAdapter


SETTING_DEFINITIONS: dict[str, SettingDefinition] = {
    "site_name": SettingDefinition(
        "OpenCycle", "Name of the platform", TypeAdapter(NonEmptyText)
    ),
    "site_description": SettingDefinition(
        "Community Item Sharing Platform",
        "Platform description",
        TypeAdapter(SiteText),
    ),
    "contact_email": SettingDefinition(
        "admin@opencycle.com",
        "Contact email for the platform",
        TypeAdapter(ContactEmail),
    ),
    "allow_registration": SettingDefinition(
        True, "Allow new user registrations", TypeAdapter(StrictBool)
    ),
    "require_email_verification": SettingDefinition(
        False, "Require email verification for new users", TypeAdapter(StrictBool)
    ),
    "moderation_enabled": SettingDefinition(
        True, "Enable content moderation", TypeAdapter(StrictBool)
    ),
    "auto_approve_items": SettingDefinition(
        True, "Automatically approve new items", TypeAdapter(StrictBool)
    ),
    "max_items_per_user": SettingDefinition(
        50, "Maximum items per user", TypeAdapter(PositiveInt)
    ),
    "max_image_size": SettingDefinition(
        5, "Maximum image size in MB", TypeAdapter(PositiveInt)
    ),
    "enable_notifications": SettingDefinition(
        True, "Enable email notifications", TypeAdapter(StrictBool)
    ),
    "maintenance_mode": SettingDefinition(
        False, "Enable maintenance mode", TypeAdapter(StrictBool)
    ),
}


def _get_row(session: Session, key: str) -> AdminSetting | None:
    return session.exec(select(AdminSetting).where(AdminSetting.key == key)).first()


def validate_setting(key: str, value: Any) -> Any:
    """
    Check a value against the declared type of a setting.

    Returns:
        The validated value.

    Raises:
        NotFoundError: If `key` is not a known setting.
        ValidationError: If `value` does not fit the setting's type; `field` is the key.
    """
    definition = SETTING_DEFINITIONS.get(key)
    if definition is None:
        raise NotFoundError("Setting", key)
    try:
        return definition.adapter.validate_python(value)
    except PydanticValidationError as e:
        reason = e.errors()[0]["msg"] if e.errors() else "invalid value"
        raise ValidationError(f"Invalid value for setting '{key}': {reason}", field=key)


def get_setting(session: Session, key: str) -> Any:
    """
    Read one setting value.

    A known key that was never stored yields its default.

    Raises:
        NotFoundError: If the key is neither stored nor known.
    """
    row = _get_row(session, key)
    if row is not None:
        return row.value
    definition = SETTING_DEFINITIONS.get(key)
    if definition is None:
        raise NotFoundError("Setting", key)
    return definition.default


def get_all_settings(session: Session) -> dict[str, Any]:
    """
    Read every setting as a key -> value mapping, defaults filled in for keys never stored.
    """
    values = {key: definition.default for key, definition in SETTING_DEFINITIONS.items()}
    for row in session.exec(select(AdminSetting)).all():
        values[row.key] = row.value
    return values


def list_settings(session: Session) -> list[AdminSetting]:
    """
    Retrieve the stored setting rows with their descriptions, ordered by key.
    """
    statement = select(AdminSetting).order_by(col(AdminSetting.key))
    return list(session.exec(statement).all())


def set_setting(session: Session, key: str, value: Any) -> AdminSetting:
    """
    Validate and store a setting value.

    Creates the row when the key was never stored, otherwise replaces its value and refreshes
    `updated_at`.

    Raises:
        NotFoundError: If `key` is not a known setting.
        ValidationError: If `value` does not fit the setting's type.
    """
    validated = validate_setting(key, value)

    row = _get_row(session, key)
    if row is None:
        row = AdminSetting(
            key=key,
            value=validated,
            description=SETTING_DEFINITIONS[key].description,
        )
    else:
        row.value = validated
        row.updated_at = datetime.now()

    session.add(row)
    session.commit()
    session.refresh(row)
    return row


def init_settings(session: Session) -> int:
    """
    Insert the default settings, leaving keys that already exist untouched.

    Idempotent and safe to run on every startup.

    Returns:
        int: Number of settings created.
    """
    existing = set(session.exec(select(AdminSetting.key)).all())

    created_count = 0
    for key, definition in SETTING_DEFINITIONS.items():
        if key in existing:
            continue
        session.add(
            AdminSetting(
                key=key, value=definition.default, description=definition.description
            )
        )
        created_count += 1

    if created_count == 0:
        logger.info("All default settings already exist")
        return 0

    try:
        session.commit()
    except IntegrityError:
        # Another process inserted some of the keys first; theirs stand
        session.rollback()
        logger.warning("Default settings were initialized concurrently, skipping")
        return 0

    logger.info(f"Created {created_count} default settings")
    return created_count
