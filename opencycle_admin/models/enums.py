from enum import Enum


class ReportStatus(str, Enum):
    PENDING = "pending"
    REVIEWED = "reviewed"
    RESOLVED = "resolved"
    DISMISSED = "dismissed"


class ReportReason(str, Enum):
    INAPPROPRIATE = "inappropriate"
    SPAM = "spam"
    FAKE = "fake"
    SCAM = "scam"
    OTHER = "other"


class AdminTargetType(str, Enum):
    USER = "user"
    ITEM = "item"
    REPORT = "report"
    SETTING = "setting"


class AdminAction(str, Enum):
    """Action names written to the admin log by the admin API."""

    ITEM_AVAILABILITY_CHANGED = "item_availability_changed"
    ITEM_DELETED = "item_deleted"
    REPORT_STATUS_CHANGED = "report_status_changed"
    USER_DELETED = "user_deleted"
    SETTING_UPDATED = "setting_updated"
    DATA_EXPORTED = "data_exported"
