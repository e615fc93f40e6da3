from opencycle_admin.models.user import User, UserPublic, UserWithStats
from opencycle_admin.models.item import (
    Item,
    ItemPublic,
    ItemWithStats,
    ItemAvailabilityUpdate,
)
from opencycle_admin.models.engagement import ItemView, Favorite, Message
from opencycle_admin.models.report import Report, ReportPublic, ReportUpdate
from opencycle_admin.models.admin_log import AdminLog, AdminLogPublic
from opencycle_admin.models.admin_setting import (
    AdminSetting,
    AdminSettingPublic,
    AdminSettingUpdate,
)

__all__ = [
    "User",
    "UserPublic",
    "UserWithStats",
    "Item",
    "ItemPublic",
    "ItemWithStats",
    "ItemAvailabilityUpdate",
    "ItemView",
    "Favorite",
    "Message",
    "Report",
    "ReportPublic",
    "ReportUpdate",
    "AdminLog",
    "AdminLogPublic",
    "AdminSetting",
    "AdminSettingPublic",
    "AdminSettingUpdate",
]
