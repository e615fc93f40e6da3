from sqlmodel import Session
from loguru import logger

from opencycle_admin.core.config import get_settings
from opencycle_admin.services import settings as settings_service
from opencycle_admin.services import user as user_service


def init_db(session: Session) -> None:
    """
    Seed the data the admin console needs on a fresh database.

    Inserts the default platform settings, leaving any key that already exists untouched, and
    warns when the designated admin address has no account yet: accounts are created by the
    identity provider, so this service cannot create it.

    Parameters:
        session (Session): Database session used for the lookups and inserts.
    """
    settings_service.init_settings(session)

    admin_email = get_settings().ADMIN_EMAIL
    if user_service.get_user_by_email(session, admin_email) is None:
        logger.warning(
            "No user account for the designated admin address yet; "
            "admin access is limited to the admin subdomain"
        )
    else:
        logger.info("Designated admin account present")
