import uuid
from typing import Annotated

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from loguru import logger
from sqlmodel import Session

from opencycle_admin.core.authorization import is_admin_email
from opencycle_admin.core.config import Settings, get_settings
from opencycle_admin.database.database import get_session
from opencycle_admin.exceptions import (
    InsufficientPermissionsError,
    InvalidTokenError,
    TokenExpiredError,
)
from opencycle_admin.models.admin_log import RequestContext
from opencycle_admin.models.user import User
from opencycle_admin.utils.validation import mask_email

bearer_scheme = HTTPBearer(auto_error=False)


def get_request_context(request: Request) -> RequestContext:
    """
    Extract the originating address and client agent string from the incoming request.

    The first hop of `X-Forwarded-For` is preferred over the socket peer when the API runs
    behind a proxy.
    """
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        ip_address: str | None = forwarded_for.split(",")[0].strip() or None
    else:
        ip_address = request.client.host if request.client else None
    return RequestContext(
        ip_address=ip_address, user_agent=request.headers.get("user-agent")
    )


def get_current_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
    session: Annotated[Session, Depends(get_session)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> User:
    """
    Resolve the caller from a bearer token issued by the identity provider.

    The token's `sub` claim must be the UUID of a row in `users`.

    Raises:
        TokenExpiredError: If the token is past its expiry.
        InvalidTokenError: If the token is missing, malformed, badly signed, has the wrong audience,
            or names no known user.
    """
    if credentials is None:
        raise InvalidTokenError("Not authenticated")
    try:
        payload = jwt.decode(
            credentials.credentials,
            settings.JWT_SECRET.get_secret_value(),
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
        )
    except jwt.ExpiredSignatureError:
        raise TokenExpiredError()
    except jwt.InvalidTokenError:
        raise InvalidTokenError()

    subject = payload.get("sub")
    try:
        user_id = uuid.UUID(str(subject))
    except ValueError:
        raise InvalidTokenError()

    user = session.get(User, user_id)
    if user is None:
        raise InvalidTokenError()
    return user


def get_current_admin(
    current_user: Annotated[User, Depends(get_current_user)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> User:
    """
    Require the caller to be an administrator.

    Evaluated on every request against the freshly loaded user row, so a change of email
    takes effect on the next call.

    Raises:
        InsufficientPermissionsError: If the caller's email does not pass the admin predicate.
    """
    if not is_admin_email(
        current_user.email, settings.ADMIN_EMAIL, settings.ADMIN_EMAIL_DOMAIN
    ):
        logger.warning(
            f"Admin access denied for {mask_email(current_user.email)}"
        )
        raise InsufficientPermissionsError()
    return current_user
