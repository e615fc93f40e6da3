"""User management service."""

import uuid
from sqlmodel import Session, select, func, col, or_

from opencycle_admin.models.item import Item
from opencycle_admin.models.user import User, UserPublic, UserWithStats
from opencycle_admin.services.utils import get_or_404


def list_users(
    session: Session,
    *,
    search: str | None = None,
    offset: int = 0,
    limit: int = 100,
) -> list[UserWithStats]:
    """
    Retrieve users with the number of items they posted, newest first.

    Parameters:
        search: Case-insensitive match on email or full name.
    """
    item_counts = (
        select(Item.user_id, func.count().label("item_count"))
        .group_by(Item.user_id)
        .subquery()
    )
    statement = select(User, func.coalesce(item_counts.c.item_count, 0)).outerjoin(
        item_counts, item_counts.c.user_id == User.id
    )
    if search:
        pattern = f"%{search}%"
        statement = statement.where(
            or_(col(User.email).ilike(pattern), col(User.full_name).ilike(pattern))
        )
    statement = (
        statement.order_by(col(User.created_at).desc()).offset(offset).limit(limit)
    )

    return [
        UserWithStats.model_validate(user, update={"item_count": item_count})
        for user, item_count in session.exec(statement).all()
    ]


def get_user(session: Session, user_id: uuid.UUID) -> User:
    """
    Retrieve a user by ID.

    Raises:
        NotFoundError: If the user doesn't exist.
    """
    return get_or_404(session, User, user_id, "User")


def get_user_by_email(session: Session, email: str) -> User | None:
    statement = select(User).where(User.email == email)
    return session.exec(statement).first()


def delete_user(session: Session, user_id: uuid.UUID) -> UserPublic:
    """
    Delete a user account.

    Their items, views, favorites and messages go with it through the foreign keys'
    ON DELETE rules; admin log entries they wrote keep their row with `admin_id` cleared.

    Returns:
        UserPublic: Copy of the deleted user, taken before deletion.

    Raises:
        NotFoundError: If the user doesn't exist.
    """
    user = get_user(session, user_id)
    deleted = UserPublic.model_validate(user)
    session.delete(user)
    session.commit()
    return deleted
