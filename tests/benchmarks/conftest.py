"""Shared fixtures for benchmark tests."""

import random
from datetime import datetime, timedelta
import pytest
from sqlmodel import Session

from opencycle_admin.models.engagement import Favorite, ItemView
from opencycle_admin.models.enums import ReportReason, ReportStatus
from opencycle_admin.models.item import Item
from opencycle_admin.models.report import Report
from opencycle_admin.models.user import User

CATEGORIES = ["Books", "Clothing", "Electronics", "Furniture", "Garden", "Sports", "Toys"]


@pytest.fixture(name="populated_session")
def populated_session_fixture(session: Session) -> Session:
    """
    Session over a platform with a few months of history.

    200 users, 600 items, 3000 views, 400 favorites and 50 reports spread over the last
    90 days, generated from a fixed seed.
    """
    rng = random.Random(1234)
    now = datetime.now()

    def _when() -> datetime:
        return now - timedelta(days=rng.randint(0, 90), minutes=rng.randint(0, 1439))

    users = [
        User(email=f"bench{i}@example.com", full_name=f"Bench {i}", created_at=_when())
        for i in range(200)
    ]
    session.add_all(users)
    session.flush()

    items = [
        Item(
            title=f"Item {i}",
            category=rng.choice(CATEGORIES),
            is_available=rng.random() > 0.2,
            user_id=rng.choice(users).id,
            created_at=_when(),
        )
        for i in range(600)
    ]
    session.add_all(items)
    session.flush()

    session.add_all(
        ItemView(item_id=rng.choice(items).id, user_id=rng.choice(users).id, created_at=_when())
        for _ in range(3000)
    )
    session.add_all(
        Favorite(item_id=rng.choice(items).id, user_id=rng.choice(users).id)
        for _ in range(400)
    )
    session.add_all(
        Report(
            reason=rng.choice(list(ReportReason)),
            status=rng.choice(list(ReportStatus)),
            reported_item_id=rng.choice(items).id,
            created_at=_when(),
        )
        for _ in range(50)
    )
    session.commit()
    return session
