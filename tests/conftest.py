import os

# The engine is created at import time from these; set them before importing the app
os.environ.setdefault("DATABASE_URL", "sqlite:///./test-bootstrap.db")
os.environ.setdefault("JWT_SECRET", "test-secret-key-for-testing-only-min-32-chars")

from collections.abc import Callable
from datetime import datetime, timedelta, timezone

import jwt
import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine

import opencycle_admin.models  # noqa: F401
from opencycle_admin.core.config import Settings, get_settings
from opencycle_admin.database.database import get_session, get_session_factory
from opencycle_admin.main import app
from opencycle_admin.models.engagement import Favorite, ItemView
from opencycle_admin.models.enums import ReportReason, ReportStatus
from opencycle_admin.models.item import Item
from opencycle_admin.models.report import Report
from opencycle_admin.models.user import User

JWT_SECRET = "test-secret-key-for-testing-only-min-32-chars"


@pytest.fixture(name="test_settings")
def test_settings_fixture(tmp_path) -> Settings:
    """Settings pointing at a throwaway database, with the default admin rules."""
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'admin.db'}",
        JWT_SECRET=JWT_SECRET,
        ADMIN_EMAIL="admin@opencycle.com",
        ADMIN_EMAIL_DOMAIN="admin.opencycle.com",
        ANALYTICS_QUERY_TIMEOUT_SECONDS=5.0,
        ANALYTICS_DEFAULT_DAYS=30,
        _env_file=None,
    )


@pytest.fixture(name="engine")
def engine_fixture(test_settings: Settings):
    """
    File-backed SQLite engine.

    A file database rather than `:memory:` so the dashboard's worker threads can each open
    their own connection to the same data.
    """
    engine = create_engine(
        test_settings.DATABASE_URL, connect_args={"check_same_thread": False}
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture(name="session")
def session_fixture(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture(name="session_factory")
def session_factory_fixture(engine) -> Callable[[], Session]:
    return lambda: Session(engine)


@pytest.fixture(name="client")
def client_fixture(engine, session_factory, test_settings: Settings):
    """TestClient wired to the test database and settings; lifespan is not run."""

    def _get_test_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_test_session
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_settings] = lambda: test_settings
    yield TestClient(app)
    app.dependency_overrides.clear()


def _sign_token(
    subject: object,
    *,
    secret: str = JWT_SECRET,
    audience: str = "authenticated",
    expires_in: timedelta = timedelta(minutes=15),
) -> str:
    """Sign a token the way the identity provider does."""
    payload = {
        "sub": str(subject),
        "aud": audience,
        "exp": datetime.now(timezone.utc) + expires_in,
    }
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture(name="make_user")
def make_user_fixture(session: Session):
    counter = iter(range(1, 10_000))

    def _make_user(
        email: str | None = None,
        full_name: str | None = "Test User",
        created_at: datetime | None = None,
    ) -> User:
        user = User(
            email=email or f"user{next(counter)}@example.com",
            full_name=full_name,
            created_at=created_at or datetime.now(),
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make_user


@pytest.fixture(name="make_item")
def make_item_fixture(session: Session):
    def _make_item(
        owner: User,
        title: str = "Bike",
        category: str = "Sports",
        is_available: bool = True,
        created_at: datetime | None = None,
        description: str = "",
    ) -> Item:
        item = Item(
            title=title,
            description=description,
            category=category,
            is_available=is_available,
            user_id=owner.id,
            created_at=created_at or datetime.now(),
        )
        session.add(item)
        session.commit()
        session.refresh(item)
        return item

    return _make_item


@pytest.fixture(name="make_report")
def make_report_fixture(session: Session):
    def _make_report(
        status: ReportStatus = ReportStatus.PENDING,
        reason: ReportReason = ReportReason.SPAM,
        reported_item: Item | None = None,
        reporter: User | None = None,
        created_at: datetime | None = None,
    ) -> Report:
        report = Report(
            reason=reason,
            status=status,
            reported_item_id=reported_item.id if reported_item else None,
            reporter_id=reporter.id if reporter else None,
            created_at=created_at or datetime.now(),
        )
        session.add(report)
        session.commit()
        session.refresh(report)
        return report

    return _make_report


@pytest.fixture(name="add_views")
def add_views_fixture(session: Session):
    def _add_views(item: Item, count: int, viewer: User | None = None) -> None:
        for _ in range(count):
            session.add(ItemView(item_id=item.id, user_id=viewer.id if viewer else None))
        session.commit()

    return _add_views


@pytest.fixture(name="add_favorites")
def add_favorites_fixture(session: Session):
    def _add_favorites(item: Item, users: list[User]) -> None:
        for user in users:
            session.add(Favorite(item_id=item.id, user_id=user.id))
        session.commit()

    return _add_favorites


@pytest.fixture(name="admin_user")
def admin_user_fixture(make_user) -> User:
    return make_user(email="admin@opencycle.com", full_name="Platform Admin")


@pytest.fixture(name="admin_headers")
def admin_headers_fixture(admin_user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {_sign_token(admin_user.id)}"}


@pytest.fixture(name="member_headers")
def member_headers_fixture(make_user) -> dict[str, str]:
    member = make_user(email="member@example.com", full_name="Regular Member")
    return {"Authorization": f"Bearer {_sign_token(member.id)}"}


@pytest.fixture(name="token_factory")
def token_factory_fixture():
    """Callable signing tokens for any subject, with overridable secret, audience and expiry."""
    return _sign_token
