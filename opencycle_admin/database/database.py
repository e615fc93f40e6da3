from collections.abc import Callable

from sqlalchemy.engine import make_url
from sqlmodel import Session, SQLModel, create_engine

from opencycle_admin.core.config import get_settings


def _connect_args(database_url: str) -> dict:
    """
    Driver options for the configured backend.

    PostgreSQL gets a server-side `statement_timeout` equal to the analytics deadline, so a
    query the dashboard gave up on is cancelled by the server too.
    """
    backend = make_url(database_url).get_backend_name()
    if backend == "postgresql":
        timeout_ms = int(get_settings().ANALYTICS_QUERY_TIMEOUT_SECONDS * 1000)
        return {"options": f"-c statement_timeout={timeout_ms}"}
    if backend == "sqlite":
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    get_settings().DATABASE_URL,
    pool_pre_ping=True,
    connect_args=_connect_args(get_settings().DATABASE_URL),
)


def create_db_and_tables():
    """Create any missing table; existing ones are left as they are."""
    # Importing the models registers their tables on the metadata
    import opencycle_admin.models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_session():
    """FastAPI dependency yielding one session per request."""
    with Session(engine) as session:
        yield session


def get_session_factory() -> Callable[[], Session]:
    """
    FastAPI dependency returning a session opener instead of a session.

    Used where work is spread over worker threads, each of which needs a session of its own.
    """
    return lambda: Session(engine)
