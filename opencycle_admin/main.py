from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import Session

from opencycle_admin.core.config import get_settings, parse_comma_separated_origins
from opencycle_admin.core.error_handlers import register_exception_handlers
from opencycle_admin.core.telemetry import setup_telemetry
from opencycle_admin.database.database import create_db_and_tables, engine
from opencycle_admin.database.init_db import init_db
from opencycle_admin.routers import admin, analytics, item, report, settings, user
from opencycle_admin.utils.logger import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Prepare the service before it accepts requests.

    Sets up logging, creates missing tables, seeds the default platform settings and
    starts telemetry when an OTLP endpoint is configured.
    """
    setup_logging()
    create_db_and_tables()
    with Session(engine) as session:
        init_db(session)
    setup_telemetry(app)
    yield


app = FastAPI(
    title="OpenCycle Admin API",
    description="Administration and analytics API for the OpenCycle marketplace",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        str(origin)
        for origin in parse_comma_separated_origins(get_settings().BACKEND_CORS_ORIGINS)
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.get("/health", include_in_schema=False)
def health_check():
    return {"status": "ok"}


app.include_router(analytics.router)
app.include_router(item.router)
app.include_router(report.router)
app.include_router(user.router)
app.include_router(settings.router)
app.include_router(admin.router)
