"""Analytics router for the admin dashboard."""

from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from opencycle_admin.core.config import Settings, get_settings
from opencycle_admin.core.dependencies import get_current_admin
from opencycle_admin.database.database import get_session_factory
from opencycle_admin.models.analytics import (
    ActivityEntry,
    CategoryShare,
    GrowthPoint,
    MetricResult,
    PlatformSnapshot,
    ReportStats,
    TopItem,
    TopUser,
)
from opencycle_admin.services import analytics as analytics_service
from opencycle_admin.services import dashboard as dashboard_service

router = APIRouter(
    prefix="/admin/analytics",
    tags=["analytics"],
    dependencies=[Depends(get_current_admin)],
)

SessionFactoryDep = Annotated[Callable[[], Session], Depends(get_session_factory)]
SettingsDep = Annotated[Settings, Depends(get_settings)]
# Zero or negative windows are accepted and collapse to today only
DaysBackQuery = Annotated[
    int | None, Query(le=3650, description="Lookback window in days")
]
LimitQuery = Annotated[int, Query(ge=1, le=100)]


def _window(days_back: int | None, settings: Settings) -> int:
    return settings.ANALYTICS_DEFAULT_DAYS if days_back is None else days_back


@router.get("/dashboard", response_model=dict[str, MetricResult])
async def read_dashboard(
    session_factory: SessionFactoryDep,
    settings: SettingsDep,
    days_back: DaysBackQuery = None,
) -> dict[str, MetricResult]:
    """
    Compute every dashboard metric at once.

    Metrics run concurrently, each with its own timeout. The response always has one entry
    per metric; a metric that failed carries `"status": "unavailable"` and an `error` reason
    instead of data, while the others are unaffected.

    ## Example Response

    ```json
    {
      "overview": {"status": "ok", "data": {"total_users": 120, "...": "..."}, "error": null},
      "top_users": {"status": "unavailable", "data": null, "error": "timed out after 5.0s"}
    }
    ```

    Raises:
        `401 Unauthorized`: If no valid authentication token is provided.
        `403 Forbidden`: If the caller is not an administrator.
    """
    return await dashboard_service.collect_dashboard(
        session_factory,
        days_back=_window(days_back, settings),
        timeout=settings.ANALYTICS_QUERY_TIMEOUT_SECONDS,
    )


@router.get("/overview", response_model=PlatformSnapshot)
async def read_overview(
    session_factory: SessionFactoryDep,
    settings: SettingsDep,
    days_back: DaysBackQuery = None,
) -> PlatformSnapshot:
    """
    Get the platform-wide counters.

    Raises:
        `503 Service Unavailable`: If the counters could not be read in time.
    """
    window = _window(days_back, settings)
    return await dashboard_service.compute_metric(
        "overview",
        lambda s: analytics_service.get_platform_snapshot(s, window),
        session_factory,
        settings.ANALYTICS_QUERY_TIMEOUT_SECONDS,
    )


@router.get("/growth/users", response_model=list[GrowthPoint])
async def read_user_growth(
    session_factory: SessionFactoryDep,
    settings: SettingsDep,
    days_back: DaysBackQuery = None,
) -> list[GrowthPoint]:
    """
    Get daily signups and their running total over the lookback window.

    The series covers every day from `today - days_back` to today inclusive, with zero for
    days without signups.
    """
    window = _window(days_back, settings)
    return await dashboard_service.compute_metric(
        "user_growth",
        lambda s: analytics_service.get_user_growth(s, window),
        session_factory,
        settings.ANALYTICS_QUERY_TIMEOUT_SECONDS,
    )


@router.get("/growth/items", response_model=list[GrowthPoint])
async def read_item_growth(
    session_factory: SessionFactoryDep,
    settings: SettingsDep,
    days_back: DaysBackQuery = None,
) -> list[GrowthPoint]:
    """Get daily item postings and their running total over the lookback window."""
    window = _window(days_back, settings)
    return await dashboard_service.compute_metric(
        "item_growth",
        lambda s: analytics_service.get_item_growth(s, window),
        session_factory,
        settings.ANALYTICS_QUERY_TIMEOUT_SECONDS,
    )


@router.get("/categories", response_model=list[CategoryShare])
async def read_category_distribution(
    session_factory: SessionFactoryDep, settings: SettingsDep
) -> list[CategoryShare]:
    """
    Get the share of available items per category.

    Percentages add up to 100.00. The list is empty when no item is available.
    """
    return await dashboard_service.compute_metric(
        "category_distribution",
        analytics_service.get_category_distribution,
        session_factory,
        settings.ANALYTICS_QUERY_TIMEOUT_SECONDS,
    )


@router.get("/reports", response_model=ReportStats)
async def read_report_statistics(
    session_factory: SessionFactoryDep, settings: SettingsDep
) -> ReportStats:
    return await dashboard_service.compute_metric(
        "report_statistics",
        analytics_service.get_report_statistics,
        session_factory,
        settings.ANALYTICS_QUERY_TIMEOUT_SECONDS,
    )


@router.get("/top-items", response_model=list[TopItem])
async def read_top_items(
    session_factory: SessionFactoryDep,
    settings: SettingsDep,
    limit: LimitQuery = 10,
) -> list[TopItem]:
    return await dashboard_service.compute_metric(
        "top_items",
        lambda s: analytics_service.get_top_items(s, limit),
        session_factory,
        settings.ANALYTICS_QUERY_TIMEOUT_SECONDS,
    )


@router.get("/top-users", response_model=list[TopUser])
async def read_top_users(
    session_factory: SessionFactoryDep,
    settings: SettingsDep,
    limit: LimitQuery = 10,
) -> list[TopUser]:
    return await dashboard_service.compute_metric(
        "top_users",
        lambda s: analytics_service.get_top_users(s, limit),
        session_factory,
        settings.ANALYTICS_QUERY_TIMEOUT_SECONDS,
    )


@router.get("/recent-activity", response_model=list[ActivityEntry])
async def read_recent_activity(
    session_factory: SessionFactoryDep,
    settings: SettingsDep,
    limit: LimitQuery = 10,
) -> list[ActivityEntry]:
    """Get the latest signups, item postings and reports, newest first."""
    return await dashboard_service.compute_metric(
        "recent_activity",
        lambda s: analytics_service.get_recent_activity(s, limit),
        session_factory,
        settings.ANALYTICS_QUERY_TIMEOUT_SECONDS,
    )
