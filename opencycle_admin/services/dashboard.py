"""Dashboard fan-out over the analytics service.

Each metric runs in a worker thread with a session of its own, all metrics at
once, each under its own deadline. A metric that fails or times out is reported
as unavailable without affecting the others.
"""

import asyncio
from collections.abc import Callable
from typing import Any

from anyio import fail_after, to_thread
from loguru import logger
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlmodel import Session

from opencycle_admin.exceptions import MetricUnavailableError
from opencycle_admin.models.analytics import MetricResult
from opencycle_admin.services import analytics as analytics_service

SessionFactory = Callable[[], Session]
Metric = Callable[[Session], Any]


def dashboard_metrics(days_back: int) -> dict[str, Metric]:
    """
    Map each dashboard metric name to the analytics call that computes it.
    """
    return {
        "overview": lambda s: analytics_service.get_platform_snapshot(s, days_back),
        "user_growth": lambda s: analytics_service.get_user_growth(s, days_back),
        "item_growth": lambda s: analytics_service.get_item_growth(s, days_back),
        "category_distribution": analytics_service.get_category_distribution,
        "report_statistics": analytics_service.get_report_statistics,
        "top_items": analytics_service.get_top_items,
        "top_users": analytics_service.get_top_users,
        "recent_activity": analytics_service.get_recent_activity,
    }


def run_metric(session_factory: SessionFactory, metric: Metric) -> Any:
    """
    Compute one metric in a fresh session.

    Metrics only read, so a transient storage error (`OperationalError`) is retried once with a
    new session; a second failure propagates.
    """
    try:
        with session_factory() as session:
            return metric(session)
    except OperationalError as e:
        logger.warning(f"Transient storage error, retrying metric once: {e}")

    with session_factory() as session:
        return metric(session)


async def evaluate_metric(
    name: str,
    metric: Metric,
    session_factory: SessionFactory,
    timeout: float,
) -> MetricResult:
    """
    Run a metric in a worker thread under a deadline and wrap the outcome.

    The worker thread is abandoned on timeout; the database side is bounded by the engine's
    statement timeout where the backend supports one.

    Returns:
        MetricResult: `ok` with the computed data, or `unavailable` with a short reason.
    """
    try:
        with fail_after(timeout):
            data = await to_thread.run_sync(
                run_metric, session_factory, metric, abandon_on_cancel=True
            )
    except TimeoutError:
        logger.warning(f"Metric '{name}' timed out after {timeout}s")
        return MetricResult(status="unavailable", error=f"timed out after {timeout}s")
    except SQLAlchemyError as e:
        logger.warning(f"Metric '{name}' failed: {e}")
        return MetricResult(status="unavailable", error="storage query failed")
    except Exception:
        logger.exception(f"Metric '{name}' raised an unexpected error")
        return MetricResult(status="unavailable", error="unexpected error")
    return MetricResult(status="ok", data=data)


async def collect_dashboard(
    session_factory: SessionFactory,
    *,
    days_back: int = 30,
    timeout: float = 5.0,
) -> dict[str, MetricResult]:
    """
    Evaluate every dashboard metric concurrently.

    Parameters:
        session_factory: Callable returning a new Session; called once per metric attempt.
        days_back: Lookback window for the growth series.
        timeout: Deadline in seconds applied to each metric separately.

    Returns:
        dict[str, MetricResult]: Outcome per metric name, in `dashboard_metrics` order.
    """
    metrics = dashboard_metrics(days_back)
    results = await asyncio.gather(
        *(
            evaluate_metric(name, metric, session_factory, timeout)
            for name, metric in metrics.items()
        )
    )
    return dict(zip(metrics, results))


async def compute_metric(
    name: str,
    metric: Metric,
    session_factory: SessionFactory,
    timeout: float,
) -> Any:
    """
    Evaluate a single metric and return its data.

    Raises:
        MetricUnavailableError: If the metric failed or timed out.
    """
    result = await evaluate_metric(name, metric, session_factory, timeout)
    if result.status != "ok":
        raise MetricUnavailableError(name, result.error)
    return result.data
