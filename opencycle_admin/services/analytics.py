"""Analytics service for admin dashboard statistics.

Every function reads straight from the entity tables; nothing is cached or
materialized. Counters are independent queries, so a snapshot is not atomic
across tables.
"""

from collections import Counter
from datetime import date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal
from dateutil.rrule import rrule, DAILY
from sqlalchemy import distinct
from sqlalchemy.orm import InstrumentedAttribute
from sqlmodel import Session, select, func, col

from opencycle_admin.models.analytics import (
    ActivityEntry,
    CategoryShare,
    GrowthPoint,
    PlatformSnapshot,
    ReportStats,
    TopItem,
    TopUser,
)
from opencycle_admin.models.engagement import Favorite, ItemView, Message
from opencycle_admin.models.enums import ReportStatus
from opencycle_admin.models.item import Item
from opencycle_admin.models.report import Report
from opencycle_admin.models.user import User
from opencycle_admin.services.utils import item_favorite_counts, item_view_counts

RECENT_ACTIVITY_PER_SOURCE = 5
HUNDREDTH = Decimal("0.01")


def _start_of_today() -> datetime:
    return datetime.combine(date.today(), time.min)


def _count(session: Session, model, *criteria) -> int:
    statement = select(func.count()).select_from(model)
    if criteria:
        statement = statement.where(*criteria)
    return session.exec(statement).one()


def get_platform_snapshot(session: Session, days_back: int = 30) -> PlatformSnapshot:
    """
    Read the platform-wide counters shown at the top of the dashboard.

    `days_back` is accepted for interface compatibility with the growth series and is not used.
    "Today" starts at local midnight; active users are the distinct signed-in viewers since then.

    Returns:
        PlatformSnapshot: Totals per table plus today's activity and pending reports.
    """
    today = _start_of_today()

    active_users_today = session.exec(
        select(func.count(distinct(ItemView.user_id))).where(
            ItemView.created_at >= today
        )
    ).one()

    return PlatformSnapshot(
        total_users=_count(session, User),
        total_items=_count(session, Item),
        total_views=_count(session, ItemView),
        total_favorites=_count(session, Favorite),
        total_messages=_count(session, Message),
        total_reports=_count(session, Report),
        active_users_today=active_users_today,
        new_users_today=_count(session, User, User.created_at >= today),
        new_items_today=_count(session, Item, Item.created_at >= today),
        pending_reports=_count(session, Report, Report.status == ReportStatus.PENDING),
    )


def _daily_growth(
    session: Session, created_at: InstrumentedAttribute, days_back: int
) -> list[GrowthPoint]:
    """
    Build a contiguous daily series over `[today - days_back, today]`.

    A window of zero or less collapses to today alone. The cumulative count starts at zero on
    the first day of the window.
    """
    today = date.today()
    start = today - timedelta(days=max(days_back, 0))

    # Group by day in Python for database compatibility (no date_trunc on sqlite)
    timestamps = session.exec(
        select(created_at).where(
            created_at >= datetime.combine(start, time.min),
            created_at < datetime.combine(today + timedelta(days=1), time.min),
        )
    ).all()
    per_day = Counter(ts.date() for ts in timestamps)

    series = []
    cumulative = 0
    for occurrence in rrule(DAILY, dtstart=start, until=today):
        day = occurrence.date()
        cumulative += per_day[day]
        series.append(
            GrowthPoint(date=day, new_count=per_day[day], cumulative_count=cumulative)
        )
    return series


def get_user_growth(session: Session, days_back: int = 30) -> list[GrowthPoint]:
    """
    Get daily user signups with a running total.

    Args:
        session: Database session
        days_back: Lookback window in days (default: 30); the series has `days_back + 1` rows

    Returns:
        list[GrowthPoint]: One point per day, oldest first, zero-filled
    """
    return _daily_growth(session, col(User.created_at), days_back)


def get_item_growth(session: Session, days_back: int = 30) -> list[GrowthPoint]:
    """
    Get daily item postings with a running total.

    Same shape and window rules as `get_user_growth`.
    """
    return _daily_growth(session, col(Item.created_at), days_back)


def split_percentages(counts: list[int]) -> list[float]:
    """
    Turn counts into percentages of their total, each rounded half up to two decimals.

    Rows are rounded independently, so the sum may be off 100 by a rounding step.
    An empty or all-zero input yields all zeros.

    Example:
        split_percentages([1, 1, 1]) -> [33.33, 33.33, 33.33]
    """
    total = sum(counts)
    if total == 0:
        return [0.0 for _ in counts]
    return [
        float((Decimal(count * 100) / total).quantize(HUNDREDTH, rounding=ROUND_HALF_UP))
        for count in counts
    ]


def get_category_distribution(session: Session) -> list[CategoryShare]:
    """
    Get the share of available items per category.

    Only items with `is_available` set are counted. Rows are ordered by count descending, then
    by category name.

    Returns:
        list[CategoryShare]: One row per category; empty when no item is available.
    """
    rows = session.exec(
        select(Item.category, func.count())
        .where(col(Item.is_available).is_(True))
        .group_by(Item.category)
    ).all()
    if not rows:
        return []

    rows = sorted(rows, key=lambda row: (-row[1], row[0]))
    percentages = split_percentages([count for _, count in rows])
    return [
        CategoryShare(category=category, item_count=count, percentage=percentage)
        for (category, count), percentage in zip(rows, percentages)
    ]


def get_report_statistics(session: Session) -> ReportStats:
    """
    Get report counts by status; every status is present, zero when unused.
    """
    rows = session.exec(
        select(Report.status, func.count()).group_by(Report.status)
    ).all()
    counts = {status: 0 for status in ReportStatus}
    for status, count in rows:
        counts[ReportStatus(status)] = count
    return ReportStats(**{status.value: count for status, count in counts.items()})


def get_top_items(session: Session, limit: int = 10) -> list[TopItem]:
    """
    Get the most viewed items with their view and favorite totals.

    Ties on views are broken by the most recent item first.
    """
    views = item_view_counts()
    favorites = item_favorite_counts()
    view_total = func.coalesce(views.c.views, 0)
    favorite_total = func.coalesce(favorites.c.favorites, 0)

    statement = (
        select(Item.id, Item.title, view_total, favorite_total)
        .outerjoin(views, views.c.item_id == Item.id)
        .outerjoin(favorites, favorites.c.item_id == Item.id)
        .order_by(view_total.desc(), col(Item.created_at).desc())
        .limit(limit)
    )
    return [
        TopItem(id=item_id, title=title, views=view_count, favorites=favorite_count)
        for item_id, title, view_count, favorite_count in session.exec(statement).all()
    ]


def get_top_users(session: Session, limit: int = 10) -> list[TopUser]:
    """
    Get the item owners whose items were viewed the most.

    Only users who posted at least one item are ranked.
    """
    item_counts = (
        select(Item.user_id, func.count().label("item_count"))
        .group_by(Item.user_id)
        .subquery()
    )
    view_counts = (
        select(Item.user_id, func.count(ItemView.id).label("views"))
        .join(ItemView, col(ItemView.item_id) == Item.id)
        .group_by(Item.user_id)
        .subquery()
    )
    view_total = func.coalesce(view_counts.c.views, 0)

    statement = (
        select(User.id, User.full_name, item_counts.c.item_count, view_total)
        .join(item_counts, item_counts.c.user_id == User.id)
        .outerjoin(view_counts, view_counts.c.user_id == User.id)
        .order_by(view_total.desc(), item_counts.c.item_count.desc())
        .limit(limit)
    )
    return [
        TopUser(id=user_id, name=full_name or "Anonymous", items=items, views=views)
        for user_id, full_name, items, views in session.exec(statement).all()
    ]


def get_recent_activity(session: Session, limit: int = 10) -> list[ActivityEntry]:
    """
    Get the latest signups, item postings and reports as a single feed.

    The five most recent rows of each kind are merged, newest first, then cut to `limit`.
    """
    activities: list[ActivityEntry] = []

    users = session.exec(
        select(User)
        .order_by(col(User.created_at).desc())
        .limit(RECENT_ACTIVITY_PER_SOURCE)
    ).all()
    for user in users:
        activities.append(
            ActivityEntry(
                id=f"user-{user.id}",
                type="user",
                title="New User Registration",
                description=f"{user.full_name or user.email} joined the platform",
                timestamp=user.created_at,
            )
        )

    items = session.exec(
        select(Item, User.full_name)
        .outerjoin(User, col(User.id) == Item.user_id)
        .order_by(col(Item.created_at).desc())
        .limit(RECENT_ACTIVITY_PER_SOURCE)
    ).all()
    for item, owner_name in items:
        activities.append(
            ActivityEntry(
                id=f"item-{item.id}",
                type="item",
                title="New Item Posted",
                description=f'"{item.title}" by {owner_name or "Anonymous"}',
                timestamp=item.created_at,
            )
        )

    reports = session.exec(
        select(Report)
        .order_by(col(Report.created_at).desc())
        .limit(RECENT_ACTIVITY_PER_SOURCE)
    ).all()
    for report in reports:
        activities.append(
            ActivityEntry(
                id=f"report-{report.id}",
                type="report",
                title="New Report Submitted",
                description=f"Report for {report.reason.value}",
                timestamp=report.created_at,
                status=report.status.value,
            )
        )

    activities.sort(key=lambda entry: entry.timestamp, reverse=True)
    return activities[:limit]
