"""Tests for analytics service."""

from datetime import date, datetime, time, timedelta
from sqlmodel import Session

from opencycle_admin.models.engagement import Message
from opencycle_admin.models.enums import ReportReason, ReportStatus
from opencycle_admin.services import analytics as analytics_service


def _days_ago(days: int, hour: int = 12) -> datetime:
    return datetime.combine(date.today() - timedelta(days=days), time(hour=hour))


class TestPlatformSnapshot:
    def test_empty_platform_reports_zeros(self, session: Session):
        snapshot = analytics_service.get_platform_snapshot(session)

        assert snapshot.model_dump() == {
            "total_users": 0,
            "total_items": 0,
            "total_views": 0,
            "total_favorites": 0,
            "total_messages": 0,
            "total_reports": 0,
            "active_users_today": 0,
            "new_users_today": 0,
            "new_items_today": 0,
            "pending_reports": 0,
        }

    def test_counts_every_table(
        self, session: Session, make_user, make_item, make_report, add_views, add_favorites
    ):
        old_user = make_user(created_at=_days_ago(10))
        new_user = make_user()
        old_item = make_item(old_user, created_at=_days_ago(3))
        make_item(new_user)
        add_views(old_item, 2, viewer=new_user)
        add_views(old_item, 1)
        add_favorites(old_item, [new_user])
        session.add(Message(sender_id=new_user.id, receiver_id=old_user.id, content="Hi"))
        session.commit()
        make_report(status=ReportStatus.PENDING)
        make_report(status=ReportStatus.RESOLVED)

        snapshot = analytics_service.get_platform_snapshot(session)

        assert snapshot.total_users == 2
        assert snapshot.total_items == 2
        assert snapshot.total_views == 3
        assert snapshot.total_favorites == 1
        assert snapshot.total_messages == 1
        assert snapshot.total_reports == 2
        assert snapshot.new_users_today == 1
        assert snapshot.new_items_today == 1
        assert snapshot.pending_reports == 1
        # Two views by one signed-in user, one anonymous view
        assert snapshot.active_users_today == 1

    def test_active_users_never_exceed_total(
        self, session: Session, make_user, make_item, add_views
    ):
        users = [make_user() for _ in range(3)]
        item = make_item(users[0])
        for user in users:
            add_views(item, 2, viewer=user)

        snapshot = analytics_service.get_platform_snapshot(session)

        assert snapshot.active_users_today == 3
        assert snapshot.active_users_today <= snapshot.total_users

    def test_repeated_reads_without_writes_are_identical(
        self, session: Session, make_user, make_item
    ):
        make_item(make_user())

        first = analytics_service.get_platform_snapshot(session)
        second = analytics_service.get_platform_snapshot(session)

        assert first == second


class TestGrowthSeries:
    def test_series_has_one_row_per_day_of_window(self, session: Session):
        series = analytics_service.get_user_growth(session, days_back=30)

        assert len(series) == 31
        assert series[0].date == date.today() - timedelta(days=30)
        assert series[-1].date == date.today()
        assert all(point.new_count == 0 for point in series)

    def test_two_day_window_example(self, session: Session, make_user):
        for _ in range(3):
            make_user(created_at=_days_ago(1))
        for _ in range(2):
            make_user(created_at=_days_ago(0, hour=0))

        series = analytics_service.get_user_growth(session, days_back=1)

        yesterday = date.today() - timedelta(days=1)
        assert [(p.date, p.new_count, p.cumulative_count) for p in series] == [
            (yesterday, 3, 3),
            (date.today(), 2, 5),
        ]

    def test_cumulative_is_non_decreasing_and_matches_sum(
        self, session: Session, make_user
    ):
        for days in (0, 2, 2, 5, 9):
            make_user(created_at=_days_ago(days))

        series = analytics_service.get_user_growth(session, days_back=7)

        cumulative = [p.cumulative_count for p in series]
        assert cumulative == sorted(cumulative)
        assert series[-1].cumulative_count == sum(p.new_count for p in series)
        # The signup nine days ago falls outside the window
        assert series[-1].cumulative_count == 4

    def test_days_are_contiguous(self, session: Session):
        series = analytics_service.get_item_growth(session, days_back=5)

        for previous, current in zip(series, series[1:]):
            assert current.date - previous.date == timedelta(days=1)

    def test_item_growth_counts_items(self, session: Session, make_user, make_item):
        owner = make_user(created_at=_days_ago(20))
        make_item(owner, created_at=_days_ago(2))
        make_item(owner, created_at=_days_ago(2, hour=18))

        series = analytics_service.get_item_growth(session, days_back=3)

        assert [p.new_count for p in series] == [0, 2, 0, 0]

    def test_zero_window_collapses_to_today(self, session: Session, make_user):
        make_user(created_at=_days_ago(1))
        make_user()

        series = analytics_service.get_user_growth(session, days_back=0)

        assert len(series) == 1
        assert series[0].date == date.today()
        assert series[0].new_count == 1

    def test_negative_window_collapses_to_today(self, session: Session):
        series = analytics_service.get_user_growth(session, days_back=-7)

        assert [p.date for p in series] == [date.today()]


class TestSplitPercentages:
    def test_two_to_one(self):
        assert analytics_service.split_percentages([2, 1]) == [66.67, 33.33]

    def test_thirds_are_rounded_per_row(self):
        shares = analytics_service.split_percentages([1, 1, 1])

        assert shares == [33.33, 33.33, 33.33]
        assert abs(sum(shares) - 100) <= 0.01

    def test_half_rounds_up(self):
        # 3.125 and 96.875
        assert analytics_service.split_percentages([1, 31]) == [3.13, 96.88]

    def test_all_zero(self):
        assert analytics_service.split_percentages([0, 0]) == [0.0, 0.0]

    def test_single_bucket(self):
        assert analytics_service.split_percentages([7]) == [100.0]


class TestCategoryDistribution:
    def test_example_distribution(self, session: Session, make_user, make_item):
        owner = make_user()
        make_item(owner, title="A", category="Books")
        make_item(owner, title="B", category="Books")
        make_item(owner, title="C", category="Toys")

        distribution = analytics_service.get_category_distribution(session)

        assert [(d.category, d.item_count, d.percentage) for d in distribution] == [
            ("Books", 2, 66.67),
            ("Toys", 1, 33.33),
        ]

    def test_unavailable_items_are_ignored(self, session: Session, make_user, make_item):
        owner = make_user()
        make_item(owner, category="Books")
        make_item(owner, category="Toys", is_available=False)

        distribution = analytics_service.get_category_distribution(session)

        assert [(d.category, d.percentage) for d in distribution] == [("Books", 100.0)]

    def test_no_available_items_gives_empty_list(
        self, session: Session, make_user, make_item
    ):
        make_item(make_user(), is_available=False)

        assert analytics_service.get_category_distribution(session) == []

    def test_percentages_sum_to_hundred(self, session: Session, make_user, make_item):
        owner = make_user()
        for index, category in enumerate(["A", "B", "C", "D", "E", "F", "G"]):
            for _ in range(index + 1):
                make_item(owner, category=category)

        distribution = analytics_service.get_category_distribution(session)

        assert abs(sum(d.percentage for d in distribution) - 100) <= 0.01
        assert sum(d.item_count for d in distribution) == 28
        assert distribution[0].category == "G"

    def test_equal_categories_share_the_same_percentage(
        self, session: Session, make_user, make_item
    ):
        owner = make_user()
        for category in ["A", "B", "C"]:
            make_item(owner, category=category)

        distribution = analytics_service.get_category_distribution(session)

        assert [(d.category, d.percentage) for d in distribution] == [
            ("A", 33.33),
            ("B", 33.33),
            ("C", 33.33),
        ]


class TestReportStatistics:
    def test_every_status_present(self, session: Session):
        stats = analytics_service.get_report_statistics(session)

        assert stats.model_dump() == {
            "pending": 0,
            "reviewed": 0,
            "resolved": 0,
            "dismissed": 0,
        }

    def test_counts_by_status(self, session: Session, make_report):
        make_report(status=ReportStatus.PENDING)
        make_report(status=ReportStatus.PENDING)
        make_report(status=ReportStatus.DISMISSED)

        stats = analytics_service.get_report_statistics(session)

        assert stats.pending == 2
        assert stats.dismissed == 1
        assert stats.resolved == 0


class TestTopLists:
    def test_top_items_ordered_by_views(
        self, session: Session, make_user, make_item, add_views, add_favorites
    ):
        owner = make_user()
        fan = make_user()
        quiet = make_item(owner, title="Quiet")
        popular = make_item(owner, title="Popular")
        add_views(popular, 5)
        add_views(quiet, 1)
        add_favorites(popular, [fan, owner])

        top = analytics_service.get_top_items(session)

        assert [(t.title, t.views, t.favorites) for t in top] == [
            ("Popular", 5, 2),
            ("Quiet", 1, 0),
        ]

    def test_top_items_respects_limit(self, session: Session, make_user, make_item):
        owner = make_user()
        for index in range(4):
            make_item(owner, title=f"Item {index}")

        assert len(analytics_service.get_top_items(session, limit=2)) == 2

    def test_top_users_ranks_owners_by_views(
        self, session: Session, make_user, make_item, add_views
    ):
        alice = make_user(full_name="Alice")
        bob = make_user(full_name=None)
        make_user(full_name="No Items")
        alice_item = make_item(alice)
        make_item(alice)
        bob_item = make_item(bob)
        add_views(bob_item, 4)
        add_views(alice_item, 1)

        top = analytics_service.get_top_users(session)

        assert [(t.name, t.items, t.views) for t in top] == [
            ("Anonymous", 1, 4),
            ("Alice", 2, 1),
        ]


class TestRecentActivity:
    def test_merges_sources_newest_first(
        self, session: Session, make_user, make_item, make_report
    ):
        owner = make_user(full_name="Owner", created_at=_days_ago(3))
        make_item(owner, title="Lamp", created_at=_days_ago(2))
        make_report(reason=ReportReason.SCAM, created_at=_days_ago(1))

        activity = analytics_service.get_recent_activity(session)

        assert [entry.type for entry in activity] == ["report", "item", "user"]
        assert activity[0].description == "Report for scam"
        assert activity[0].status == "pending"
        assert activity[1].description == '"Lamp" by Owner'
        assert activity[2].description == "Owner joined the platform"

    def test_user_without_name_is_shown_by_email(self, session: Session, make_user):
        make_user(email="quiet@example.com", full_name=None)

        activity = analytics_service.get_recent_activity(session)

        assert activity[0].description == "quiet@example.com joined the platform"

    def test_limit_caps_merged_feed(self, session: Session, make_user, make_item):
        owner = make_user()
        for index in range(5):
            make_item(owner, created_at=_days_ago(index))

        activity = analytics_service.get_recent_activity(session, limit=3)

        assert len(activity) == 3
        timestamps = [entry.timestamp for entry in activity]
        assert timestamps == sorted(timestamps, reverse=True)
