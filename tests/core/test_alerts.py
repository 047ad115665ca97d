"""Tests for alert classification."""

import pytest
from datetime import date, datetime, timedelta

from maintenance_tracker.core.alerts import classify, parse_scheduled_date, summarize
from maintenance_tracker.models.alert import Alert, AlertBucket
from maintenance_tracker.models.task import Priority, TaskStatus

REF = date(2024, 6, 10)


def _days(n):
    return REF + timedelta(days=n)


class TestClassify:
    """Test cases for classify."""

    def test_yesterday_scheduled_is_overdue(self, make_task):
        alerts = classify([make_task(scheduled_date=_days(-1))], REF)
        assert alerts == [Alert(task_id="task-1", bucket=AlertBucket.OVERDUE, scheduled_date=_days(-1))]

    def test_same_day_in_progress_is_today(self, make_task):
        alerts = classify([make_task(scheduled_date=REF, status=TaskStatus.IN_PROGRESS)], REF)
        assert [a.bucket for a in alerts] == [AlertBucket.TODAY]

    def test_partial_within_horizon_is_upcoming(self, make_task):
        task = make_task(scheduled_date=_days(2), status=TaskStatus.PARTIAL)
        alerts = classify([task], REF, horizon_days=3)
        assert [a.bucket for a in alerts] == [AlertBucket.UPCOMING]

    def test_horizon_cutoff_is_exclusive(self, make_task):
        task = make_task(scheduled_date=_days(3), status=TaskStatus.PARTIAL)
        assert classify([task], REF, horizon_days=3) == []

    def test_default_horizon_is_three_days(self, make_task):
        tasks = [
            make_task(id="in", scheduled_date=_days(2)),
            make_task(id="out", scheduled_date=_days(3)),
        ]
        assert [a.task_id for a in classify(tasks, REF)] == ["in"]

    def test_zero_horizon_has_no_upcoming(self, make_task):
        assert classify([make_task(scheduled_date=_days(1))], REF, horizon_days=0) == []

    def test_negative_horizon_rejected(self, make_task):
        with pytest.raises(ValueError):
            classify([make_task()], REF, horizon_days=-1)

    def test_terminal_tasks_skipped(self, make_task):
        tasks = [
            make_task(id="done", scheduled_date=_days(-5), status=TaskStatus.COMPLETED,
                      completion_date=datetime(2024, 6, 1)),
            make_task(id="cancelled", scheduled_date=_days(-5), status=TaskStatus.CANCELLED),
        ]
        assert classify(tasks, REF) == []

    def test_unparseable_dates_dropped(self, make_task):
        tasks = [
            make_task(id="bad", scheduled_date="not-a-date"),
            make_task(id="missing", scheduled_date=None),
            make_task(id="good", scheduled_date="2024-06-09"),
        ]
        alerts = classify(tasks, REF)
        assert [a.task_id for a in alerts] == ["good"]
        assert alerts[0].scheduled_date == date(2024, 6, 9)

    def test_time_of_day_ignored(self, make_task):
        task = make_task(scheduled_date=datetime(2024, 6, 10, 23, 0))
        alerts = classify([task], datetime(2024, 6, 10, 8, 0))
        assert [a.bucket for a in alerts] == [AlertBucket.TODAY]

    def test_sorted_by_bucket_stable_within_bucket(self, make_task):
        tasks = [
            make_task(id="up-a", scheduled_date=_days(1), priority=Priority.LOW),
            make_task(id="over-a", scheduled_date=_days(-1), priority=Priority.LOW),
            make_task(id="today", scheduled_date=REF),
            make_task(id="over-b", scheduled_date=_days(-10), priority=Priority.CRITICAL),
            make_task(id="up-b", scheduled_date=_days(2), priority=Priority.CRITICAL),
        ]

        alerts = classify(tasks, REF)

        assert [a.task_id for a in alerts] == ["over-a", "over-b", "today", "up-a", "up-b"]

    def test_idempotent(self, make_task):
        tasks = [
            make_task(id="a", scheduled_date=_days(1)),
            make_task(id="b", scheduled_date=_days(-2)),
            make_task(id="c", scheduled_date=REF),
        ]
        assert classify(tasks, REF) == classify(tasks, REF)

    def test_accepts_generator(self, make_task):
        alerts = classify((t for t in [make_task(scheduled_date=_days(-1))]), REF)
        assert len(alerts) == 1


class TestHelpers:
    """Test cases for parse_scheduled_date and summarize."""

    def test_parse_scheduled_date(self):
        assert parse_scheduled_date(date(2024, 6, 3)) == date(2024, 6, 3)
        assert parse_scheduled_date("2024-06-03T08:00:00") == date(2024, 6, 3)
        assert parse_scheduled_date("06/03/2024") is None
        assert parse_scheduled_date(20240603) is None
        assert parse_scheduled_date("2024-06-03garbage") is None
        assert parse_scheduled_date("2024-06-03 garbage") is None

    def test_summarize_counts_every_bucket(self):
        alerts = [
            Alert("a", AlertBucket.OVERDUE, REF),
            Alert("b", AlertBucket.OVERDUE, REF),
            Alert("c", AlertBucket.UPCOMING, REF),
        ]
        assert summarize(alerts) == {
            AlertBucket.OVERDUE: 2,
            AlertBucket.TODAY: 0,
            AlertBucket.UPCOMING: 1,
        }
