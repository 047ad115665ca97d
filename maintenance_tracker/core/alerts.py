"""Classify open tasks into dashboard alert buckets."""

from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional, Union

from ..models.alert import Alert, AlertBucket
from ..models.task import TaskRecord, is_overdue_candidate
from .constants import DEFAULT_HORIZON_DAYS


def parse_scheduled_date(value) -> Optional[date]:
    """Read a scheduled date as a calendar date, or None if it is unusable."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError:
            pass
        # Full timestamps are accepted; only the calendar part matters
        try:
            return datetime.fromisoformat(value).date()
        except ValueError:
            return None
    return None


def bucket_for(scheduled: date, reference_date: date, horizon_days: int) -> Optional[AlertBucket]:
    """Pick the bucket for one due date, or None when it is beyond the horizon."""
    if scheduled < reference_date:
        return AlertBucket.OVERDUE
    if scheduled == reference_date:
        return AlertBucket.TODAY
    if scheduled < reference_date + timedelta(days=horizon_days):
        return AlertBucket.UPCOMING
    return None


def classify(tasks: Iterable[TaskRecord], reference_date: Union[date, datetime],
             horizon_days: int = DEFAULT_HORIZON_DAYS) -> List[Alert]:
    """Bucket tasks into overdue, today and upcoming alerts.

    Completed and cancelled tasks are skipped, as are tasks without a usable
    scheduled date. Alerts come back grouped overdue, today, upcoming; within
    a group the input order is kept.

    Args:
        tasks: Tasks to inspect
        reference_date: The day to classify against
        horizon_days: Days ahead (exclusive) that count as upcoming

    Returns:
        List of alerts
    """
    if horizon_days < 0:
        raise ValueError(f"horizon_days must not be negative, got {horizon_days}")
    if isinstance(reference_date, datetime):
        reference_date = reference_date.date()

    alerts = []
    for task in tasks:
        if not is_overdue_candidate(task):
            continue
        scheduled = parse_scheduled_date(task.scheduled_date)
        if scheduled is None:
            continue
        bucket = bucket_for(scheduled, reference_date, horizon_days)
        if bucket is not None:
            alerts.append(Alert(task_id=task.id, bucket=bucket, scheduled_date=scheduled))

    # sorted() is stable, so input order survives inside each bucket
    return sorted(alerts, key=lambda alert: alert.bucket.rank)


def summarize(alerts: Iterable[Alert]) -> Dict[AlertBucket, int]:
    """Count alerts per bucket, including empty buckets."""
    counts = {bucket: 0 for bucket in AlertBucket}
    for alert in alerts:
        counts[alert.bucket] += 1
    return counts
