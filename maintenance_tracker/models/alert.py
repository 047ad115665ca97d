"""Dashboard alert models."""
from dataclasses import dataclass
from datetime import date
from enum import Enum


class AlertBucket(str, Enum):
    """Alert classification, declared in display order."""
    OVERDUE = "overdue"
    TODAY = "today"
    UPCOMING = "upcoming"

    @property
    def rank(self) -> int:
        return _BUCKET_RANK[self]


_BUCKET_RANK = {
    AlertBucket.OVERDUE: 0,
    AlertBucket.TODAY: 1,
    AlertBucket.UPCOMING: 2,
}


@dataclass(frozen=True)
class Alert:
    """A task flagged for the dashboard."""
    task_id: str
    bucket: AlertBucket
    scheduled_date: date
