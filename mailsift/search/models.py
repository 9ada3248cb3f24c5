"""Data models for search criteria, batching and results."""

from dataclasses import dataclass
from datetime import date
from enum import Enum

from dateutil.relativedelta import relativedelta

from mailsift.errors import InvalidRangeError


@dataclass(frozen=True)
class SearchCriteria:
    """User-supplied filters for a mailbox search.

    Every field is optional; None means "not filtered on". A criteria
    record with every field None matches all messages.
    """

    keyword: str | None = None  # Searched in body and subject
    from_addr: str | None = None
    to_addr: str | None = None
    label: str | None = None
    start_date: date | None = None  # Inclusive (Gmail "after:")
    end_date: date | None = None  # Exclusive (Gmail "before:")
    limit: int | None = None  # Overall cap on returned messages


@dataclass(frozen=True)
class DateInterval:
    """One batch of a partitioned date range."""

    start: date
    end: date

    def __post_init__(self):
        if self.start > self.end:
            raise InvalidRangeError(
                f"Interval start {self.start} is after end {self.end}"
            )

    @property
    def days(self) -> int:
        """Length of the interval in whole days (0 for a single day)."""
        return (self.end - self.start).days


class DurationUnit(str, Enum):
    """Calendar units accepted in a duration batch size."""

    day = "day"
    week = "week"
    month = "month"
    year = "year"


@dataclass(frozen=True)
class CountSpec:
    """Split the range into a fixed number of roughly equal batches."""

    count: int

    def __str__(self) -> str:
        return str(self.count)


@dataclass(frozen=True)
class DurationSpec:
    """Step through the range in fixed calendar hops (e.g. "2 weeks")."""

    amount: int
    unit: DurationUnit

    def step(self, times: int = 1) -> relativedelta:
        """Offset covering `times` hops of this duration."""
        n = self.amount * times
        if self.unit is DurationUnit.day:
            return relativedelta(days=n)
        if self.unit is DurationUnit.week:
            return relativedelta(weeks=n)
        if self.unit is DurationUnit.month:
            return relativedelta(months=n)
        return relativedelta(years=n)

    def __str__(self) -> str:
        suffix = "" if self.amount == 1 else "s"
        return f"{self.amount} {self.unit.value}{suffix}"


BatchSpec = CountSpec | DurationSpec


@dataclass(frozen=True)
class MessageSummary:
    """Metadata for a single matched message.

    Values are passed through from the Gmail API as-is; the date is the
    raw Date header, not a parsed datetime.
    """

    id: str
    thread_id: str
    snippet: str = ""
    from_addr: str = ""
    to_addr: str = ""
    subject: str = ""
    date: str = ""

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "threadId": self.thread_id,
            "snippet": self.snippet,
            "from": self.from_addr,
            "to": self.to_addr,
            "subject": self.subject,
            "date": self.date,
        }
