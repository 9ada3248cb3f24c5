"""Tests for batch size parsing and date-range partitioning."""

from datetime import date, timedelta

import pytest

from mailsift.errors import InvalidRangeError, MalformedBatchSpecError
from mailsift.search import (
    CountSpec,
    DateInterval,
    DurationSpec,
    DurationUnit,
    parse_batch_spec,
    partition,
)


def _covered_days(intervals: list[DateInterval]) -> list[date]:
    """Every day covered by the intervals, in order (inclusive bounds)."""
    days = []
    for interval in intervals:
        for offset in range(interval.days + 1):
            day = interval.start + timedelta(days=offset)
            # Duration batches share their boundary day with the next batch
            if days and days[-1] == day:
                continue
            days.append(day)
    return days


class TestParseBatchSpec:
    """Tests for parse_batch_spec."""

    def test_integer_is_count(self):
        """A bare integer is a batch count."""
        assert parse_batch_spec("4") == CountSpec(4)

    def test_integer_with_whitespace(self):
        """Surrounding whitespace is ignored."""
        assert parse_batch_spec(" 12 ") == CountSpec(12)

    @pytest.mark.parametrize(
        "token,expected",
        [
            ("1 day", DurationSpec(1, DurationUnit.day)),
            ("3 days", DurationSpec(3, DurationUnit.day)),
            ("2 weeks", DurationSpec(2, DurationUnit.week)),
            ("1 month", DurationSpec(1, DurationUnit.month)),
            ("6 Months", DurationSpec(6, DurationUnit.month)),
            ("1  year", DurationSpec(1, DurationUnit.year)),
        ],
    )
    def test_duration(self, token, expected):
        """'<amount> <unit>' is a duration; plural and case don't matter."""
        assert parse_batch_spec(token) == expected

    @pytest.mark.parametrize(
        "token",
        ["", "month", "one month", "1 fortnight", "1 month extra", "1.5 months", "0", "-2", "0 days"],
    )
    def test_malformed(self, token):
        """Anything else is rejected."""
        with pytest.raises(MalformedBatchSpecError):
            parse_batch_spec(token)

    def test_str_roundtrips(self):
        """Specs render back to a parseable token."""
        for token in ("4", "1 month", "2 weeks"):
            assert str(parse_batch_spec(token)) == token


class TestPartitionByCount:
    """Tests for count-based partitioning."""

    def test_four_batches_over_a_year(self):
        """Count(4) over 2023 gives four ordered, non-touching batches."""
        intervals = partition(CountSpec(4), date(2023, 1, 1), date(2023, 12, 31))

        assert len(intervals) == 4
        assert intervals[0].start == date(2023, 1, 1)
        assert intervals[-1].end == date(2023, 12, 31)
        for previous, current in zip(intervals, intervals[1:]):
            assert current.start > previous.end

    def test_batch_boundaries(self):
        """Each batch spans floor(total / n) days, next one starts a day later."""
        intervals = partition(CountSpec(4), date(2023, 1, 1), date(2023, 12, 31))

        # 364 days / 4 = 91 days per batch
        assert intervals[0] == DateInterval(date(2023, 1, 1), date(2023, 4, 2))
        assert intervals[1] == DateInterval(date(2023, 4, 3), date(2023, 7, 3))
        assert intervals[2] == DateInterval(date(2023, 7, 4), date(2023, 10, 3))
        assert intervals[3] == DateInterval(date(2023, 10, 4), date(2023, 12, 31))

    def test_last_batch_absorbs_remainder(self):
        """The final batch ends at end_date whatever the rounding."""
        intervals = partition(CountSpec(3), date(2023, 1, 1), date(2023, 1, 11))

        # 10 days / 3 = 3 per batch
        assert intervals == [
            DateInterval(date(2023, 1, 1), date(2023, 1, 4)),
            DateInterval(date(2023, 1, 5), date(2023, 1, 8)),
            DateInterval(date(2023, 1, 9), date(2023, 1, 11)),
        ]

    def test_two_batches_over_june(self):
        """Count(2) over June gives two batches of about 15 days."""
        intervals = partition(CountSpec(2), date(2023, 6, 1), date(2023, 6, 30))

        assert intervals == [
            DateInterval(date(2023, 6, 1), date(2023, 6, 15)),
            DateInterval(date(2023, 6, 16), date(2023, 6, 30)),
        ]

    def test_single_batch_is_whole_range(self):
        """Count(1) returns the range unchanged."""
        intervals = partition(CountSpec(1), date(2023, 3, 1), date(2023, 3, 20))

        assert intervals == [DateInterval(date(2023, 3, 1), date(2023, 3, 20))]

    def test_days_covered_exactly_once(self):
        """Batches cover every day of the range, none twice."""
        start, end = date(2023, 1, 1), date(2023, 12, 31)
        intervals = partition(CountSpec(7), start, end)

        days = [
            iv.start + timedelta(days=offset)
            for iv in intervals
            for offset in range(iv.days + 1)
        ]

        assert days == [start + timedelta(days=i) for i in range((end - start).days + 1)]

    @pytest.mark.parametrize(
        "count,start,end",
        [
            (4, date(2023, 1, 1), date(2023, 1, 6)),
            (10, date(2023, 1, 1), date(2023, 1, 31)),
            (8, date(2023, 1, 1), date(2023, 1, 11)),
            (6, date(2023, 1, 1), date(2023, 1, 6)),
            (30, date(2023, 1, 1), date(2023, 2, 28)),
        ],
    )
    def test_tight_counts_do_not_overlap(self, count, start, end):
        """Up to one batch per day, batches stay disjoint and cover the range."""
        intervals = partition(CountSpec(count), start, end)

        assert len(intervals) == count
        assert intervals[0].start == start
        assert intervals[-1].end == end
        for previous, current in zip(intervals, intervals[1:]):
            assert current.start > previous.end

        days = [
            iv.start + timedelta(days=offset)
            for iv in intervals
            for offset in range(iv.days + 1)
        ]
        assert days == [start + timedelta(days=i) for i in range((end - start).days + 1)]

    def test_tight_count_batch_sizes(self):
        """Count(10) over January gives nine 3-day batches and a 4-day tail."""
        intervals = partition(CountSpec(10), date(2023, 1, 1), date(2023, 1, 31))

        assert [iv.days + 1 for iv in intervals] == [3] * 9 + [4]

    def test_more_batches_than_days(self):
        """Surplus batches collapse onto end_date instead of failing."""
        intervals = partition(CountSpec(5), date(2023, 1, 1), date(2023, 1, 3))

        assert len(intervals) == 5
        assert intervals[0] == DateInterval(date(2023, 1, 1), date(2023, 1, 1))
        assert intervals[-1].end == date(2023, 1, 3)
        for interval in intervals:
            assert interval.start <= interval.end
            assert interval.end <= date(2023, 1, 3)


class TestPartitionByDuration:
    """Tests for duration-based partitioning."""

    def test_monthly_batches(self):
        """1 month over Q1 ends on Feb 1, Mar 1 and the clamped Mar 31."""
        intervals = partition(
            DurationSpec(1, DurationUnit.month), date(2023, 1, 1), date(2023, 3, 31)
        )

        assert [iv.end for iv in intervals] == [
            date(2023, 2, 1),
            date(2023, 3, 1),
            date(2023, 3, 31),
        ]
        assert intervals[0].start == date(2023, 1, 1)

    def test_batches_share_boundaries(self):
        """Each batch starts where the previous one ended (before: is exclusive)."""
        intervals = partition(
            DurationSpec(2, DurationUnit.week), date(2023, 1, 1), date(2023, 3, 1)
        )

        for previous, current in zip(intervals, intervals[1:]):
            assert current.start == previous.end
            assert current.start > previous.start

    def test_days_covered_without_gaps(self):
        """The union of batches is the whole range."""
        start, end = date(2023, 1, 1), date(2023, 3, 1)
        intervals = partition(DurationSpec(10, DurationUnit.day), start, end)

        assert _covered_days(intervals) == [
            start + timedelta(days=i) for i in range((end - start).days + 1)
        ]

    def test_exact_fit(self):
        """A range that is a whole number of steps isn't padded."""
        intervals = partition(
            DurationSpec(1, DurationUnit.week), date(2023, 1, 1), date(2023, 1, 15)
        )

        assert intervals == [
            DateInterval(date(2023, 1, 1), date(2023, 1, 8)),
            DateInterval(date(2023, 1, 8), date(2023, 1, 15)),
        ]

    def test_step_larger_than_range(self):
        """A step longer than the range gives one clamped batch."""
        intervals = partition(
            DurationSpec(1, DurationUnit.year), date(2023, 1, 1), date(2023, 6, 30)
        )

        assert intervals == [DateInterval(date(2023, 1, 1), date(2023, 6, 30))]

    def test_month_end_clamps_without_drift(self):
        """Jan 31 + 1 month clamps to Feb 28, and Mar 31 is still reached."""
        intervals = partition(
            DurationSpec(1, DurationUnit.month), date(2023, 1, 31), date(2023, 4, 30)
        )

        assert [iv.end for iv in intervals] == [
            date(2023, 2, 28),
            date(2023, 3, 31),
            date(2023, 4, 30),
        ]


class TestPartitionEdgeCases:
    """Tests shared by both batch kinds."""

    @pytest.mark.parametrize(
        "spec", [CountSpec(3), DurationSpec(1, DurationUnit.month)]
    )
    def test_start_equals_end(self, spec):
        """A single-day range yields one zero-width interval."""
        day = date(2023, 5, 5)

        assert partition(spec, day, day) == [DateInterval(day, day)]

    @pytest.mark.parametrize(
        "spec", [CountSpec(3), DurationSpec(1, DurationUnit.day)]
    )
    def test_inverted_range_rejected(self, spec):
        """start after end raises InvalidRangeError."""
        with pytest.raises(InvalidRangeError):
            partition(spec, date(2023, 2, 1), date(2023, 1, 1))

    def test_interval_rejects_inverted_bounds(self):
        """DateInterval itself enforces start <= end."""
        with pytest.raises(InvalidRangeError):
            DateInterval(date(2023, 2, 1), date(2023, 1, 1))
