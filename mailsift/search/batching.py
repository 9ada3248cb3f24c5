"""Date-range batching.

Large date ranges are searched in several smaller batches, each one a
separate Gmail query. A batch size is either a count ("4" = four roughly
equal batches) or a calendar duration ("2 weeks", "1 month").

Month and year steps use dateutil's relativedelta, which clamps to the
last valid day of the month (Jan 31 + 1 month = Feb 28). Boundaries are
always computed from the range start, so they don't drift after a clamp.
"""

from datetime import date, timedelta

from mailsift.errors import InvalidRangeError, MalformedBatchSpecError

from .models import BatchSpec, CountSpec, DateInterval, DurationSpec, DurationUnit


def parse_batch_spec(token: str) -> BatchSpec:
    """Parse a batch size token.

    Examples:
        "4"        -> CountSpec(4)
        "1 month"  -> DurationSpec(1, month)
        "2 Weeks"  -> DurationSpec(2, week)

    Raises:
        MalformedBatchSpecError: If the token is neither form, or the
            count/amount is not positive.
    """
    text = token.strip()

    try:
        count = int(text)
    except ValueError:
        pass
    else:
        if count < 1:
            raise MalformedBatchSpecError(
                f"Batch count must be a positive integer, got {count}"
            )
        return CountSpec(count)

    parts = text.split()
    if len(parts) != 2:
        raise MalformedBatchSpecError(
            f"Invalid batch size '{token}'. Use a count (e.g. '4') "
            "or '<amount> <unit>' (e.g. '1 month')"
        )

    amount_text, unit_text = parts
    try:
        amount = int(amount_text)
    except ValueError:
        raise MalformedBatchSpecError(
            f"Invalid batch amount '{amount_text}' in '{token}'"
        ) from None
    if amount < 1:
        raise MalformedBatchSpecError(
            f"Batch amount must be a positive integer, got {amount}"
        )

    # "month" and "months" are both accepted
    unit_name = unit_text.lower()
    if unit_name.endswith("s"):
        unit_name = unit_name[:-1]
    try:
        unit = DurationUnit(unit_name)
    except ValueError:
        valid = ", ".join(u.value for u in DurationUnit)
        raise MalformedBatchSpecError(
            f"Unknown batch unit '{unit_text}'. Use one of: {valid}"
        ) from None

    return DurationSpec(amount, unit)


def partition(spec: BatchSpec, start_date: date, end_date: date) -> list[DateInterval]:
    """Split [start_date, end_date] into consecutive batches.

    The first interval starts at start_date and the last one ends exactly
    at end_date. A range where start equals end yields a single zero-width
    interval.

    Args:
        spec: Count or duration batch size.
        start_date: First day of the range.
        end_date: Last day of the range.

    Returns:
        Ordered list of intervals.

    Raises:
        InvalidRangeError: If start_date is after end_date.
    """
    if start_date > end_date:
        raise InvalidRangeError(
            f"Start date {start_date} is after end date {end_date}"
        )

    if start_date == end_date:
        return [DateInterval(start_date, end_date)]

    if isinstance(spec, CountSpec):
        return _partition_by_count(spec.count, start_date, end_date)
    return _partition_by_duration(spec, start_date, end_date)


def _partition_by_count(count: int, start_date: date, end_date: date) -> list[DateInterval]:
    """Divide the range into `count` batches of floor(total / count) days.

    Each batch starts the day after the previous one ends. The last batch
    absorbs the rounding remainder. If that spacing would push the first
    count - 1 batches past end_date, the spans shrink to fit. Only when
    there are more batches than days do the surplus batches collapse onto
    end_date.
    """
    total_days = (end_date - start_date).days
    span = total_days // count
    # Batches before the last one each cover span + 1 days
    if (count - 1) * (span + 1) > total_days:
        span = max((total_days + 1) // count - 1, 0)
    days_per_batch = timedelta(days=span)
    one_day = timedelta(days=1)

    intervals = []
    current = start_date

    for i in range(count):
        start = min(current, end_date)
        if i == count - 1:
            end = end_date
        else:
            end = min(start + days_per_batch, end_date)
        intervals.append(DateInterval(start, end))
        current = end + one_day

    return intervals


def _partition_by_duration(
    spec: DurationSpec, start_date: date, end_date: date
) -> list[DateInterval]:
    """Step through the range in hops of `spec`, clamping the last one.

    Consecutive intervals share their boundary day: Gmail's before: is
    exclusive, so nothing is searched twice.
    """
    intervals = []
    current = start_date
    hops = 1

    while current < end_date:
        boundary = start_date + spec.step(hops)
        intervals.append(DateInterval(current, min(boundary, end_date)))
        current = boundary
        hops += 1

    return intervals
