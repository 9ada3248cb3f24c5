"""Multi-batch search orchestration.

Runs one remote search per date batch, one batch at a time, and joins the
results in batch order before applying the overall limit.
"""

import logging
from dataclasses import replace
from itertools import chain
from typing import Protocol

from mailsift.errors import InvalidRangeError

from .batching import partition
from .models import BatchSpec, DateInterval, MessageSummary, SearchCriteria

logger = logging.getLogger(__name__)


class MailSearchClient(Protocol):
    """Anything that can run a single criteria search to completion."""

    def search(self, criteria: SearchCriteria) -> list[MessageSummary]: ...


def plan_batches(
    criteria: SearchCriteria, batch_spec: BatchSpec | None
) -> list[DateInterval] | None:
    """Work out the date batches for a search.

    Returns None when the search should run as a single pass: no batch
    size was given, or the criteria has an open-ended date range.

    Raises:
        InvalidRangeError: If start_date is after end_date.
    """
    start, end = criteria.start_date, criteria.end_date

    if start is not None and end is not None and start > end:
        raise InvalidRangeError(f"Start date {start} is after end date {end}")

    if batch_spec is None or start is None or end is None:
        return None

    return partition(batch_spec, start, end)


def search(
    criteria: SearchCriteria,
    batch_spec: BatchSpec | None,
    client: MailSearchClient,
) -> list[MessageSummary]:
    """Search the mailbox, batch by batch.

    Each batch uses a copy of the criteria with its dates replaced by the
    batch bounds. Every batch is exhausted before the overall limit is
    applied, so the result is the first `limit` messages in batch order.

    Any error raised by the client aborts the whole search; results from
    batches that already completed are discarded.

    Args:
        criteria: Filters, including the overall date range and limit.
        batch_spec: How to split the date range, or None for one pass.
        client: Remote search client.

    Returns:
        Matching messages, in batch order then listing order.

    Raises:
        InvalidRangeError: Before any remote call, for an inverted range.
        RemoteSearchError: If any remote call fails.
    """
    intervals = plan_batches(criteria, batch_spec)

    if intervals is None:
        batches = [tuple(client.search(criteria))]
    else:
        batches = []
        for index, interval in enumerate(intervals, start=1):
            logger.info(
                "Batch %d/%d: %s to %s",
                index,
                len(intervals),
                interval.start.isoformat(),
                interval.end.isoformat(),
            )
            batch_criteria = replace(
                criteria, start_date=interval.start, end_date=interval.end
            )
            batch = tuple(client.search(batch_criteria))
            logger.info("Batch %d/%d: %d message(s)", index, len(intervals), len(batch))
            batches.append(batch)

    results = list(chain.from_iterable(batches))

    if criteria.limit is not None:
        results = results[: criteria.limit]

    return results
