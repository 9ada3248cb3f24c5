"""Search module for remote Gmail search.

Builds Gmail queries from search criteria, splits date ranges into
batches, and runs one remote search per batch.
"""

from .batching import parse_batch_spec, partition
from .models import (
    BatchSpec,
    CountSpec,
    DateInterval,
    DurationSpec,
    DurationUnit,
    MessageSummary,
    SearchCriteria,
)
from .orchestrator import MailSearchClient, search
from .query import build_query

__all__ = [
    "BatchSpec",
    "CountSpec",
    "DateInterval",
    "DurationSpec",
    "DurationUnit",
    "MailSearchClient",
    "MessageSummary",
    "SearchCriteria",
    "build_query",
    "parse_batch_spec",
    "partition",
    "search",
]
