"""Gmail search query construction."""

from datetime import date

from .models import SearchCriteria


def _format_date(value: date) -> str:
    # Gmail accepts both YYYY/MM/DD and YYYY-MM-DD
    return value.isoformat()


def build_query(criteria: SearchCriteria) -> str:
    """Build a Gmail search query from search criteria.

    Clauses are emitted in a fixed order (keyword, from, to, label, date)
    and joined with spaces, which Gmail treats as AND. Values are passed
    through verbatim, without quoting or escaping.

    Examples:
        keyword="invoice", from_addr="billing@example.com"
        -> "(invoice in:body OR invoice in:subject) from:billing@example.com"

    Args:
        criteria: Filters to translate.

    Returns:
        Query string, or "" when no filter is set.
    """
    parts = []

    if criteria.keyword is not None:
        # Parenthesized so the OR doesn't leak into the other clauses
        parts.append(
            f"({criteria.keyword} in:body OR {criteria.keyword} in:subject)"
        )
    if criteria.from_addr is not None:
        parts.append(f"from:{criteria.from_addr}")
    if criteria.to_addr is not None:
        parts.append(f"to:{criteria.to_addr}")
    if criteria.label is not None:
        parts.append(f"label:{criteria.label}")

    # after: is inclusive, before: is exclusive
    if criteria.start_date is not None:
        parts.append(f"after:{_format_date(criteria.start_date)}")
    if criteria.end_date is not None:
        parts.append(f"before:{_format_date(criteria.end_date)}")

    return " ".join(parts)
