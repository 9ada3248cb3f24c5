"""Exception hierarchy for mailsift.

Validation errors (bad date range, bad batch size) are raised before any
network call is made. Remote errors abort a search as a whole.
"""


class MailsiftError(Exception):
    """Base class for all mailsift errors."""

    pass


class AuthenticationError(MailsiftError):
    """No usable Gmail credentials (missing, expired or flow failed)."""

    pass


class InvalidRangeError(MailsiftError, ValueError):
    """Start date is after end date."""

    pass


class MalformedBatchSpecError(MailsiftError, ValueError):
    """Batch size is neither a count nor an "<amount> <unit>" duration."""

    pass


class RemoteSearchError(MailsiftError):
    """The Gmail API call failed (network, authorization, quota)."""

    pass


class OutputFormatError(MailsiftError, ValueError):
    """Unknown output format token."""

    pass
