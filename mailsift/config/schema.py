"""Configuration schema definitions.

Uses TypedDict for type safety without runtime overhead.
These types match the structure of config.toml.
"""

from typing import TypedDict


class DefaultsConfig(TypedDict, total=False):
    """Default settings for search commands.

    Attributes:
        output: Output format used when --output is not given.
        batch_size: Batch size used when --batch-size is not given
            (e.g. "4" or "1 month").
        max_results: Cap on messages listed per Gmail query.
        concurrency: Parallel metadata fetches per batch.
    """

    output: str
    batch_size: str
    max_results: int
    concurrency: int


class GmailConfig(TypedDict, total=False):
    """Gmail OAuth client settings.

    Attributes:
        client_id: Google Cloud OAuth client ID.
        client_secret: Optional client secret (prefer env var).
        credentials_file: Path to an OAuth client JSON downloaded from
            Google Cloud Console. Used instead of client_id/client_secret.
    """

    client_id: str
    client_secret: str
    credentials_file: str


class MailsiftConfig(TypedDict, total=False):
    """Root configuration structure."""

    defaults: DefaultsConfig
    gmail: GmailConfig
