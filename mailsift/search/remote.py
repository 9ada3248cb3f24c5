"""Gmail API client for remote search.

Wraps the Gmail API to provide a clean interface for search operations.
Handles pagination, per-message metadata fetches, and error translation.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor

import httplib2
from google.oauth2.credentials import Credentials
from google_auth_httplib2 import AuthorizedHttp
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from mailsift.errors import RemoteSearchError

from .models import MessageSummary, SearchCriteria
from .query import build_query

logger = logging.getLogger(__name__)

# Gmail caps messages.list page size at 500
MAX_PAGE_SIZE = 500

# Default cap on messages listed for a single query
DEFAULT_MAX_RESULTS = 500

# Default number of concurrent metadata fetches per batch
DEFAULT_CONCURRENCY = 8

METADATA_HEADERS = ["From", "To", "Subject", "Date"]


def _header(headers: list[dict], name: str) -> str:
    """Return the value of the first header called `name`, or ""."""
    for header in headers:
        if header.get("name", "").lower() == name.lower():
            return header.get("value", "")
    return ""


class GmailClient:
    """Client for Gmail API search operations.

    Provides methods for listing labels, listing messages matching a
    query, and fetching message metadata. `search()` combines them and
    is what the search orchestrator calls once per batch.

    Example:
        creds = get_credentials()
        client = GmailClient(creds)
        labels = client.list_labels()
        messages = client.search(SearchCriteria(from_addr="alice@example.com"))
    """

    def __init__(
        self,
        credentials: Credentials,
        max_results: int = DEFAULT_MAX_RESULTS,
        concurrency: int = DEFAULT_CONCURRENCY,
    ):
        """Initialize Gmail client with credentials.

        Args:
            credentials: Google OAuth credentials object.
            max_results: Cap on messages listed per search call.
            concurrency: Worker threads for metadata fetches.
        """
        self._credentials = credentials
        self._max_results = max_results
        self._concurrency = max(1, concurrency)
        self._service = build("gmail", "v1", credentials=credentials)
        # httplib2 is not thread-safe: each worker gets its own transport
        self._local = threading.local()

    def _thread_http(self) -> AuthorizedHttp:
        http = getattr(self._local, "http", None)
        if http is None:
            http = AuthorizedHttp(self._credentials, http=httplib2.Http())
            self._local.http = http
        return http

    def list_labels(self) -> list[dict]:
        """List all labels in the user's mailbox.

        Returns:
            List of label dicts with keys: id, name, type.
            System labels have type='system', user labels have type='user'.

        Raises:
            RemoteSearchError: If the API call fails.
        """
        try:
            result = self._service.users().labels().list(userId="me").execute()
        except HttpError as e:
            raise RemoteSearchError(f"Failed to list labels: {e}") from e

        return [
            {
                "id": label["id"],
                "name": label["name"],
                "type": label.get("type", "user"),
            }
            for label in result.get("labels", [])
        ]

    def list_messages(self, query: str | None = None, max_results: int = 100) -> list[dict]:
        """List messages matching a Gmail search query.

        Handles pagination automatically to fetch up to max_results messages.

        Args:
            query: Gmail search query (e.g., "from:alice after:2024-01-01").
            max_results: Maximum number of messages to return.

        Returns:
            List of message refs, each with keys: id, threadId.

        Raises:
            RemoteSearchError: If the API call fails.
        """
        messages = []
        page_token = None

        while len(messages) < max_results:
            remaining = max_results - len(messages)
            params = {
                "userId": "me",
                "maxResults": min(remaining, MAX_PAGE_SIZE),
            }
            if query:
                params["q"] = query
            if page_token:
                params["pageToken"] = page_token

            try:
                result = self._service.users().messages().list(**params).execute()
            except HttpError as e:
                raise RemoteSearchError(f"Failed to list messages: {e}") from e

            for msg in result.get("messages", []):
                messages.append({"id": msg["id"], "threadId": msg.get("threadId", "")})
                if len(messages) >= max_results:
                    break

            page_token = result.get("nextPageToken")
            if not page_token:
                break

        return messages

    def get_message_metadata(self, message_id: str) -> dict:
        """Get headers and snippet for a single message.

        Safe to call from worker threads.

        Args:
            message_id: The message ID to fetch.

        Returns:
            Raw Gmail message resource in metadata format (id, threadId,
            snippet, payload.headers).

        Raises:
            RemoteSearchError: If the API call fails.
        """
        request = self._service.users().messages().get(
            userId="me",
            id=message_id,
            format="metadata",
            metadataHeaders=METADATA_HEADERS,
        )
        try:
            return request.execute(http=self._thread_http())
        except HttpError as e:
            raise RemoteSearchError(f"Failed to fetch message {message_id}: {e}") from e

    def _summarize(self, ref: dict) -> MessageSummary:
        data = self.get_message_metadata(ref["id"])
        headers = data.get("payload", {}).get("headers", [])
        return MessageSummary(
            id=ref["id"],
            thread_id=ref.get("threadId") or data.get("threadId", ""),
            snippet=data.get("snippet", ""),
            from_addr=_header(headers, "From"),
            to_addr=_header(headers, "To"),
            subject=_header(headers, "Subject"),
            date=_header(headers, "Date"),
        )

    def search(self, criteria: SearchCriteria) -> list[MessageSummary]:
        """Run one search query to completion.

        Lists matching messages (at most criteria.limit or the client's
        max_results, whichever is smaller), then fetches their metadata
        concurrently. Results keep Gmail's listing order.

        Args:
            criteria: Search filters.

        Returns:
            List of message summaries.

        Raises:
            RemoteSearchError: If listing or any metadata fetch fails.
        """
        query = build_query(criteria)
        cap = self._max_results
        if criteria.limit is not None:
            cap = min(cap, criteria.limit)

        logger.debug("Gmail query: %r (max %d)", query, cap)
        refs = self.list_messages(query=query, max_results=cap)

        if not refs:
            return []

        logger.info("Found %d message(s). Fetching details...", len(refs))

        workers = min(self._concurrency, len(refs))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            # map() yields in submission order and re-raises the first failure
            return list(executor.map(self._summarize, refs))
