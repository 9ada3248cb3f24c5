"""Gmail authentication via OAuth 2.0 Installed Application Flow.

Handles authentication with Gmail using the OAuth 2.0 loopback redirect flow,
which is ideal for CLI applications. The user's browser opens to Google's
consent page, they authenticate, and the authorization code is captured via
a local HTTP server redirect.

Token caching is handled by google.oauth2.credentials, which we persist
to ~/.config/mailsift/credentials/gmail_token.json
"""

import logging
import os

from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from mailsift.config.paths import GMAIL_TOKEN_FILE, ensure_credentials_dir
from mailsift.errors import AuthenticationError

logger = logging.getLogger(__name__)

# Searching only ever reads the mailbox
SCOPES = ["https://www.googleapis.com/auth/gmail.readonly"]

# Environment variable for client secret.
# Using env var is preferred over storing in config.toml for security.
CLIENT_SECRET_ENV = "MAILSIFT_GMAIL_CLIENT_SECRET"

# Loopback redirect for installed applications
REDIRECT_PORT = 8080
REDIRECT_URI = f"http://localhost:{REDIRECT_PORT}"


def _load_token() -> Credentials | None:
    """Load credentials from disk.

    Returns None if the token file doesn't exist or is invalid.
    """
    if not GMAIL_TOKEN_FILE.exists():
        return None

    try:
        return Credentials.from_authorized_user_file(str(GMAIL_TOKEN_FILE), SCOPES)
    except ValueError as e:
        # Invalid token file - will re-authenticate
        logger.warning("Ignoring unreadable token file %s: %s", GMAIL_TOKEN_FILE, e)
        return None


def _save_token(creds: Credentials) -> None:
    """Persist credentials to disk.

    Sets file permissions to 600 (owner read/write only) to protect tokens.
    """
    ensure_credentials_dir()

    GMAIL_TOKEN_FILE.write_text(creds.to_json())
    GMAIL_TOKEN_FILE.chmod(0o600)


def get_client_secret(gmail_config: dict) -> str | None:
    """Get client secret from environment variable or config.

    Environment variable takes precedence for security.
    """
    return os.environ.get(CLIENT_SECRET_ENV) or gmail_config.get("client_secret")


def _build_client_config(client_id: str, client_secret: str) -> dict:
    """Build OAuth client configuration dict.

    Google's InstalledAppFlow expects the JSON structure that normally
    comes from downloading credentials from Cloud Console. We construct
    it from our config values.
    """
    return {
        "installed": {
            "client_id": client_id,
            "client_secret": client_secret,
            "auth_uri": "https://accounts.google.com/o/oauth2/auth",
            "token_uri": "https://oauth2.googleapis.com/token",
            "redirect_uris": [REDIRECT_URI],
        }
    }


def _build_flow(gmail_config: dict) -> InstalledAppFlow:
    """Create the OAuth flow from a credentials file or client ID/secret.

    Raises:
        AuthenticationError: If neither is configured.
    """
    credentials_file = gmail_config.get("credentials_file")
    if credentials_file:
        path = os.path.expanduser(credentials_file)
        if not os.path.exists(path):
            raise AuthenticationError(f"Credentials file not found: {path}")
        return InstalledAppFlow.from_client_secrets_file(path, scopes=SCOPES)

    client_id = gmail_config.get("client_id")
    if not client_id:
        raise AuthenticationError(
            "Gmail client is not configured. Set 'gmail.credentials_file' or "
            "'gmail.client_id' with 'mailsift config set'."
        )

    client_secret = get_client_secret(gmail_config)
    if not client_secret:
        raise AuthenticationError(
            f"Gmail client_secret not found. Set {CLIENT_SECRET_ENV} or add "
            "'client_secret' to the [gmail] config section."
        )

    return InstalledAppFlow.from_client_config(
        _build_client_config(client_id, client_secret),
        scopes=SCOPES,
        redirect_uri=REDIRECT_URI,
    )


def authenticate_loopback_flow(gmail_config: dict) -> Credentials:
    """Perform OAuth 2.0 loopback flow authentication.

    Starts a local HTTP server, opens the user's browser to Google's
    consent page, captures the authorization code from the redirect,
    and exchanges it for tokens. The token is saved for later runs.

    If valid cached tokens exist, returns them without prompting.

    Args:
        gmail_config: The [gmail] config section.

    Returns:
        Valid credentials.

    Raises:
        AuthenticationError: If the client is not configured or the
            flow fails.
    """
    creds = get_credentials()
    if creds is not None:
        return creds

    flow = _build_flow(gmail_config)

    try:
        creds = flow.run_local_server(
            port=REDIRECT_PORT,
            success_message="Authentication successful! You can close this window.",
        )
    except Exception as e:
        raise AuthenticationError(f"OAuth 2.0 flow failed: {e}") from e

    _save_token(creds)
    return creds


def get_credentials() -> Credentials | None:
    """Get cached Gmail credentials for API access.

    Silently refreshes the token if expired. Does not prompt for login.

    Returns:
        Credentials object, or None if not authenticated or refresh fails.
    """
    creds = _load_token()
    if not creds:
        return None

    if creds.expired and creds.refresh_token:
        try:
            creds.refresh(Request())
            _save_token(creds)
        except RefreshError as e:
            logger.warning("Token refresh failed: %s", e)
            return None

    return creds if creds.valid else None


def clear_token() -> bool:
    """Delete the cached token.

    Returns:
        True if a token was deleted, False if none existed.
    """
    if not GMAIL_TOKEN_FILE.exists():
        return False

    GMAIL_TOKEN_FILE.unlink()
    return True
