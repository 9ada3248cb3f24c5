"""Authentication module for Gmail.

Usage:
    from mailsift.auth import login, require_credentials

    # Perform OAuth flow (interactive)
    creds = login(gmail_config)

    # Get cached credentials (non-interactive)
    creds = require_credentials()
"""

from google.oauth2.credentials import Credentials

from mailsift.config.schema import GmailConfig
from mailsift.errors import AuthenticationError

from .gmail import authenticate_loopback_flow, clear_token, get_credentials

__all__ = [
    "login",
    "logout",
    "get_credentials",
    "require_credentials",
    "AuthenticationError",
]


def login(gmail_config: GmailConfig) -> Credentials:
    """Authenticate with Gmail, opening the browser if needed.

    Raises:
        AuthenticationError: If the client is not configured or the
            OAuth flow fails.
    """
    return authenticate_loopback_flow(gmail_config)


def logout() -> bool:
    """Forget the cached Gmail token.

    Returns:
        True if a token was removed.
    """
    return clear_token()


def require_credentials() -> Credentials:
    """Get cached credentials, failing if the user hasn't logged in.

    Raises:
        AuthenticationError: If no valid credentials are cached.
    """
    creds = get_credentials()
    if creds is None:
        raise AuthenticationError("Not authenticated. Run 'mailsift auth login' first.")
    return creds
