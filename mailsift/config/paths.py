"""Path constants and directory utilities for mailsift config.

- Config: ~/.config/mailsift/config.toml
- Gmail token: ~/.config/mailsift/credentials/gmail_token.json (mode 600)
"""

from pathlib import Path


# XDG-compliant config directory
CONFIG_DIR = Path.home() / ".config" / "mailsift"
CONFIG_FILE = CONFIG_DIR / "config.toml"

# OAuth token stored separately with restricted permissions
CREDENTIALS_DIR = CONFIG_DIR / "credentials"
GMAIL_TOKEN_FILE = CREDENTIALS_DIR / "gmail_token.json"


def ensure_config_dir() -> Path:
    """Create config directory if it doesn't exist.

    Returns the config directory path.
    """
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    return CONFIG_DIR


def ensure_credentials_dir() -> Path:
    """Create credentials directory with restricted permissions.

    Sets directory permissions to 700 (owner read/write/execute only)
    to protect the Gmail token.

    Returns the credentials directory path.
    """
    CREDENTIALS_DIR.mkdir(parents=True, exist_ok=True)
    CREDENTIALS_DIR.chmod(0o700)
    return CREDENTIALS_DIR
