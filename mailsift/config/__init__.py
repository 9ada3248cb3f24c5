"""Configuration management module.

Handles loading, saving, and accessing the mailsift configuration.
Config is stored at ~/.config/mailsift/config.toml

Usage:
    from mailsift.config import load_config, get_defaults

    config = load_config()
    defaults = get_defaults(config)
"""

import tomllib

import tomli_w

from .paths import CONFIG_FILE, ensure_config_dir
from .schema import DefaultsConfig, GmailConfig, MailsiftConfig
from .template import CONFIG_TEMPLATE

__all__ = [
    "load_config",
    "save_config",
    "init_config",
    "get_defaults",
    "get_gmail_config",
    "set_config_value",
    "CONFIG_FILE",
]

# Module-level cache for loaded config.
# Avoids repeated disk reads during a single CLI invocation.
_cached_config: MailsiftConfig | None = None

# Fields that should be integers
INT_FIELDS = {"max_results", "concurrency"}


def load_config(*, force_reload: bool = False) -> MailsiftConfig:
    """Load configuration from disk.

    Returns empty dict if config file doesn't exist.
    Uses module-level caching to avoid repeated disk reads.

    Args:
        force_reload: Bypass cache and read from disk (useful after saving).

    Returns:
        The configuration dictionary.
    """
    global _cached_config

    if _cached_config is not None and not force_reload:
        return _cached_config

    if not CONFIG_FILE.exists():
        _cached_config = {}
        return _cached_config

    with open(CONFIG_FILE, "rb") as f:
        _cached_config = tomllib.load(f)

    return _cached_config


def save_config(config: MailsiftConfig) -> None:
    """Save configuration to disk.

    Creates config directory if needed. Updates the module cache.
    """
    global _cached_config

    ensure_config_dir()

    with open(CONFIG_FILE, "wb") as f:
        tomli_w.dump(config, f)

    _cached_config = config


def init_config(*, overwrite: bool = False) -> bool:
    """Initialize config directory and create template config file.

    Args:
        overwrite: If True, overwrite existing config file.

    Returns:
        True if config was created, False if it already existed.
    """
    ensure_config_dir()

    if CONFIG_FILE.exists() and not overwrite:
        return False

    CONFIG_FILE.write_text(CONFIG_TEMPLATE)
    return True


def get_defaults(config: MailsiftConfig) -> DefaultsConfig:
    """Get the [defaults] section, or an empty dict."""
    return config.get("defaults", {})


def get_gmail_config(config: MailsiftConfig) -> GmailConfig:
    """Get the [gmail] section, or an empty dict."""
    return config.get("gmail", {})


def set_config_value(key: str, value: str) -> None:
    """Set a configuration value using dot notation.

    Examples:
        set_config_value("defaults.max_results", "200")
        set_config_value("gmail.client_id", "xxx.apps.googleusercontent.com")

    Args:
        key: Dot-separated key path (e.g., "defaults.max_results").
        value: Value to set (will be type-converted for known fields).

    Raises:
        ValueError: If value cannot be converted to expected type.
    """
    config = load_config(force_reload=True)

    parts = key.split(".")

    # Navigate to parent dict, creating intermediate dicts as needed
    current: dict = config
    for part in parts[:-1]:
        if part not in current:
            current[part] = {}
        current = current[part]

    final_key = parts[-1]
    current[final_key] = _convert_value(final_key, value)

    save_config(config)


def _convert_value(key: str, value: str) -> str | int:
    """Convert string value to int for known numeric fields."""
    if key in INT_FIELDS:
        return int(value)

    return value
