"""CLI commands module."""

from . import auth, config, emails, labels

__all__ = ["auth", "labels", "emails", "config"]
