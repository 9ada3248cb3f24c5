"""mailsift - search a Gmail mailbox from the command line."""

__version__ = "0.1.0"
