"""Auth command implementation.

Runs the Gmail OAuth flow and manages the cached token.
"""

import typer

from mailsift.auth import login as gmail_login
from mailsift.auth import logout as gmail_logout
from mailsift.config import get_gmail_config, load_config
from mailsift.errors import AuthenticationError

app = typer.Typer(help="Authentication management")


@app.command()
def login():
    """Authenticate with Gmail using the OAuth loopback flow.

    Opens a browser for you to sign in with your Google account.
    The token is cached locally for future use.
    """
    config = load_config()

    typer.echo("Starting authentication...")

    try:
        gmail_login(get_gmail_config(config))
    except AuthenticationError as e:
        typer.echo(f"Authentication failed: {e}", err=True)
        raise typer.Exit(1)

    typer.echo("Authentication successful and saved.")


@app.command()
def logout():
    """Clear saved authentication credentials."""
    if gmail_logout():
        typer.echo("Credentials cleared successfully.")
    else:
        typer.echo("No saved credentials found.")


# Names used by earlier releases
app.command("setup", hidden=True)(login)
app.command("clear", hidden=True)(logout)
