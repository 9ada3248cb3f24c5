"""Main CLI entry point for mailsift."""

import logging

import typer
from typing_extensions import Annotated

from mailsift import __version__
from mailsift.cli import commands

app = typer.Typer(
    name="mailsift",
    help="Search a Gmail mailbox from the command line",
    no_args_is_help=True,
)

# Register command groups
app.add_typer(commands.auth.app, name="auth")
app.add_typer(commands.labels.app, name="labels")
app.add_typer(commands.emails.app, name="emails")
app.add_typer(commands.config.app, name="config")


@app.callback()
def root(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log progress to stderr")
    ] = False,
):
    """Search a Gmail mailbox from the command line."""
    # stdout carries the rendered results only
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


@app.command()
def version():
    """Show version information."""
    typer.echo(f"mailsift version {__version__}")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
