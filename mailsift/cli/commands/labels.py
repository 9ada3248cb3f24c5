"""Labels command implementation."""

import typer
from typing_extensions import Annotated

from mailsift.auth import require_credentials
from mailsift.errors import MailsiftError, OutputFormatError
from mailsift.output import LABEL_COLUMNS, LABEL_LINE, parse_output_format, render
from mailsift.search.remote import GmailClient

app = typer.Typer(help="Operations related to labels")


@app.command("list")
def list_labels(
    output: Annotated[
        str,
        typer.Option(
            "--output", "-o", help="Output format: json, jsonl, csv, text, table, markdown"
        ),
    ] = "text",
):
    """List all labels."""
    try:
        fmt = parse_output_format(output)
    except OutputFormatError as e:
        typer.echo(str(e), err=True)
        return

    try:
        client = GmailClient(require_credentials())
        labels = client.list_labels()
    except MailsiftError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if not labels:
        typer.echo("No labels found.", err=True)
        return

    typer.echo(render(labels, fmt, LABEL_COLUMNS, LABEL_LINE))
