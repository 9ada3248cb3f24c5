"""Emails command implementation."""

from datetime import datetime

import typer
from typing_extensions import Annotated

from mailsift.auth import require_credentials
from mailsift.config import get_defaults, load_config
from mailsift.errors import MailsiftError, OutputFormatError
from mailsift.output import MESSAGE_COLUMNS, MESSAGE_LINE, parse_output_format, render
from mailsift.search import SearchCriteria, parse_batch_spec, search
from mailsift.search.orchestrator import plan_batches
from mailsift.search.remote import DEFAULT_CONCURRENCY, DEFAULT_MAX_RESULTS, GmailClient

app = typer.Typer(help="Operations related to emails")

DATE_FORMATS = ["%Y-%m-%d"]


@app.command("search")
def search_emails(
    keyword: Annotated[
        str | None,
        typer.Option("--keyword", help="Keyword to search in the body or subject"),
    ] = None,
    from_: Annotated[
        str | None, typer.Option("--from", help="Sender email address")
    ] = None,
    to: Annotated[str | None, typer.Option("--to", help="Recipient email address")] = None,
    label: Annotated[str | None, typer.Option("--label", help="Gmail label")] = None,
    start_date: Annotated[
        datetime | None,
        typer.Option(
            "--startDate",
            "--start-date",
            formats=DATE_FORMATS,
            help="Start date, inclusive (YYYY-MM-DD)",
        ),
    ] = None,
    end_date: Annotated[
        datetime | None,
        typer.Option(
            "--endDate",
            "--end-date",
            formats=DATE_FORMATS,
            help="End date, exclusive (YYYY-MM-DD)",
        ),
    ] = None,
    output: Annotated[
        str | None,
        typer.Option(
            "--output", "-o", help="Output format: json, jsonl, csv, text, table, markdown"
        ),
    ] = None,
    limit: Annotated[
        int | None, typer.Option("--limit", min=1, help="Maximum number of messages")
    ] = None,
    batch_size: Annotated[
        str | None,
        typer.Option(
            "--batch-size",
            help="Split the date range: a batch count (e.g. 4) or a duration (e.g. '1 month')",
        ),
    ] = None,
):
    """Search emails based on criteria.

    With --batch-size, the range between --startDate and --endDate is
    searched in consecutive batches, one Gmail query each, and the
    results are concatenated in date order.

    Examples:
        mailsift emails search --from alice@example.com --output table
        mailsift emails search --keyword invoice --startDate 2023-01-01 \\
            --endDate 2023-12-31 --batch-size "1 month" --limit 200
    """
    defaults = get_defaults(load_config())

    criteria = SearchCriteria(
        keyword=keyword,
        from_addr=from_,
        to_addr=to,
        label=label,
        start_date=start_date.date() if start_date else None,
        end_date=end_date.date() if end_date else None,
        limit=limit,
    )

    if batch_size is not None and (start_date is None or end_date is None):
        typer.echo("Error: --batch-size requires --startDate and --endDate", err=True)
        raise typer.Exit(1)

    # A bad format is not fatal, but there is no point searching for it
    try:
        fmt = parse_output_format(output or defaults.get("output", "json"))
    except OutputFormatError as e:
        typer.echo(str(e), err=True)
        return

    # Validate everything we can before touching the network
    try:
        batch_token = batch_size or defaults.get("batch_size")
        batch_spec = parse_batch_spec(batch_token) if batch_token else None
        plan_batches(criteria, batch_spec)

        client = GmailClient(
            require_credentials(),
            max_results=defaults.get("max_results", DEFAULT_MAX_RESULTS),
            concurrency=defaults.get("concurrency", DEFAULT_CONCURRENCY),
        )
        messages = search(criteria, batch_spec, client)
    except MailsiftError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if not messages:
        typer.echo("No messages found.", err=True)
        return

    rows = [message.to_dict() for message in messages]
    typer.echo(render(rows, fmt, MESSAGE_COLUMNS, MESSAGE_LINE))
