"""Output rendering for search results and labels.

Rows are plain dicts (e.g. MessageSummary.to_dict()). Each format turns a
list of rows into a single string ready to print.
"""

import csv
import io
import json
from enum import Enum

from rich.console import Console
from rich.table import Table

from mailsift.errors import OutputFormatError

__all__ = [
    "OutputFormat",
    "MESSAGE_COLUMNS",
    "MESSAGE_LINE",
    "LABEL_COLUMNS",
    "LABEL_LINE",
    "parse_output_format",
    "render",
]


class OutputFormat(str, Enum):
    """Supported output formats."""

    json = "json"
    jsonl = "jsonl"
    csv = "csv"
    text = "text"
    table = "table"
    markdown = "markdown"


# Columns shown in table/markdown output, and the text line template
MESSAGE_COLUMNS = ["subject", "from", "date", "snippet"]
MESSAGE_LINE = "{subject} from {from} on {date}: {snippet}"

LABEL_COLUMNS = ["name", "id", "type"]
LABEL_LINE = "- {name}"

TABLE_WIDTH = 160


def parse_output_format(token: str) -> OutputFormat:
    """Validate an output format token.

    Raises:
        OutputFormatError: If the token isn't a known format.
    """
    try:
        return OutputFormat(token.lower())
    except ValueError:
        valid = ", ".join(f.value for f in OutputFormat)
        raise OutputFormatError(
            f"Invalid format '{token}'. Use one of: {valid}"
        ) from None


def render(
    rows: list[dict],
    fmt: OutputFormat | str,
    columns: list[str],
    line_template: str,
) -> str:
    """Render rows in the requested format.

    Args:
        rows: Records to render.
        fmt: Output format (enum member or token).
        columns: Columns for table and markdown output.
        line_template: str.format template for text output, one per row.

    Returns:
        Rendered text (no trailing newline).

    Raises:
        OutputFormatError: If fmt is not a known format.
    """
    if not isinstance(fmt, OutputFormat):
        fmt = parse_output_format(fmt)

    if fmt is OutputFormat.json:
        return json.dumps(rows, indent=2, ensure_ascii=False)
    if fmt is OutputFormat.jsonl:
        return "\n".join(json.dumps(row, ensure_ascii=False) for row in rows)
    if fmt is OutputFormat.csv:
        return _render_csv(rows, columns)
    if fmt is OutputFormat.text:
        return "\n".join(line_template.format_map(_Row(row)) for row in rows)
    if fmt is OutputFormat.table:
        return _render_table(rows, columns)
    return _render_markdown(rows, columns)


class _Row(dict):
    """Row mapping that renders missing keys as empty strings."""

    def __missing__(self, key):
        return ""


def _render_csv(rows: list[dict], columns: list[str]) -> str:
    # All fields of the records, in record order; columns if there are none
    fieldnames = list(rows[0].keys()) if rows else columns
    buffer = io.StringIO()
    writer = csv.DictWriter(
        buffer, fieldnames=fieldnames, extrasaction="ignore", lineterminator="\n"
    )
    writer.writeheader()
    writer.writerows(rows)
    return buffer.getvalue().rstrip("\n")


def _render_table(rows: list[dict], columns: list[str]) -> str:
    table = Table(show_lines=False)
    for column in columns:
        table.add_column(column.capitalize(), justify="left", overflow="fold")
    for row in rows:
        table.add_row(*(str(row.get(column, "")) for column in columns))

    console = Console(width=TABLE_WIDTH, force_terminal=False, color_system=None)
    with console.capture() as capture:
        console.print(table)
    return capture.get().rstrip("\n")


def _escape_cell(value) -> str:
    return str(value).replace("|", "\\|").replace("\n", " ")


def _render_markdown(rows: list[dict], columns: list[str]) -> str:
    lines = [
        "| " + " | ".join(column.capitalize() for column in columns) + " |",
        "|" + "|".join("-" * (len(column) + 2) for column in columns) + "|",
    ]
    for row in rows:
        lines.append(
            "| " + " | ".join(_escape_cell(row.get(c, "")) for c in columns) + " |"
        )
    return "\n".join(lines)
