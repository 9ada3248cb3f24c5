"""Config command implementation.

Manages the mailsift configuration file.
"""

import typer
from typing_extensions import Annotated

from mailsift.config import CONFIG_FILE, init_config, load_config, set_config_value
from mailsift.config.paths import CONFIG_DIR

app = typer.Typer(help="Manage configuration")

# Keys whose values are never printed
SECRET_KEYS = {"client_secret"}


@app.command()
def init(
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Overwrite existing config")
    ] = False,
):
    """Initialize configuration directory and template config file."""
    created = init_config(overwrite=force)

    if created:
        typer.echo(f"Created config directory: {CONFIG_DIR}")
        typer.echo(f"Created config file: {CONFIG_FILE}")
        typer.echo()
        typer.echo("Edit the config file to add your Gmail OAuth client.")
    else:
        typer.echo(f"Config already exists at {CONFIG_FILE}")
        typer.echo("Use --force to overwrite.")


@app.command()
def show():
    """Display current configuration.

    Secrets (like client_secret) are redacted in output.
    """
    config = load_config()

    if not config:
        typer.echo("No configuration found.")
        typer.echo(f"Run 'mailsift config init' to create {CONFIG_FILE}")
        return

    for section, values in config.items():
        if not isinstance(values, dict):
            typer.echo(f"{section} = {values}")
            continue
        typer.echo(f"[{section}]")
        for key, value in values.items():
            if key in SECRET_KEYS:
                value = "***REDACTED***" if value else "(not set)"
            typer.echo(f"  {key} = {value}")
        typer.echo()


@app.command("set")
def set_value(
    key: Annotated[
        str,
        typer.Argument(
            help="Configuration key (dot notation, e.g., 'defaults.max_results')"
        ),
    ],
    value: Annotated[str, typer.Argument(help="Configuration value")],
):
    """Set a configuration value using dot notation.

    Examples:
        mailsift config set defaults.batch_size "1 month"
        mailsift config set gmail.credentials_file ~/credentials.json
    """
    try:
        set_config_value(key, value)
        typer.echo(f"Set {key} = {value}")
    except ValueError as e:
        typer.echo(f"Invalid value: {e}", err=True)
        raise typer.Exit(1)
