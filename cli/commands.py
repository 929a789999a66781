"""Typer CLI for inspecting a resolved runtime configuration.

``show`` runs the full initialization against a directory of embedded assets
and prints the handle and merged data as JSON. ``types`` lists the accepted
configuration type tokens.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer

from layerconf.config import DiskFS, EmbeddedFS, initialize, supported_types
from layerconf.utils.exceptions import ConfigurationError
from layerconf.utils.logging import configure_logging

app = typer.Typer(help="Resolve and inspect layered runtime configuration.")


@app.callback(invoke_without_command=False)
def _root_options(
    ctx: typer.Context,
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR).",
        show_default=True,
        case_sensitive=False,
    ),
):
    """Shared option processed before any sub‑command executes."""
    configure_logging(level=getattr(logging, log_level.upper(), logging.WARNING))


@app.command("show")
def show_command(
        embeds: Path = typer.Option(
            Path("."),
            "--embeds",
            help="Directory containing the embeds/ tree (envs/.env, params/*).",
        ),
        config_type: str = typer.Option("yaml", "--config-type", help="Format of config fragments."),
        app_name: str = typer.Option("app", "--app-name", help="Prefix for environment overrides."),
        time_zone: str = typer.Option("", "--time-zone", help="Zone used when TZ is unset."),
        work_dir: Optional[Path] = typer.Option(
            None,
            "--work-dir",
            help="Directory holding params/ overrides (defaults to the executable's directory).",
        ),
        search_path: List[str] = typer.Option(
            [],
            "--search-path",
            help="Extra glob pattern for config fragments; may be repeated.",
        ),
):
    """Initialize the configuration and print the result as JSON."""
    data: dict = {}
    try:
        handle = initialize(
            data,
            EmbeddedFS(embeds),
            DiskFS(),
            search_path,
            config_type=config_type,
            app_name=app_name,
            default_time_zone=time_zone,
            work_dir=work_dir,
        )
    except ConfigurationError as e:
        typer.echo(f"Initialization failed: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(json.dumps({**handle.summary(), "data": data}, indent=2, sort_keys=True, default=str))


@app.command("types")
def types_command():
    """List supported configuration types."""
    for name in supported_types():
        typer.echo(name)
