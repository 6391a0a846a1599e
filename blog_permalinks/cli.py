"""
Command-line interface for the permalink hook.

Uses Typer to expose the build run and the slug helper. Loads a .env file
so the build time can be pinned through BLOG_PERMALINKS_NOW.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import typer
import yaml
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from .config import AppConfig, load_config
from .core.dates import parse_iso8601
from .core.errors import PermalinkError
from .core.slug import slugify
from .runner import run_build

app = typer.Typer(add_completion=False, help="Derive blog permalinks from front matter.")
console = Console()


def _parse_now(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return parse_iso8601(value)
    except ValueError as exc:
        raise typer.BadParameter(f"not an ISO 8601 timestamp: {value}", param_hint="--now") from exc


def _load_config(path: Path | None) -> AppConfig:
    try:
        return load_config(str(path) if path else None)
    except (OSError, ValueError, TypeError, yaml.YAMLError) as exc:
        console.print(f"[red]Invalid config {path}:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc


@app.command()
def resolve(
    files: list[Path] | None = typer.Argument(
        None, exists=True, dir_okay=False, readable=True, help="Markdown files in build order."
    ),
    manifest: Path | None = typer.Option(
        None, "--manifest", "-m", exists=True, dir_okay=False, help="JSON or YAML item list."
    ),
    output: Path = typer.Option(Path("out"), "--output", "-o"),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, dir_okay=False),
    now: str | None = typer.Option(
        None,
        "--now",
        envvar="BLOG_PERMALINKS_NOW",
        help="Build time as ISO 8601 (defaults to the current time).",
    ),
    prefix: str | None = typer.Option(None, "--prefix", help="Path prefix for generated permalinks."),
    timezone_name: str | None = typer.Option(
        None, "--timezone", help="Timezone for dates without an offset."
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_format: str | None = typer.Option(
        None, "--log-format", help="Log file format: jsonl or plain."
    ),
    log_file: bool | None = typer.Option(
        None, "--log-file/--no-log-file", help="Enable or disable file logging."
    ),
    table: bool | None = typer.Option(
        None, "--table/--no-table", help="Print the result table."
    ),
):
    """Resolve permalinks for one build run.

    Manifest items come first, then the Markdown files, each in the order
    given. Results are written to permalinks.json in the output directory.
    """
    load_dotenv()

    cfg = _load_config(config)

    if prefix is not None:
        cfg.permalinks.prefix = prefix
    if timezone_name:
        cfg.permalinks.timezone = timezone_name
    if log_level:
        cfg.logging.level = log_level
    if log_format:
        cfg.logging.format = log_format
    if log_file is not None:
        cfg.logging.file = log_file
    if table is not None:
        cfg.output.table = table

    if not files and manifest is None:
        console.print("[red]Nothing to resolve:[/red] pass Markdown files or --manifest.")
        raise typer.Exit(code=2)

    try:
        summary = run_build(
            list(files or []),
            output,
            cfg,
            now=_parse_now(now),
            manifest=manifest,
            console=console,
        )
    except PermalinkError as exc:
        console.print(f"[red]Build failed:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    console.print(
        f"Resolved {summary.total} items: {summary.published} published, "
        f"{summary.unpublished} unpublished"
    )
    console.print(f"Results written: {summary.output_path}")


@app.command()
def slug(title: str = typer.Argument(..., help="Title to slugify.")):
    """Print the slug a title would receive before collision suffixes."""
    typer.echo(slugify(title))


if __name__ == "__main__":
    app()
