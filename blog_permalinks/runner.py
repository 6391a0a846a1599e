"""
Build run orchestration.

This module coordinates one build run:
1. Load content items from a manifest and/or Markdown files
2. Resolve every item with a fresh SlugRegistry
3. Warn about published paths that collide
4. Write the JSON result file and print a summary table

A build run always starts from an empty registry. Reusing a registry across
runs would give every title of the second run a ``-2`` suffix.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

from rich.console import Console

from .config import AppConfig
from .core.dates import ensure_aware, resolve_timezone
from .core.registry import SlugRegistry
from .core.resolver import PermalinkResolver
from .core.types import ContentItem, Resolution
from .input.front_matter import load_manifest, load_markdown_items
from .output.writer import render_table, write_results
from .utils.logging import get_logger, log_event, setup_logging


@dataclass
class BuildSummary:
    """Counts collected during a build run.

    Attributes:
        total: Number of items evaluated
        published: Items that received a permalink
        unpublished: Items excluded from the published set
        duplicates: Published paths shared by more than one item
        output_path: Path of the JSON result file
    """
    total: int = 0
    published: int = 0
    unpublished: int = 0
    duplicates: int = 0
    output_path: Path | None = None


def resolve_items(
    items: Iterable[ContentItem],
    cfg: AppConfig,
    now: datetime | None = None,
    logger: logging.Logger | None = None,
) -> list[Resolution]:
    """Resolve items in order against a new, empty slug registry.

    Args:
        items: Content items in build order
        cfg: Application configuration
        now: Build time shared by every item; defaults to the current UTC time
        logger: Logger for events; the `blog_permalinks.runner` logger if None

    Returns:
        One Resolution per item, in input order

    Raises:
        InvalidDateError: If an item carries an unparsable date
    """
    logger = logger or get_logger("runner")
    now = ensure_aware(now) if now is not None else datetime.now(timezone.utc)
    resolver = PermalinkResolver(
        SlugRegistry(),
        prefix=cfg.permalinks.prefix,
        tz=resolve_timezone(cfg.permalinks.timezone),
        logger=logger,
    )

    resolutions = [Resolution(item=item, decision=resolver.resolve(item, now)) for item in items]

    if cfg.output.warn_duplicates:
        _warn_duplicate_paths(resolutions, logger)

    published = sum(1 for r in resolutions if r.published)
    log_event(
        logger,
        "Permalinks resolved",
        total=len(resolutions),
        published=published,
        unpublished=len(resolutions) - published,
        now=now.isoformat(),
    )
    return resolutions


def find_duplicate_paths(resolutions: Iterable[Resolution]) -> dict[str, list[str]]:
    """Map every published path used more than once to the sources using it."""
    by_path: dict[str, list[str]] = defaultdict(list)
    for resolution in resolutions:
        if resolution.path is not None:
            by_path[resolution.path].append(resolution.item.source or "<unknown>")
    return {path: sources for path, sources in by_path.items() if len(sources) > 1}


def _warn_duplicate_paths(resolutions: list[Resolution], logger: logging.Logger) -> None:
    # Only generated slugs are deduplicated; explicit permalinks can still clash.
    for path, sources in find_duplicate_paths(resolutions).items():
        log_event(
            logger,
            f"Duplicate permalink {path}",
            level=logging.WARNING,
            path=path,
            sources=sources,
        )


def run_build(
    inputs: list[Path],
    output_dir: Path,
    cfg: AppConfig,
    now: datetime | None = None,
    manifest: Path | None = None,
    console: Console | None = None,
) -> BuildSummary:
    """Run one complete build over the given inputs.

    Args:
        inputs: Markdown files, resolved in the given order
        output_dir: Directory for the result file and the log file
        cfg: Application configuration
        now: Build time; defaults to the current UTC time
        manifest: Optional manifest whose items come before the Markdown files
        console: Rich console for the summary table

    Returns:
        BuildSummary with counts and the result file path
    """
    logger = setup_logging(cfg.logging, output_dir)
    console = console or Console()

    items: list[ContentItem] = []
    if manifest is not None:
        items.extend(load_manifest(manifest))
    items.extend(load_markdown_items(inputs))
    log_event(logger, "Content items loaded", count=len(items))

    resolutions = resolve_items(items, cfg, now=now, logger=logger)

    output_path = write_results(resolutions, output_dir / cfg.output.filename)
    log_event(logger, "Results written", path=str(output_path))

    if cfg.output.table:
        render_table(resolutions, console)

    published = sum(1 for r in resolutions if r.published)
    return BuildSummary(
        total=len(resolutions),
        published=published,
        unpublished=len(resolutions) - published,
        duplicates=len(find_duplicate_paths(resolutions)),
        output_path=output_path,
    )
