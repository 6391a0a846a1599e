"""Writing build results as JSON and as a console table."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.types import Published, Resolution


def decision_payload(resolution: Resolution) -> dict[str, Any]:
    """Serialize one resolution.

    ``permalink`` is the published path, or ``False`` for items that are not
    published, which is what static site generators expect for a suppressed page.
    """
    decision = resolution.decision
    published = isinstance(decision, Published)
    return {
        "source": resolution.item.source,
        "title": resolution.item.title,
        "permalink": decision.path if published else False,
        "published": published,
        "reason": None if published else decision.reason,
    }


def write_results(resolutions: Iterable[Resolution], path: Path) -> Path:
    payload = [decision_payload(r) for r in resolutions]
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"{json.dumps(payload, ensure_ascii=False, indent=2)}\n", encoding="utf-8")
    return path


def render_table(resolutions: Iterable[Resolution], console: Console) -> None:
    table = Table(title="Permalinks")
    table.add_column("Source", overflow="fold")
    table.add_column("Title")
    table.add_column("Permalink")

    for resolution in resolutions:
        decision = resolution.decision
        if isinstance(decision, Published):
            link = f"[green]{escape(decision.path)}[/green]"
        else:
            link = f"[yellow]unpublished ({decision.reason})[/yellow]"
        table.add_row(
            escape(str(resolution.item.source or "-")), escape(str(resolution.item.title or "-")), link
        )

    console.print(table)
