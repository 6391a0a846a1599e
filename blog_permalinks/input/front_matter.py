"""Loading content items from Markdown front matter and manifests.

Only the files the caller names are read. Items keep the order in which
they are given; nothing here sorts them.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable

import yaml

from ..core.errors import InputError
from ..core.types import ContentItem

_OPEN_FENCE = "---"
_CLOSE_FENCES = ("---", "...")


def parse_front_matter(text: str, source: str | None = None) -> dict[str, Any]:
    """Return the YAML front matter mapping of a Markdown document.

    Args:
        text: Full document text
        source: Name used in error messages

    Returns:
        The parsed mapping, or an empty dict when the document has no
        front matter block

    Raises:
        InputError: If the block is unterminated, not valid YAML, or not a mapping
    """
    lines = text.lstrip("\ufeff").splitlines()
    if not lines or lines[0].rstrip() != _OPEN_FENCE:
        return {}

    for idx, line in enumerate(lines[1:], start=1):
        if line.rstrip() in _CLOSE_FENCES:
            block = "\n".join(lines[1:idx])
            break
    else:
        raise InputError(f"Unterminated front matter in {source or 'document'}")

    try:
        data = yaml.safe_load(block)
    except yaml.YAMLError as exc:
        raise InputError(f"Invalid front matter YAML in {source or 'document'}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InputError(f"Front matter in {source or 'document'} must be a mapping")
    return data


def _text_field(data: dict[str, Any], key: str, source: str | None) -> str | None:
    value = data.get(key)
    # `permalink: false` means "no permalink", same as leaving it out.
    if value is None or value is False:
        return None
    if isinstance(value, str):
        return value
    # YAML reads `title: 2024` as a number.
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise InputError(
        f"Front matter {key!r} in {source or 'document'} must be text, "
        f"got {type(value).__name__}: {value!r}"
    )


def item_from_mapping(data: dict[str, Any], source: str | None = None) -> ContentItem:
    """Build a ContentItem from front matter keys; other keys are ignored.

    Raises:
        InputError: If ``title`` or ``permalink`` is a date, list, mapping or ``true``
    """
    return ContentItem(
        date=data.get("date"),
        title=_text_field(data, "title", source),
        permalink=_text_field(data, "permalink", source),
        source=source,
    )


def load_markdown_items(paths: Iterable[Path]) -> list[ContentItem]:
    """Read one ContentItem from each Markdown file, in the given order."""
    items: list[ContentItem] = []
    for path in paths:
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise InputError(f"Cannot read {path}: {exc}") from exc
        items.append(item_from_mapping(parse_front_matter(text, str(path)), str(path)))
    return items


def load_manifest(path: Path) -> list[ContentItem]:
    """Read content items from a JSON or YAML manifest.

    The manifest is either a list of front matter mappings or a mapping with
    an ``items`` list. Entries may carry a ``source``; otherwise the source is
    ``<file>#<index>``.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise InputError(f"Cannot read manifest {path}: {exc}") from exc

    try:
        if path.suffix.lower() == ".json":
            payload = json.loads(text)
        else:
            payload = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise InputError(f"Invalid manifest {path}: {exc}") from exc

    if isinstance(payload, dict):
        payload = payload.get("items")
    if not isinstance(payload, list):
        raise InputError(f"Manifest {path} must be a list of items")

    items: list[ContentItem] = []
    for idx, entry in enumerate(payload):
        if not isinstance(entry, dict):
            raise InputError(f"Manifest {path} entry {idx} must be a mapping")
        source = entry.get("source") or f"{path}#{idx}"
        items.append(item_from_mapping(entry, str(source)))
    return items
