"""
Input loading.

This package turns Markdown files and manifests into ContentItem objects.
"""

from .front_matter import (
    item_from_mapping,
    load_manifest,
    load_markdown_items,
    parse_front_matter,
)

__all__ = [
    "parse_front_matter",
    "item_from_mapping",
    "load_markdown_items",
    "load_manifest",
]
