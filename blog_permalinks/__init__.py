"""
Blog Permalinks - build-time permalink hook for static blogs.

This package reads the front matter of blog posts and decides, for each
post, whether it is published and under which URL. Generated URLs have the
form /blog/<slug>/ and stay unique within a build run.

Main entry point is the CLI via `blog-permalinks resolve` command.

Example:
    $ blog-permalinks resolve posts/*.md -o out/
"""

__all__ = [
    "__version__",
    "ContentItem",
    "PermalinkResolver",
    "Published",
    "SlugRegistry",
    "Unpublished",
    "resolve_items",
    "slugify",
]
__version__ = "0.1.0"

from .core import ContentItem, PermalinkResolver, Published, SlugRegistry, Unpublished, slugify
from .runner import resolve_items
