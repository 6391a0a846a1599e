"""
Core domain models and the permalink algorithm.

This package contains data types and logic that are independent of how
items are loaded or how results are written.
"""

from .errors import InputError, InvalidDateError, PermalinkError
from .registry import SlugRegistry
from .resolver import PermalinkResolver, normalize_prefix
from .slug import slugify
from .types import ContentItem, PermalinkDecision, Published, Resolution, Unpublished

__all__ = [
    "ContentItem",
    "PermalinkDecision",
    "Published",
    "Unpublished",
    "Resolution",
    "SlugRegistry",
    "PermalinkResolver",
    "normalize_prefix",
    "slugify",
    "PermalinkError",
    "InvalidDateError",
    "InputError",
]
