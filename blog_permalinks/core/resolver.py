"""Permalink resolution for blog posts.

Each content item is evaluated once, in the order the build presents it:

1. Future-dated items are not published
2. An explicit ``permalink`` in front matter is used verbatim
3. Otherwise the title is slugified into ``/blog/<slug>/``, with ``-2``,
   ``-3``, ... appended until the slug is unused in this build run
4. Items with neither permalink nor title are not published
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone, tzinfo

from ..utils.logging import log_event
from .dates import ensure_aware, parse_item_date
from .registry import SlugRegistry
from .slug import slugify
from .types import (
    FUTURE_DATED,
    MISSING_TITLE,
    ContentItem,
    PermalinkDecision,
    Published,
    Unpublished,
)

DEFAULT_PREFIX = "/blog/"


def normalize_prefix(prefix: str) -> str:
    """Return ``prefix`` with exactly one leading and one trailing slash."""
    inner = prefix.strip().strip("/")
    return f"/{inner}/" if inner else "/"


class PermalinkResolver:
    """Decides the permalink of each content item in one build run.

    The resolver owns the SlugRegistry it writes to. Create one resolver (or
    reset its registry) per build run.
    """

    def __init__(
        self,
        registry: SlugRegistry | None = None,
        *,
        prefix: str = DEFAULT_PREFIX,
        tz: tzinfo = timezone.utc,
        logger: logging.Logger | None = None,
    ):
        """Initialize the resolver.

        Args:
            registry: Slugs already taken in this run; a new empty one if None
            prefix: Path prefix for generated permalinks
            tz: Timezone applied to naive front matter dates
            logger: Logger for decision events, or None for silence
        """
        self.registry = registry if registry is not None else SlugRegistry()
        self.prefix = normalize_prefix(prefix)
        self.tz = tz
        self._logger = logger

    def resolve(self, item: ContentItem, now: datetime | None = None) -> PermalinkDecision:
        """Return the permalink decision for ``item``.

        Args:
            item: Front matter of the content item
            now: Build time; defaults to the current UTC time

        Returns:
            Published with the final path, or Unpublished with a reason

        Raises:
            InvalidDateError: If the item's date cannot be parsed
        """
        now = ensure_aware(now) if now is not None else datetime.now(timezone.utc)

        published_at = parse_item_date(item.date, self.tz, item.source)
        if published_at is not None and published_at > now:
            return self._decide(item, Unpublished(FUTURE_DATED))

        # Only text is a path; the loader already turns numbers into strings
        # and rejects other types, so anything else here counts as absent.
        if isinstance(item.permalink, str) and item.permalink:
            # Explicit permalinks bypass the registry, duplicates included.
            return self._decide(item, Published(item.permalink))

        if isinstance(item.title, str) and item.title:
            slug = self._claim_slug(slugify(item.title), item)
            return self._decide(item, Published(f"{self.prefix}{slug}/"))

        return self._decide(item, Unpublished(MISSING_TITLE))

    def _claim_slug(self, base_slug: str, item: ContentItem) -> str:
        slug = base_slug
        counter = 2
        while slug in self.registry:
            slug = f"{base_slug}-{counter}"
            counter += 1
        if slug != base_slug:
            log_event(
                self._logger,
                "Slug collision resolved",
                base_slug=base_slug,
                slug=slug,
                source=item.source,
            )
        self.registry.add(slug)
        return slug

    def _decide(self, item: ContentItem, decision: PermalinkDecision) -> PermalinkDecision:
        log_event(
            self._logger,
            "Permalink decided",
            level=logging.DEBUG,
            source=item.source,
            title=item.title,
            decision=repr(decision),
        )
        return decision
