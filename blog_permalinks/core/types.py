"""
Core data types for the permalink hook.

- ContentItem: Front matter fields the resolver reads for one post
- Published / Unpublished: The two possible permalink decisions
- Resolution: An item paired with its decision, as produced by a build run
"""

from __future__ import annotations

from dataclasses import dataclass
import datetime as dt
from typing import Union

FUTURE_DATED = "future_dated"
MISSING_TITLE = "missing_title"


@dataclass
class ContentItem:
    """Front matter of a single content item.

    Attributes:
        date: Publication date as an ISO 8601 string, date or datetime
        title: Post title, used to derive the slug
        permalink: Explicit permalink override, used verbatim
        source: Where the item came from (file path or manifest entry)
    """
    date: Union[str, dt.date, dt.datetime, None] = None
    title: str | None = None
    permalink: str | None = None
    source: str | None = None


@dataclass(frozen=True)
class Published:
    """The item is published at ``path``."""
    path: str


@dataclass(frozen=True)
class Unpublished:
    """The item is excluded from the published set.

    Attributes:
        reason: FUTURE_DATED or MISSING_TITLE
    """
    reason: str = MISSING_TITLE


PermalinkDecision = Union[Published, Unpublished]


@dataclass
class Resolution:
    """A content item together with the decision made for it."""
    item: ContentItem
    decision: PermalinkDecision

    @property
    def published(self) -> bool:
        return isinstance(self.decision, Published)

    @property
    def path(self) -> str | None:
        if isinstance(self.decision, Published):
            return self.decision.path
        return None
