"""Tests for PermalinkResolver decisions and slug uniqueness."""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from blog_permalinks.core.errors import InvalidDateError
from blog_permalinks.core.registry import SlugRegistry
from blog_permalinks.core.resolver import PermalinkResolver, normalize_prefix
from blog_permalinks.core.types import (
    FUTURE_DATED,
    MISSING_TITLE,
    ContentItem,
    Published,
    Unpublished,
)

NOW = datetime(2024, 6, 1, tzinfo=timezone.utc)


def test_titles_with_same_slug_get_numbered_suffixes():
    resolver = PermalinkResolver()

    first = resolver.resolve(ContentItem(title="Hello World"), NOW)
    second = resolver.resolve(ContentItem(title="Hello, World!"), NOW)

    assert first == Published("/blog/hello-world/")
    assert second == Published("/blog/hello-world-2/")


def test_suffixes_follow_first_seen_order():
    resolver = PermalinkResolver()
    paths = [resolver.resolve(ContentItem(title="Weekly Notes"), NOW).path for _ in range(4)]

    assert paths == [
        "/blog/weekly-notes/",
        "/blog/weekly-notes-2/",
        "/blog/weekly-notes-3/",
        "/blog/weekly-notes-4/",
    ]
    assert set(resolver.registry) == {
        "weekly-notes",
        "weekly-notes-2",
        "weekly-notes-3",
        "weekly-notes-4",
    }


def test_suffix_skips_slugs_taken_by_other_titles():
    """A title that already looks suffixed still blocks that slug."""
    resolver = PermalinkResolver()

    assert resolver.resolve(ContentItem(title="Post 2"), NOW).path == "/blog/post-2/"
    assert resolver.resolve(ContentItem(title="Post"), NOW).path == "/blog/post/"
    assert resolver.resolve(ContentItem(title="Post"), NOW).path == "/blog/post-3/"


def test_future_dated_item_is_unpublished():
    resolver = PermalinkResolver()
    item = ContentItem(date="2999-01-01", title="Future Post", permalink="/custom/")

    assert resolver.resolve(item, NOW) == Unpublished(FUTURE_DATED)
    assert len(resolver.registry) == 0


def test_past_and_current_dates_publish():
    resolver = PermalinkResolver()

    assert resolver.resolve(ContentItem(date="2024-05-31", title="Past"), NOW).path == "/blog/past/"
    # Not strictly later than now.
    assert resolver.resolve(ContentItem(date=NOW, title="Exactly Now"), NOW).path == (
        "/blog/exactly-now/"
    )


def test_date_objects_from_yaml_are_supported():
    resolver = PermalinkResolver()

    assert resolver.resolve(ContentItem(date=date(2030, 1, 1), title="Later"), NOW) == Unpublished(
        FUTURE_DATED
    )
    assert resolver.resolve(ContentItem(date=date(2020, 1, 1), title="Earlier"), NOW) == Published(
        "/blog/earlier/"
    )


def test_naive_dates_use_configured_timezone():
    """09:00 in Tokyo is 00:00 UTC, so it is not in the future at 00:30 UTC."""
    now = datetime(2024, 6, 1, 0, 30, tzinfo=timezone.utc)
    item = ContentItem(date="2024-06-01T09:00:00", title="Tokyo Morning")

    tokyo = PermalinkResolver(tz=ZoneInfo("Asia/Tokyo"))
    utc = PermalinkResolver()

    assert tokyo.resolve(item, now) == Published("/blog/tokyo-morning/")
    assert utc.resolve(item, now) == Unpublished(FUTURE_DATED)


def test_explicit_permalink_is_returned_verbatim():
    resolver = PermalinkResolver()

    decision = resolver.resolve(ContentItem(permalink="/custom/path/", title="Ignored"), NOW)

    assert decision == Published("/custom/path/")
    assert len(resolver.registry) == 0


def test_explicit_permalink_is_not_checked_for_collisions():
    resolver = PermalinkResolver()

    generated = resolver.resolve(ContentItem(title="Hello World"), NOW)
    explicit = resolver.resolve(ContentItem(permalink="/blog/hello-world/"), NOW)
    explicit_again = resolver.resolve(ContentItem(permalink="/blog/hello-world/"), NOW)

    assert generated == explicit == explicit_again == Published("/blog/hello-world/")


def test_explicit_permalink_does_not_reserve_slug():
    resolver = PermalinkResolver()

    resolver.resolve(ContentItem(permalink="/blog/taken/"), NOW)

    assert resolver.resolve(ContentItem(title="Taken"), NOW) == Published("/blog/taken/")


def test_item_without_title_or_permalink_is_unpublished():
    resolver = PermalinkResolver()

    assert resolver.resolve(ContentItem(), NOW) == Unpublished(MISSING_TITLE)
    assert resolver.resolve(ContentItem(title="", permalink=""), NOW) == Unpublished(MISSING_TITLE)
    assert resolver.resolve(ContentItem(date="2020-01-01"), NOW) == Unpublished(MISSING_TITLE)


def test_non_string_permalink_falls_through_to_title():
    resolver = PermalinkResolver()

    decision = resolver.resolve(ContentItem(permalink=False, title="Fallback"), NOW)  # type: ignore[arg-type]

    assert decision == Published("/blog/fallback/")


@pytest.mark.parametrize("bad_date", ["not a date", "2024-13-45", True, 1717200000, ["2024-01-01"]])
def test_invalid_date_fails_fast(bad_date):
    resolver = PermalinkResolver()
    item = ContentItem(date=bad_date, title="Broken", source="posts/broken.md")

    with pytest.raises(InvalidDateError) as excinfo:
        resolver.resolve(item, NOW)

    assert "posts/broken.md" in str(excinfo.value)
    assert len(resolver.registry) == 0


def test_blank_date_string_counts_as_absent():
    resolver = PermalinkResolver()

    assert resolver.resolve(ContentItem(date="  ", title="No Date"), NOW).path == "/blog/no-date/"


def test_shared_registry_without_reset_leaks_between_runs():
    registry = SlugRegistry()
    items = [ContentItem(title="Hello World")]

    first_run = [PermalinkResolver(registry).resolve(item, NOW) for item in items]
    second_run = [PermalinkResolver(registry).resolve(item, NOW) for item in items]

    assert first_run == [Published("/blog/hello-world/")]
    assert second_run == [Published("/blog/hello-world-2/")]

    registry.reset()
    third_run = [PermalinkResolver(registry).resolve(item, NOW) for item in items]
    assert third_run == [Published("/blog/hello-world/")]


def test_naive_now_is_treated_as_utc():
    resolver = PermalinkResolver()
    item = ContentItem(date="2024-06-01T12:00:00+00:00", title="Noon")

    assert resolver.resolve(item, datetime(2024, 6, 1, 11, 0)) == Unpublished(FUTURE_DATED)
    assert resolver.resolve(item, datetime(2024, 6, 1, 13, 0)) == Published("/blog/noon/")


def test_now_defaults_to_wall_clock():
    resolver = PermalinkResolver()

    assert resolver.resolve(ContentItem(date="2999-01-01", title="Far Future")) == Unpublished(
        FUTURE_DATED
    )
    assert resolver.resolve(ContentItem(date="2000-01-01", title="Long Ago")) == Published(
        "/blog/long-ago/"
    )


def test_custom_prefix_is_normalized():
    resolver = PermalinkResolver(prefix="posts")

    assert resolver.resolve(ContentItem(title="Hi"), NOW) == Published("/posts/hi/")
    assert normalize_prefix("/blog/") == "/blog/"
    assert normalize_prefix("/notes//") == "/notes/"
    assert normalize_prefix("") == "/"


def test_collision_is_logged(caplog):
    logger = logging.getLogger("test_resolver_collision")
    resolver = PermalinkResolver(logger=logger)

    with caplog.at_level(logging.INFO, logger="test_resolver_collision"):
        resolver.resolve(ContentItem(title="Same", source="a.md"), NOW)
        resolver.resolve(ContentItem(title="Same", source="b.md"), NOW)

    collisions = [r for r in caplog.records if r.getMessage() == "Slug collision resolved"]
    assert len(collisions) == 1
    assert collisions[0].slug == "same-2"
    assert collisions[0].source == "b.md"
