"""Registry of slugs handed out during one build run."""

from __future__ import annotations

from typing import Iterator


class SlugRegistry:
    """Set of slugs already assigned in the current build run.

    One registry belongs to one build run. It has no locking and must only be
    written from a single thread. Reusing it for a second run without calling
    ``reset`` makes every title of that run collide with the first.
    """

    def __init__(self) -> None:
        self._used: set[str] = set()

    def __contains__(self, slug: object) -> bool:
        return slug in self._used

    def __len__(self) -> int:
        return len(self._used)

    def __iter__(self) -> Iterator[str]:
        return iter(self._used)

    def add(self, slug: str) -> None:
        self._used.add(slug)

    def reset(self) -> None:
        """Forget every slug, ready for a new build run."""
        self._used.clear()
