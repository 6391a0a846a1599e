"""Title to slug conversion.

Follows the behavior of the ``slugify`` npm package with ``lower`` and
``strict`` enabled, which is what the generated URLs have always used.
"""

from __future__ import annotations

import re
import unicodedata

from unidecode import unidecode

FALLBACK_SLUG = "untitled"

# Symbols that are spelled out instead of dropped. The text is appended
# as is, so "Rock&Roll" reads "rockandroll".
CHAR_MAP = {
    "&": "and",
    "$": "dollar",
    "%": "percent",
    "<": "less",
    ">": "greater",
    "|": "or",
    "¢": "cent",
    "£": "pound",
    "¥": "yen",
    "€": "euro",
    "©": "(c)",
    "®": "(r)",
    "™": "tm",
    "♥": "love",
    "∞": "infinity",
}

# Scripts with a letter-by-letter romanization: Latin, Greek, Cyrillic,
# Armenian, Georgian and the extended Latin/Greek blocks. Anything else
# (CJK, Devanagari, emoji, ...) is dropped.
_TRANSLITERATED_RANGES = (
    (0x0080, 0x058F),
    (0x10A0, 0x10FF),
    (0x1E00, 0x1FFF),
)

_STRICT_RE = re.compile(r"[^A-Za-z0-9\s]")
_SPACE_RE = re.compile(r"\s+")


def _transliterate(ch: str) -> str:
    if ch in CHAR_MAP:
        return CHAR_MAP[ch]
    if ch == "-":
        return " "
    if ch.isascii():
        return ch
    code = ord(ch)
    if any(low <= code <= high for low, high in _TRANSLITERATED_RANGES):
        return unidecode(ch).replace("-", " ")
    return ""


def slugify(text: str) -> str:
    """Convert text to a URL-safe slug.

    Args:
        text: The text to slugify, usually a post title

    Returns:
        A lowercase, hyphen-delimited slug containing only ``[a-z0-9-]``.
        Text that reduces to nothing yields ``"untitled"``.

    Examples:
        >>> slugify("Hello, World!")
        'hello-world'
        >>> slugify("Rock&Roll")
        'rockandroll'
        >>> slugify("Straße")
        'strasse'
        >>> slugify("Привет мир")
        'privet-mir'
    """
    text = unicodedata.normalize("NFC", text)
    slug = "".join(_transliterate(ch) for ch in text)
    # Hyphens were turned into spaces above, so strict mode only leaves words.
    slug = _STRICT_RE.sub("", slug)
    slug = _SPACE_RE.sub("-", slug.strip()).lower()
    return slug or FALLBACK_SLUG
