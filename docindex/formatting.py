"""Shared text helpers for titles and excerpts."""
from __future__ import annotations

import re

ELLIPSIS = "..."
_NON_ANCHOR_CHARS = re.compile(r"[^a-zA-Z0-9]")


def truncate_text(text: str, max_len: int, *, suffix: str = ELLIPSIS) -> str:
    """Truncate text so the result, suffix included, fits in max_len."""
    if len(text) <= max_len:
        return text
    return text[: max_len - len(suffix)] + suffix


def title_case(slug: str) -> str:
    """Turn a hyphenated slug into capitalised words.

    ``"load-balancing"`` becomes ``"Load Balancing"``. Each whitespace
    separated word gets an upper-case first letter and a lower-case rest.
    """
    words = slug.replace("-", " ").split()
    return " ".join(word[:1].upper() + word[1:].lower() for word in words)


def anchor_id(key: str) -> str:
    """Replace every non-alphanumeric character with a hyphen."""
    return _NON_ANCHOR_CHARS.sub("-", key)
