"""Canonical text form used by every matching stage."""

from __future__ import annotations

import re

_NON_WORD = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize(text: str | None) -> str:
    """Lowercase, replace punctuation with spaces, collapse whitespace.

    Total over any input and idempotent. Unit symbols such as ``²`` are
    left alone; the unit matcher generates those variations itself.
    """
    if not text:
        return ""
    lowered = _NON_WORD.sub(" ", text.lower())
    return _WHITESPACE.sub(" ", lowered).strip()


def tokens(text: str | None) -> list[str]:
    """Whitespace tokens of the normalized text."""
    normalized = normalize(text)
    return normalized.split(" ") if normalized else []
