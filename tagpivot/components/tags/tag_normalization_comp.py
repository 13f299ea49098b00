"""
Tag normalization component.

Every tag that enters the store or a metric goes through normalize_tags so
identity is stable across sources (titles, meta keywords, hand-entered seeds):

- trimmed
- Unicode NFKC normalized
- casefolded
- deduplicated
- sorted
"""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable


def normalize_tag(tag: object) -> str:
    """Normalize a single tag; returns "" for values that normalize to nothing."""
    text = unicodedata.normalize("NFKC", str(tag)).strip()
    return text.casefold()


def normalize_tags(tags: Iterable[object] | None) -> list[str]:
    """
    Normalize, dedupe and sort a tag collection.

    Non-iterable or string input is treated as empty so callers reading
    untrusted records never crash here.
    """
    if tags is None or isinstance(tags, (str, bytes)):
        return []
    try:
        items = list(tags)
    except TypeError:
        return []
    cleaned = {normalize_tag(t) for t in items if t is not None}
    cleaned.discard("")
    return sorted(cleaned)


def normalize_tag_set(tags: Iterable[object] | None) -> set[str]:
    return set(normalize_tags(tags))
