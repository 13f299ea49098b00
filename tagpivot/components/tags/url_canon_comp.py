"""
URL canonicalization and hashing component.

Conservative canonicalization: remove obvious tracking noise, keep meaningful
query params. The hash of the canonical URL is the page identity used for
repeat-visit dedupe; the URL itself is never stored.
"""

from __future__ import annotations

import hashlib
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

DROP_QUERY_PREFIXES = ("utm_",)

DROP_QUERY_KEYS = {
    "gclid",
    "fbclid",
    "msclkid",
    "ref",
    "ref_src",
    "igshid",
    "mc_cid",
    "mc_eid",
    "mkt_tok",
    "trk",
    "trkcampaign",
    "spm",
    "scm",
}


def canonical_url(raw: str) -> str:
    """
    Canonicalize a page URL.

    - lowercase scheme and host
    - drop the fragment
    - strip trailing slashes from non-root paths
    - drop tracking params and empty values, lowercase keys, sort by key

    Unparseable input is returned unchanged.
    """
    try:
        parts = urlsplit(raw)
    except ValueError:
        return raw
    if not parts.scheme or not parts.netloc:
        return raw

    path = parts.path
    if path not in ("", "/"):
        path = path.rstrip("/") or "/"
    if not path:
        path = "/"

    kept: list[tuple[str, str]] = []
    for key, value in parse_qsl(parts.query, keep_blank_values=True):
        k = key.lower()
        if k in DROP_QUERY_KEYS or k.startswith(DROP_QUERY_PREFIXES):
            continue
        if not value:
            continue
        kept.append((k, value))
    kept.sort(key=lambda kv: kv[0])

    netloc = parts.netloc.lower()
    return urlunsplit((parts.scheme.lower(), netloc, path, urlencode(kept), ""))


def canonical_domain(raw: str) -> str:
    """Lowercase hostname of a URL ("" when it has none)."""
    try:
        return (urlsplit(raw).hostname or "").lower()
    except ValueError:
        return ""


def url_hash(raw: str) -> str:
    """Content-independent identity of the canonical URL."""
    digest = hashlib.sha256(canonical_url(raw).encode("utf-8")).hexdigest()
    return f"sha256:{digest}"
