"""Tag normalization and page identity components."""

from .tag_normalization_comp import normalize_tag, normalize_tag_set, normalize_tags
from .url_canon_comp import canonical_domain, canonical_url, url_hash

__all__ = [
    "canonical_domain",
    "canonical_url",
    "normalize_tag",
    "normalize_tag_set",
    "normalize_tags",
    "url_hash",
]
