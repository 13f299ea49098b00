"""Workflow for recording one page visit into the event store.

The URL is canonicalized and hashed; only the hash and the hostname are kept.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from tagpivot.components.tags.tag_normalization_comp import normalize_tags
from tagpivot.components.tags.url_canon_comp import canonical_domain, url_hash
from tagpivot.helpers.dto.events_dto import Probe, TagEvent
from tagpivot.helpers.dto.workflow_dto import RecordEventResult
from tagpivot.helpers.time_helper import day_key_from_ms, now_ms as current_ms

if TYPE_CHECKING:
    from tagpivot.services.event_store_svc import EventStoreService

logger = logging.getLogger(__name__)


def record_page_event_workflow(
    store: EventStoreService,
    url: str,
    tags: Iterable[str],
    probe: Probe | None = None,
    now_ms: int | None = None,
) -> RecordEventResult:
    """Build a TagEvent for a page and append it.

    Args:
        store: Event store to append to.
        url: Page URL (never persisted, only its canonical hash).
        tags: Raw interest tags extracted from the page.
        probe: Optional interaction snapshot.
        now_ms: Capture time; defaults to the current clock.

    Returns:
        RecordEventResult; stored=False when the event was empty or a repeat.
    """
    ts = current_ms() if now_ms is None else now_ms
    evt = TagEvent(
        day=day_key_from_ms(ts),
        captured_at_ms=ts,
        domain=canonical_domain(url),
        url_hash=url_hash(url),
        tags=normalize_tags(tags),
        probe=probe,
    )

    stored = store.append_event(evt)
    if stored:
        logger.info("[record] %s: %d tag(s) on %s", evt.domain or "(no host)", len(evt.tags), evt.day)
    else:
        logger.info("[record] Skipped %s (empty or repeat visit)", evt.domain or "(no host)")

    return RecordEventResult(stored=stored, day=evt.day, url_hash=evt.url_hash, tags=evt.tags)
