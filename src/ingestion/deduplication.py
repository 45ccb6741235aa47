"""
Module for event deduplication strategies.

Events from different sources describing the same happening share a key
(normalized title, normalized venue name, UTC start date). Events with the
same key are merged pairwise into one representative, so the output holds
one event per key in order of first appearance.
"""

import logging
import re
from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Dict, List, Tuple

from src.ingestion.normalization.normalizer import compute_confidence
from src.schemas.event import CanonicalEvent

logger = logging.getLogger(__name__)

# Dated events further apart than this are never merged
MERGE_WINDOW = timedelta(hours=6)

DedupeKey = Tuple[str, str, str]

_NON_ALNUM = re.compile(r"[^\w\s]|_")
_WHITESPACE = re.compile(r"\s+")


def normalize_for_matching(text: str) -> str:
    """Lowercase, drop punctuation, collapse whitespace."""
    text = _NON_ALNUM.sub("", (text or "").lower())
    return _WHITESPACE.sub(" ", text).strip()


def dedupe_key(event: CanonicalEvent) -> DedupeKey:
    """(normalized title, normalized venue name, UTC start date or "")."""
    date_only = event.start_datetime.date().isoformat() if event.start_datetime else ""
    return (
        normalize_for_matching(event.title),
        normalize_for_matching(event.venue.name),
        date_only,
    )


def merge_events(first: CanonicalEvent, second: CanonicalEvent) -> CanonicalEvent:
    """
    Merge two events sharing a dedupe key.

    `first` is the earlier-seen event and wins confidence ties.

    - Both dated and more than MERGE_WINDOW apart: the higher-confidence
      event is kept unchanged and the other dropped.
    - Otherwise the higher-confidence event is the primary; its empty
      fields are filled from the secondary, tags are unioned, categories
      and id stay the primary's, and `source.merged_from` names the
      secondary's source. Confidence is recomputed on the result.
    """
    if first.confidence >= second.confidence:
        primary, secondary = first, second
    else:
        primary, secondary = second, first

    if first.start_datetime is not None and second.start_datetime is not None:
        if abs(first.start_datetime - second.start_datetime) > MERGE_WINDOW:
            return primary

    venue = primary.venue.model_copy(
        update={
            "address": primary.venue.address or secondary.venue.address,
            "neighborhood": primary.venue.neighborhood or secondary.venue.neighborhood,
            "lat": primary.venue.lat if primary.venue.lat is not None else secondary.venue.lat,
            "lng": primary.venue.lng if primary.venue.lng is not None else secondary.venue.lng,
        }
    )
    price = primary.price.model_copy(
        update={
            "min": primary.price.min if primary.price.min is not None else secondary.price.min,
            "max": primary.price.max if primary.price.max is not None else secondary.price.max,
            "notes": primary.price.notes or secondary.price.notes,
        }
    )
    tags = list(dict.fromkeys([*primary.tags, *secondary.tags]))

    merged = primary.model_copy(
        update={
            "description": primary.description or secondary.description,
            "end_datetime": primary.end_datetime or secondary.end_datetime,
            "image": primary.image or secondary.image,
            "venue": venue,
            "price": price,
            "tags": tags,
            "source": primary.source.model_copy(
                update={"merged_from": secondary.source.name}
            ),
        }
    )
    return merged.model_copy(update={"confidence": compute_confidence(merged)})


class EventDeduplicator(ABC):
    """
    Abstract base for deduplication strategies
    """

    @abstractmethod
    def deduplicate(self, events: List[CanonicalEvent]) -> List[CanonicalEvent]:
        """
        Deduplicate events and return unique set
        """
        pass


class MergingDeduplicator(EventDeduplicator):
    """
    Match by normalized title + venue + day, merging matches.

    Each key keeps one representative; every later event with the same key
    is merged into it (see merge_events).
    """

    def deduplicate(self, events: List[CanonicalEvent]) -> List[CanonicalEvent]:
        """
        Returns:
            One event per dedupe key, in order of first appearance
        """
        representatives: Dict[DedupeKey, CanonicalEvent] = {}
        merges = 0

        for event in events:
            key = dedupe_key(event)
            existing = representatives.get(key)
            if existing is None:
                representatives[key] = event
            else:
                representatives[key] = merge_events(existing, event)
                merges += 1

        if merges:
            logger.info(f"Merged {merges} duplicate events")
        return list(representatives.values())


def dedupe(events: List[CanonicalEvent]) -> List[CanonicalEvent]:
    """Deduplicate with the default merging strategy."""
    return MergingDeduplicator().deduplicate(events)
