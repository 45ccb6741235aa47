"""
Event Normalizer.

Maps an adapter's RawCandidate plus its source descriptor onto the
canonical event schema:

- whitespace-collapses free text;
- coerces dates to UTC (unparseable -> None, never an error);
- coerces numeric price/coordinate values (unparseable -> None);
- computes the content-derived `id` and the completeness `confidence`.

`normalize` is pure: the same candidate, source and `scraped_at` always
produce the same event.
"""

from __future__ import annotations

import hashlib
import re
from datetime import datetime, timezone, tzinfo
from typing import Any, Dict, Iterable, List, Optional

from src.ingestion.normalization.date_parser import DEFAULT_TIMEZONE, parse_datetime
from src.schemas.event import (
    CanonicalEvent,
    PriceInfo,
    RawCandidate,
    RawPrice,
    RawVenue,
    SourceDescriptor,
    SourceInfo,
    VenueInfo,
    format_timestamp,
)

# Field -> weight; sums to 1.0
CONFIDENCE_WEIGHTS: Dict[str, float] = {
    "title": 0.20,
    "description": 0.15,
    "start_datetime": 0.20,
    "venue.name": 0.15,
    "venue.address": 0.10,
    "url": 0.10,
    "image": 0.10,
}

_WHITESPACE = re.compile(r"\s+")


def sanitize_text(value: Any) -> str:
    """Trim and collapse internal whitespace; None -> ""."""
    if value is None:
        return ""
    return _WHITESPACE.sub(" ", str(value)).strip()


def generate_event_id(title: str, venue_name: str, start: Optional[datetime]) -> str:
    """
    Content-derived event id.

    sha1 over the lowercased concatenation of title, venue name and start
    timestamp; missing parts contribute empty strings.
    """
    start_part = format_timestamp(start) if start else ""
    key = f"{title or ''}{venue_name or ''}{start_part}".lower()
    return hashlib.sha1(key.encode("utf-8")).hexdigest()


def compute_confidence(event: CanonicalEvent) -> float:
    """Completeness score in [0, 1] from the event's own populated fields."""
    present = {
        "title": bool(event.title),
        "description": bool(event.description),
        "start_datetime": event.start_datetime is not None,
        "venue.name": bool(event.venue.name),
        "venue.address": bool(event.venue.address),
        "url": bool(event.url),
        "image": bool(event.image),
    }
    score = sum(CONFIDENCE_WEIGHTS[name] for name, ok in present.items() if ok)
    return round(min(score, 1.0), 4)


def _to_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        result = float(str(value).replace(",", "").strip())
    except (TypeError, ValueError):
        return None
    return result if result == result else None  # NaN


def _to_label_list(value: Any) -> List[str]:
    """Non-list inputs become []; labels are deduplicated in order."""
    if not isinstance(value, (list, tuple)):
        return []
    labels: List[str] = []
    for item in value:
        label = sanitize_text(getattr(item, "value", item))
        if label and label not in labels:
            labels.append(label)
    return labels


def _optional_text(value: Any) -> Optional[str]:
    text = sanitize_text(value)
    return text or None


def normalize(
    raw: RawCandidate,
    source: SourceDescriptor,
    *,
    scraped_at: Optional[datetime] = None,
    tz: tzinfo = DEFAULT_TIMEZONE,
) -> CanonicalEvent:
    """
    Normalize one raw candidate to a CanonicalEvent.

    Args:
        raw: Candidate produced by an adapter
        source: Descriptor of the source that produced it
        scraped_at: Provenance timestamp (defaults to now; pass the run's
            start time for reproducible output)
        tz: Timezone for naive date values

    Returns:
        CanonicalEvent
    """
    venue = raw.venue if isinstance(raw.venue, RawVenue) else RawVenue()
    price = raw.price if isinstance(raw.price, RawPrice) else RawPrice()

    title = sanitize_text(raw.title)
    venue_name = sanitize_text(venue.name)
    start = parse_datetime(raw.start_datetime, tz)

    draft = CanonicalEvent(
        id=generate_event_id(title, venue_name, start),
        title=title,
        description=sanitize_text(raw.description),
        start_datetime=start,
        end_datetime=parse_datetime(raw.end_datetime, tz),
        venue=VenueInfo(
            name=venue_name,
            address=sanitize_text(venue.address),
            neighborhood=sanitize_text(venue.neighborhood),
            lat=_to_float(venue.lat),
            lng=_to_float(venue.lng),
        ),
        category=_to_label_list(raw.category),
        price=PriceInfo(
            min=_to_float(price.min),
            max=_to_float(price.max),
            currency="USD",
            notes=sanitize_text(price.notes),
        ),
        image=_optional_text(raw.image),
        url=_optional_text(raw.url),
        source=SourceInfo(
            name=source.name,
            url=_optional_text(raw.source_url) or source.url,
            scraped_at=scraped_at or datetime.now(timezone.utc),
        ),
        tags=_to_label_list(raw.tags),
    )
    return draft.model_copy(update={"confidence": compute_confidence(draft)})


def normalize_all(
    candidates: Iterable[tuple[RawCandidate, SourceDescriptor]],
    *,
    scraped_at: Optional[datetime] = None,
    tz: tzinfo = DEFAULT_TIMEZONE,
) -> List[CanonicalEvent]:
    """Normalize (candidate, source) pairs in order."""
    return [
        normalize(raw, source, scraped_at=scraped_at, tz=tz)
        for raw, source in candidates
    ]
