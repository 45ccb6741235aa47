# src/schemas/event.py
"""
Event Schemas for the Charlotte Event Feed.

Two shapes flow through the pipeline:

- RawCandidate: what a source adapter extracts from a page or API payload.
  Nothing is validated here; values may be malformed or missing.
- CanonicalEvent: the unified, immutable record produced by the normalizer.
  Deduplication and ranking replace events with modified copies but never
  mutate them in place.

CanonicalEvent is the shape written to the output files consumed by the
static site.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)


def _utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


# ============================================================================
# ENUMS
# ============================================================================


class EventCategory(str, Enum):
    """
    Fixed label vocabulary for event categories.

    Adapters assign one or more labels; SPECIAL is the catch-all applied when
    no rule matches.
    """

    NIGHTLIFE = "nightlife"
    CONCERT = "concert"
    RESTAURANT = "restaurant"
    BAR = "bar"
    SPORTS = "sports"
    ENTERTAINMENT = "entertainment"
    OPENING = "opening"
    SPECIAL = "special"
    ACTIVE = "active"
    PANTHERS = "panthers"
    HORNETS = "hornets"
    SOCCER = "soccer"


DEFAULT_CATEGORY = EventCategory.SPECIAL


class AdapterKind(str, Enum):
    """Family of a source adapter."""

    API = "api"
    SCRAPER = "scraper"


# ============================================================================
# SOURCE CONFIGURATION
# ============================================================================


class SourceDescriptor(BaseModel):
    """One entry of the source configuration file."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    adapter: str = Field(..., min_length=1)
    priority: int = 100
    enabled: bool = True


# ============================================================================
# RAW CANDIDATES (adapter output)
# ============================================================================


@dataclass
class RawVenue:
    """Venue fields as extracted by an adapter."""

    name: Any = ""
    address: Any = ""
    neighborhood: Any = ""
    lat: Any = None
    lng: Any = None


@dataclass
class RawPrice:
    """Price fields as extracted by an adapter."""

    min: Any = None
    max: Any = None
    currency: Any = "USD"
    notes: Any = ""


@dataclass
class RawCandidate:
    """
    Semi-structured event record produced by a source adapter.

    Field types are deliberately loose: adapters are heuristic and the
    normalizer is responsible for coercing whatever they produce.
    """

    title: Any = ""
    description: Any = ""
    start_datetime: Any = None
    end_datetime: Any = None
    venue: RawVenue = field(default_factory=RawVenue)
    category: Any = field(default_factory=list)
    price: RawPrice = field(default_factory=RawPrice)
    image: Any = None
    url: Any = None
    source_url: Any = None
    tags: Any = field(default_factory=list)


# ============================================================================
# CANONICAL EVENT
# ============================================================================


class VenueInfo(BaseModel):
    """Where an event takes place."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    address: str = ""
    neighborhood: str = ""
    lat: Optional[float] = None
    lng: Optional[float] = None


class PriceInfo(BaseModel):
    """
    Price information.

    min/max are amounts in `currency`; `notes` carries qualitative info
    ("Free", "Ticketed", "Sold Out") independent of the numeric fields.
    """

    model_config = ConfigDict(frozen=True)

    min: Optional[float] = None
    max: Optional[float] = None
    currency: str = "USD"
    notes: str = ""


class SourceInfo(BaseModel):
    """Provenance of an event."""

    model_config = ConfigDict(frozen=True)

    name: str
    url: Optional[str] = None
    scraped_at: datetime = Field(default_factory=_utc_now)
    merged_from: Optional[str] = None

    @field_serializer("scraped_at")
    def _serialize_scraped_at(self, value: datetime) -> str:
        return format_timestamp(value)


class CanonicalEvent(BaseModel):
    """
    Canonical event record.

    Immutable once produced. `id` is content-derived (title, venue name,
    start timestamp) and is preserved through merges; `confidence` is a
    completeness score, recomputed whenever the populated fields change.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str
    description: str = ""
    start_datetime: Optional[datetime] = None
    end_datetime: Optional[datetime] = None
    venue: VenueInfo = Field(default_factory=VenueInfo)
    category: List[str] = Field(default_factory=list)
    price: PriceInfo = Field(default_factory=PriceInfo)
    image: Optional[str] = None
    url: Optional[str] = None
    source: SourceInfo
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    tags: List[str] = Field(default_factory=list)

    # Only set on the Filter/Ranker output.
    rank_score: Optional[float] = Field(
        default=None, serialization_alias="_rank_score"
    )

    @field_validator("start_datetime", "end_datetime")
    @classmethod
    def _ensure_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        """Store all timestamps as timezone-aware UTC."""
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @field_serializer("start_datetime", "end_datetime")
    def _serialize_datetime(self, value: Optional[datetime]) -> Optional[str]:
        return format_timestamp(value) if value is not None else None

    @property
    def is_scheduled(self) -> bool:
        """Whether the event has a start time."""
        return self.start_datetime is not None

    def to_feed_dict(self) -> dict:
        """
        Serialize for the output files.

        Omits `_rank_score` when the event has not been ranked.
        """
        data = self.model_dump(mode="json", by_alias=True)
        if self.rank_score is None:
            data.pop("_rank_score", None)
        return data


def format_timestamp(value: datetime) -> str:
    """ISO-8601 in UTC with a trailing Z, millisecond precision."""
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"
