"""
Eventbrite API v3 event search.

Docs: https://www.eventbrite.com/platform/api#/reference/event-search
"""

from typing import Any, Dict, Iterable

from src.ingestion.adapters.api_adapter import PAGE_SIZE, APIAdapter
from src.ingestion.adapters.base_adapter import FetchError
from src.ingestion.normalization.classifier import CategoryRule, classify
from src.ingestion.normalization.location_parser import find_neighborhood
from src.schemas.event import EventCategory as C
from src.schemas.event import RawCandidate, RawPrice, RawVenue

from .registry import register_adapter

SEARCH_URL = "https://www.eventbriteapi.com/v3/events/search/"
SEARCH_RADIUS = "25mi"

# Matched against "name description category-name"
CATEGORY_RULES = (
    CategoryRule.of(r"music|concert|dj|live|band|performance", C.CONCERT, C.NIGHTLIFE),
    CategoryRule.of(r"food|restaurant|dining|brunch|dinner|tasting|chef", C.RESTAURANT),
    CategoryRule.of(r"bar|brewery|wine|beer|cocktail|spirits", C.BAR, C.NIGHTLIFE),
    CategoryRule.of(r"sport|game|run|yoga|fitness|athletic", C.SPORTS),
    CategoryRule.of(r"comedy|theater|theatre|art|gallery|show|performing", C.ENTERTAINMENT),
    CategoryRule.of(r"festival|fair|market|expo", C.SPECIAL),
    CategoryRule.of(r"opening|grand opening|launch|debut|ribbon cutting", C.OPENING),
    CategoryRule.of(r"party|dance|club|nightlife|night out", C.NIGHTLIFE),
)


def _text(value: Any) -> str:
    """Eventbrite wraps rich text as {"text": ..., "html": ...}."""
    if isinstance(value, dict):
        return value.get("text") or ""
    return value or ""


def price_for(record: Dict[str, Any]) -> RawPrice:
    """Free / Sold Out / Ticketed; the API search gives no amounts."""
    if record.get("is_free"):
        return RawPrice(min=0, max=None, notes="Free")
    if (record.get("ticket_availability") or {}).get("is_sold_out"):
        return RawPrice(min=None, max=None, notes="Sold Out")
    return RawPrice(min=None, max=None, notes="Ticketed")


@register_adapter("eventbrite_api")
class EventbriteAPIAdapter(APIAdapter):
    """Events within SEARCH_RADIUS of the metro area, by date."""

    credential_name = "EVENTBRITE_API_KEY"

    def build_request(self, api_key: str):
        params = {
            "location.address": f"{self.city}, {self.state_code}",
            "location.within": SEARCH_RADIUS,
            "expand": "venue,category",
            "page_size": PAGE_SIZE,
            "sort_by": "date",
        }
        return SEARCH_URL, params, {"Authorization": f"Bearer {api_key}"}

    async def fetch_raw(self):
        try:
            return await super().fetch_raw()
        except FetchError as e:
            if e.status_code == 401:
                raise FetchError(
                    e.url, e.status_code, f"Invalid API key - check {self.credential_name}"
                ) from e
            raise

    def iter_records(self, payload: Any) -> Iterable[Any]:
        if not isinstance(payload, dict):
            raise ValueError("Unexpected API response: top level is not an object")
        return payload.get("events") or []

    def parse_record(self, record: Dict[str, Any]) -> RawCandidate:
        venue = record.get("venue") or {}
        address = venue.get("address") or {}
        category_name = ((record.get("category") or {}).get("name") or "").strip()
        name = _text(record.get("name"))
        description = _text(record.get("description")) or record.get("summary") or ""
        start = record.get("start") or {}
        end = record.get("end") or {}

        return RawCandidate(
            title=name or "Untitled Event",
            description=description,
            start_datetime=start.get("utc") or start.get("local"),
            end_datetime=end.get("utc") or end.get("local"),
            venue=RawVenue(
                name=venue.get("name") or "",
                address=address.get("localized_address_display") or address.get("address_1") or "",
                neighborhood=find_neighborhood(address.get("city") or venue.get("name") or ""),
                lat=venue.get("latitude"),
                lng=venue.get("longitude"),
            ),
            category=classify(f"{name} {description} {category_name}", CATEGORY_RULES),
            price=price_for(record),
            image=(record.get("logo") or {}).get("url"),
            url=record.get("url"),
            source_url=self.source.url,
            tags=[tag for tag in ("eventbrite-api", category_name.lower()) if tag],
        )
