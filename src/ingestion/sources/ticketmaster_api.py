"""
Ticketmaster Discovery API.

Docs: https://developer.ticketmaster.com/products-and-docs/apis/discovery-api/v2/
"""

from typing import Any, Dict, Iterable, List

from src.ingestion.adapters.api_adapter import PAGE_SIZE, APIAdapter
from src.ingestion.normalization.location_parser import (
    CHARLOTTE_VENUE_NEIGHBORHOODS,
    find_neighborhood,
)
from src.schemas.event import EventCategory as C
from src.schemas.event import RawCandidate, RawPrice, RawVenue

from .registry import register_adapter

SEARCH_URL = "https://app.ticketmaster.com/discovery/v2/events.json"
MIN_IMAGE_WIDTH = 500


def _first(items: Any) -> Dict[str, Any]:
    if isinstance(items, list) and items:
        return items[0] or {}
    return {}


def categorize(record: Dict[str, Any]) -> List[str]:
    """
    Map the Ticketmaster classification to feed labels.

    Sports events also get a team label (panthers / hornets / soccer) when
    the event name identifies one.
    """
    classification = _first(record.get("classifications"))
    if not classification:
        return [C.SPECIAL.value]

    segment = ((classification.get("segment") or {}).get("name") or "").lower()
    genre = ((classification.get("genre") or {}).get("name") or "").lower()
    kind = ((classification.get("type") or {}).get("name") or "").lower()
    name = (record.get("name") or "").lower()

    labels: List[str] = []
    if segment == "sports":
        labels.append(C.SPORTS.value)
        if any(word in name for word in ("panthers", "nfl", "football")):
            labels.append(C.PANTHERS.value)
        if any(word in name for word in ("hornets", "nba", "basketball")):
            labels.append(C.HORNETS.value)
        if any(word in name for word in ("charlotte fc", "soccer")):
            labels.append(C.SOCCER.value)

    if segment == "music" or "music" in genre:
        labels.extend([C.CONCERT.value, C.NIGHTLIFE.value])

    if segment == "arts & theatre" or "theatre" in kind:
        labels.append(C.ENTERTAINMENT.value)

    return labels or [C.SPECIAL.value]


def best_image(images: Any) -> str | None:
    """First image wider than MIN_IMAGE_WIDTH, else the first image."""
    if not isinstance(images, list) or not images:
        return None
    for image in images:
        if (image.get("width") or 0) > MIN_IMAGE_WIDTH:
            return image.get("url")
    return images[0].get("url")


@register_adapter("ticketmaster_api")
class TicketmasterAPIAdapter(APIAdapter):
    """Events in the metro area from the Discovery API, soonest first."""

    credential_name = "TICKETMASTER_API_KEY"

    def build_request(self, api_key: str):
        params = {
            "apikey": api_key,
            "city": self.city,
            "stateCode": self.state_code,
            "size": PAGE_SIZE,
            "sort": "date,asc",
        }
        return SEARCH_URL, params, {}

    def iter_records(self, payload: Any) -> Iterable[Any]:
        if not isinstance(payload, dict):
            raise ValueError("Unexpected API response: top level is not an object")
        return (payload.get("_embedded") or {}).get("events") or []

    def parse_record(self, record: Dict[str, Any]) -> RawCandidate:
        name = record.get("name") or ""
        start = (record.get("dates") or {}).get("start") or {}
        venue = _first((record.get("_embedded") or {}).get("venues"))
        location = venue.get("location") or {}
        price_range = _first(record.get("priceRanges"))
        venue_name = venue.get("name") or ""

        segment = (
            (_first(record.get("classifications")).get("segment") or {}).get("name") or ""
        ).lower()

        return RawCandidate(
            title=name,
            description=(
                record.get("info")
                or record.get("pleaseNote")
                or f"{name} at {venue_name or 'Charlotte'}"
            ),
            start_datetime=start.get("dateTime") or start.get("localDate"),
            end_datetime=None,
            venue=RawVenue(
                name=venue_name,
                address=(venue.get("address") or {}).get("line1") or "",
                neighborhood=find_neighborhood(venue_name, CHARLOTTE_VENUE_NEIGHBORHOODS),
                lat=location.get("latitude"),
                lng=location.get("longitude"),
            ),
            category=categorize(record),
            price=RawPrice(
                min=price_range.get("min"),
                max=price_range.get("max"),
                currency=price_range.get("currency") or "USD",
                notes="Ticketed" if price_range else "See website",
            ),
            image=best_image(record.get("images")),
            url=record.get("url"),
            source_url=self.source.url,
            tags=[tag for tag in ("ticketmaster-api", segment) if tag],
        )
