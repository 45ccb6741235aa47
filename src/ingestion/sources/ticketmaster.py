"""
Ticketmaster discovery pages.

Search pages mix in events from other markets, so a card is kept only
when it has a venue or its title names Charlotte or one of its teams.
Cards carry no description; one is synthesized from the venue.
"""

import re

from src.ingestion.adapters.scraper_adapter import ScraperAdapter, ScraperProfile
from src.ingestion.normalization.classifier import CategoryRule
from src.ingestion.normalization.location_parser import CHARLOTTE_VENUE_NEIGHBORHOODS
from src.ingestion.normalization.price_parser import PriceRules
from src.ingestion.parsers.extractors import FieldExtractor, SelectAttr, SelectText
from src.schemas.event import EventCategory as C

from .registry import register_adapter

KNOWN_VENUES = (
    "Bank of America Stadium",
    "Spectrum Center",
    "Truist Field",
    "PNC Music Pavilion",
)

CHARLOTTE_MENTION = re.compile(r"charlotte|panthers|hornets", re.IGNORECASE)

TICKETMASTER = ScraperProfile(
    container_selector='[class*="event"], [data-testid*="event"], .sc-event, article',
    title=FieldExtractor.of(
        SelectText('h3, h2, [class*="title"], [class*="name"], .event-name'),
        SelectText("a"),
    ),
    # Machine-readable datetime attribute first, printed date second
    date=FieldExtractor.of(
        SelectAttr('time, [datetime], [class*="date"]', "datetime"),
        SelectText('time, [class*="date"]'),
    ),
    venue=FieldExtractor.of(SelectText('[class*="venue"], [class*="location"]')),
    price=FieldExtractor.of(SelectText('[class*="price"]')),
    base_origin="https://www.ticketmaster.com",
    category_rules=(
        CategoryRule.of(r"panthers|football|nfl", C.SPORTS),
        CategoryRule.of(r"hornets|basketball|nba", C.SPORTS),
        CategoryRule.of(r"charlotte fc|soccer|mls", C.SPORTS),
        CategoryRule.of(r"knights|baseball", C.SPORTS),
        CategoryRule.of(r"concert|tour|music|live|performance", C.CONCERT, C.NIGHTLIFE),
        CategoryRule.of(r"theater|theatre|show|comedy|broadway", C.ENTERTAINMENT),
        CategoryRule.of(r"festival|fair", C.SPECIAL),
    ),
    category_text=("title", "venue"),
    price_rules=PriceRules(
        free_pattern=None,
        single_note="Starting at",
        default_note="Check Ticketmaster",
    ),
    price_text=("price",),
    gazetteer=CHARLOTTE_VENUE_NEIGHBORHOODS,
    neighborhood_text=("venue|title",),
    venue_text=("title",),
    known_venues=KNOWN_VENUES,
    locality_filter=CHARLOTTE_MENTION,
    description_template="Event at {venue}",
    tags=("ticketmaster",),
)


@register_adapter("ticketmaster")
class TicketmasterAdapter(ScraperAdapter):
    profile = TICKETMASTER
