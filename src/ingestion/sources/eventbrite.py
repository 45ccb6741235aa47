"""
Eventbrite search result pages.

Disabled by default in favor of the API source; kept for when no API key
is available.
"""

import re

from src.ingestion.adapters.scraper_adapter import ScraperAdapter, ScraperProfile
from src.ingestion.normalization.classifier import CategoryRule
from src.ingestion.normalization.location_parser import (
    CHARLOTTE_NEIGHBORHOODS,
    gazetteer_from_names,
)
from src.ingestion.normalization.price_parser import PriceRules
from src.ingestion.parsers.extractors import FieldExtractor, SelectAttr, SelectText
from src.schemas.event import EventCategory as C

from .registry import register_adapter

EVENTBRITE = ScraperProfile(
    container_selector=(
        '[class*="event-card"], [data-testid*="event"], .discover-search-desktop-card'
    ),
    title=FieldExtractor.of(SelectText('h3, h2, [class*="title"], [class*="event-name"]')),
    description=FieldExtractor.of(SelectText('p, [class*="description"]')),
    date=FieldExtractor.of(
        SelectText('[class*="date"], time'),
        SelectAttr('[class*="date"]', "datetime"),
    ),
    venue=FieldExtractor.of(SelectText('[class*="location"], [class*="venue"]')),
    price=FieldExtractor.of(SelectText('[class*="price"]')),
    base_origin="https://www.eventbrite.com",
    category_rules=(
        CategoryRule.of(r"bar|cocktail|brewery|wine|beer|pub|tavern", C.BAR, C.NIGHTLIFE),
        CategoryRule.of(
            r"concert|music|live music|band|dj|performer", C.CONCERT, C.NIGHTLIFE
        ),
        CategoryRule.of(r"club|dance|party|nightclub", C.NIGHTLIFE),
        CategoryRule.of(r"restaurant|dining|food|brunch|dinner|lunch|cuisine", C.RESTAURANT),
        CategoryRule.of(r"sport|game|match|panthers|hornets|basketball|football", C.SPORTS),
        CategoryRule.of(r"run|yoga|fitness|workout|cycling|active", C.ACTIVE),
        CategoryRule.of(r"festival|fair|market|expo", C.SPECIAL),
        CategoryRule.of(r"opening|grand opening|launch|debut", C.OPENING),
        CategoryRule.of(r"comedy|stand-up|theater|show|performance", C.ENTERTAINMENT),
    ),
    # Unrecognized price text ("Sales end soon") is kept as the note
    price_rules=PriceRules(
        free_pattern=re.compile(r"free|no cost|complimentary"),
        passthrough_unmatched=True,
    ),
    price_text=("price",),
    gazetteer=CHARLOTTE_NEIGHBORHOODS
    + gazetteer_from_names(["Cotswold", "SouthPark", "Park Road"]),
    venue_patterns=(),
    default_venue="Charlotte, NC",
    rewrite_image_urls=False,
)


@register_adapter("eventbrite")
class EventbriteAdapter(ScraperAdapter):
    profile = EVENTBRITE
