"""Charlotte Center City Partners (uptowncharlotte.com) event calendar."""

import re

from src.ingestion.adapters.scraper_adapter import ScraperAdapter, ScraperProfile
from src.ingestion.normalization.classifier import CategoryRule
from src.ingestion.normalization.price_parser import PriceRules
from src.ingestion.parsers.extractors import FieldExtractor, SelectAttr, SelectText
from src.schemas.event import EventCategory as C

from .registry import register_adapter

UPTOWN_CHARLOTTE = ScraperProfile(
    container_selector='.event, .event-card, .event-item, article, [class*="event"]',
    title=FieldExtractor.of(SelectText("h1, h2, h3, h4, .event-title, .title")),
    description=FieldExtractor.of(
        SelectText("p, .description, .event-description, .excerpt")
    ),
    date=FieldExtractor.of(
        SelectText("time, .date, .event-date, .start-date"),
        SelectAttr("time", "datetime"),
    ),
    venue=FieldExtractor.of(SelectText(".venue, .location, .event-venue")),
    base_origin="https://www.uptowncharlotte.com",
    category_rules=(
        CategoryRule.of(
            r"concert|music|live music|band|dj|performance", C.CONCERT, C.NIGHTLIFE
        ),
        CategoryRule.of(r"bar|brewery|wine|beer|cocktail|rooftop", C.BAR, C.NIGHTLIFE),
        CategoryRule.of(r"restaurant|dining|food|brunch|dinner", C.RESTAURANT),
        CategoryRule.of(r"sport|game|panthers|hornets|charlotte fc", C.SPORTS),
        CategoryRule.of(r"festival|fair|market|street fair", C.SPECIAL),
        CategoryRule.of(r"opening|grand opening|ribbon cutting|new", C.OPENING),
        CategoryRule.of(r"party|dance|club|nightlife", C.NIGHTLIFE),
        CategoryRule.of(r"comedy|theater|art|show|gallery", C.ENTERTAINMENT),
        CategoryRule.of(r"run|walk|5k|marathon|fitness", C.ACTIVE),
    ),
    price_rules=PriceRules(
        free_pattern=re.compile(
            r"free|no cost|complimentary|no charge|no cover|no admission fee"
        ),
    ),
    # Every listing on this calendar is in the center city
    default_neighborhood="Uptown",
    tags=("uptown",),
)


@register_adapter("uptown_charlotte")
class UptownCharlotteAdapter(ScraperAdapter):
    profile = UPTOWN_CHARLOTTE
