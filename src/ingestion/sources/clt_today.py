"""
CLTToday (6AM City) articles.

A local news site: only articles whose title or teaser reads like an event
are kept.
"""

import re

from src.ingestion.adapters.scraper_adapter import ScraperAdapter, ScraperProfile
from src.ingestion.normalization.classifier import CategoryRule
from src.ingestion.normalization.location_parser import (
    AT_VENUE_PATTERN,
    CHARLOTTE_NEIGHBORHOODS,
    IN_VENUE_PATTERN,
    gazetteer_from_names,
)
from src.ingestion.normalization.price_parser import PriceRules
from src.ingestion.parsers.extractors import FieldExtractor, SelectAttr, SelectText
from src.schemas.event import EventCategory as C

from .registry import register_adapter

EVENT_KEYWORDS = re.compile(
    r"event|happening|things to do|weekend|concert|festival|opening|show|market|fair",
    re.IGNORECASE,
)

CLT_TODAY = ScraperProfile(
    container_selector='article, .card, .post, [class*="article"], [class*="story"]',
    title=FieldExtractor.of(SelectText("h1, h2, h3, h4, .title, .headline")),
    description=FieldExtractor.of(SelectText("p, .description, .excerpt, .summary")),
    date=FieldExtractor.of(
        SelectText("time, .date, .published-date"),
        SelectAttr("time", "datetime"),
    ),
    base_origin="https://clttoday.6amcity.com",
    category_rules=(
        CategoryRule.of(r"concert|music|live music|band|performer|dj", C.CONCERT, C.NIGHTLIFE),
        CategoryRule.of(r"bar|brewery|wine|beer|cocktail|pub", C.BAR, C.NIGHTLIFE),
        CategoryRule.of(r"restaurant|dining|food|brunch|dinner|chef", C.RESTAURANT),
        CategoryRule.of(
            r"sport|game|panthers|hornets|charlotte fc|football|basketball|soccer", C.SPORTS
        ),
        CategoryRule.of(r"festival|fair|market|expo", C.SPECIAL),
        CategoryRule.of(r"opening|grand opening|new|debut|launch", C.OPENING),
        CategoryRule.of(r"party|dance|club|nightclub|night out", C.NIGHTLIFE),
        CategoryRule.of(r"comedy|theater|show|performance|art", C.ENTERTAINMENT),
    ),
    price_rules=PriceRules(
        free_pattern=re.compile(r"free|no cost|complimentary|no charge|no admission"),
    ),
    gazetteer=CHARLOTTE_NEIGHBORHOODS
    + gazetteer_from_names(["SouthPark", "Cotswold", "Wesley Heights", "Cherry"]),
    neighborhood_text=("title", "description"),
    venue_patterns=(AT_VENUE_PATTERN, IN_VENUE_PATTERN),
    topical_filter=EVENT_KEYWORDS,
    tags=("local-news",),
)


@register_adapter("clt_today")
class CLTTodayAdapter(ScraperAdapter):
    profile = CLT_TODAY
