"""Axios Charlotte articles, filtered to event coverage."""

import re

from src.ingestion.adapters.scraper_adapter import ScraperAdapter, ScraperProfile
from src.ingestion.normalization.classifier import CategoryRule
from src.ingestion.normalization.price_parser import PriceRules
from src.ingestion.parsers.extractors import FieldExtractor, SelectAttr, SelectText
from src.schemas.event import EventCategory as C

from .registry import register_adapter

EVENT_KEYWORDS = re.compile(
    r"event|concert|festival|opening|show|party|market|fair|game|match",
    re.IGNORECASE,
)

AXIOS_CHARLOTTE = ScraperProfile(
    container_selector='article, .article, [class*="event"], [class*="story"]',
    title=FieldExtractor.of(SelectText('h2, h3, h4, .title, [class*="headline"]')),
    description=FieldExtractor.of(SelectText("p, .description, .excerpt")),
    date=FieldExtractor.of(
        SelectText('time, .date, [class*="date"]'),
        SelectAttr("time", "datetime"),
    ),
    base_origin="https://www.axios.com",
    category_rules=(
        CategoryRule.of(r"concert|music|band|dj|live music", C.CONCERT, C.NIGHTLIFE),
        CategoryRule.of(r"bar|brewery|wine|beer|cocktail", C.BAR, C.NIGHTLIFE),
        CategoryRule.of(r"restaurant|dining|food|brunch", C.RESTAURANT),
        CategoryRule.of(r"sport|game|panthers|hornets|football|basketball", C.SPORTS),
        CategoryRule.of(r"festival|fair|market", C.SPECIAL),
        CategoryRule.of(r"opening|debut|launch|new", C.OPENING),
        CategoryRule.of(r"party|dance|club", C.NIGHTLIFE),
    ),
    price_rules=PriceRules(free_pattern=re.compile(r"free|no cost|complimentary")),
    neighborhood_text=("title", "description"),
    topical_filter=EVENT_KEYWORDS,
    tags=("axios",),
)


@register_adapter("axios_charlotte")
class AxiosCharlotteAdapter(ScraperAdapter):
    profile = AXIOS_CHARLOTTE
