"""
Charlotte on the Cheap listings.

The site only covers free and low-cost events: single prices of $10 or
less are flagged as budget-friendly and listings without a price get a
site-specific note instead of an empty one.
"""

import re

from src.ingestion.adapters.scraper_adapter import ScraperAdapter, ScraperProfile
from src.ingestion.normalization.classifier import DEFAULT_RULES
from src.ingestion.normalization.location_parser import (
    CHARLOTTE_NEIGHBORHOODS,
    gazetteer_from_names,
)
from src.ingestion.normalization.price_parser import PriceRules
from src.ingestion.parsers.extractors import FieldExtractor, SelectAttr, SelectText

from .registry import register_adapter

CHARLOTTE_ON_THE_CHEAP = ScraperProfile(
    container_selector='article, .event, .post, [class*="event"]',
    title=FieldExtractor.of(SelectText("h2, h3, h4, .entry-title, .post-title")),
    description=FieldExtractor.of(SelectText(".entry-content, .post-content, p")),
    date=FieldExtractor.of(
        SelectText("time, .date, .published"),
        SelectAttr("time", "datetime"),
    ),
    base_origin="https://www.charlotteonthecheap.com",
    category_rules=DEFAULT_RULES,
    price_rules=PriceRules(
        free_pattern=re.compile(r"free|no cost|complimentary|no charge"),
        default_note="Check for low-cost options",
        budget_threshold=10.0,
    ),
    gazetteer=CHARLOTTE_NEIGHBORHOODS + gazetteer_from_names(["SouthPark", "Cotswold"]),
    neighborhood_text=("title", "description"),
    tags=("cheap", "budget-friendly"),
)


@register_adapter("charlotte_on_the_cheap")
class CharlotteOnTheCheapAdapter(ScraperAdapter):
    profile = CHARLOTTE_ON_THE_CHEAP
