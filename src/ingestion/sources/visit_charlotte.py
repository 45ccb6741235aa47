"""Visit Charlotte (charlottesgotalot.com) event listings."""

from src.ingestion.adapters.scraper_adapter import ScraperAdapter, ScraperProfile
from src.ingestion.normalization.classifier import CategoryRule
from src.ingestion.parsers.extractors import FieldExtractor, SelectText
from src.schemas.event import EventCategory as C

from .registry import register_adapter

VISIT_CHARLOTTE = ScraperProfile(
    container_selector='.event-card, .eventCard, [class*="event"]',
    title=FieldExtractor.of(SelectText('h2, h3, .event-title, [class*="title"]')),
    description=FieldExtractor.of(SelectText('p, .event-description, [class*="description"]')),
    venue=FieldExtractor.of(SelectText('.venue, .location, [class*="venue"]')),
    date=FieldExtractor.of(SelectText('.date, .event-date, [class*="date"]')),
    base_origin="https://www.charlottesgotalot.com",
    category_rules=(
        CategoryRule.of(r"restaurant|dining|food|brunch|dinner", C.RESTAURANT),
        CategoryRule.of(r"bar|cocktail|brewery|wine|beer", C.BAR, C.NIGHTLIFE),
        CategoryRule.of(r"concert|music|band|dj", C.CONCERT, C.NIGHTLIFE),
        CategoryRule.of(r"sport|game|match|panthers|hornets", C.SPORTS),
        CategoryRule.of(r"club|dance|party", C.NIGHTLIFE),
        CategoryRule.of(r"opening|grand opening|new", C.OPENING),
        CategoryRule.of(r"festival|fair|market", C.SPECIAL),
    ),
    # Venue comes only from the card's venue field
    venue_patterns=(),
)


@register_adapter("visit_charlotte")
class VisitCharlotteAdapter(ScraperAdapter):
    profile = VISIT_CHARLOTTE
