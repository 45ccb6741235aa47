"""
Scraper Source Adapter.

Generic adapter for listing pages. Everything source-specific (selectors,
keyword tables, price wording, gazetteer, tags) lives in a ScraperProfile,
so adding an HTML source means writing a profile, not a parser.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional, Pattern, Tuple

from bs4 import BeautifulSoup
from bs4.element import Tag

from src.ingestion.normalization.classifier import DEFAULT_RULES, CategoryRules, classify
from src.ingestion.normalization.date_parser import parse_date_text
from src.ingestion.normalization.location_parser import (
    AT_VENUE_PATTERN,
    CHARLOTTE_NEIGHBORHOODS,
    Gazetteer,
    extract_venue,
    find_known_venue,
    find_neighborhood,
)
from src.ingestion.normalization.price_parser import (
    DEFAULT_PRICE_RULES,
    PriceRules,
    extract_price,
)
from src.ingestion.parsers.extractors import (
    EMPTY,
    FieldExtractor,
    SelectAttr,
    absolutize_image,
    absolutize_link,
    origin_of,
)
from src.schemas.event import AdapterKind, RawCandidate, RawVenue

from .base_adapter import BaseSourceAdapter

METRO_NAME = "Charlotte"

# Card fields every profile can reference by name
CARD_FIELDS = ("title", "description", "date", "venue", "price", "link", "image")

DEFAULT_LINK = FieldExtractor.of(SelectAttr("a", "href"))
DEFAULT_IMAGE = FieldExtractor.of(SelectAttr("img", "src"))


@dataclass(frozen=True)
class ScraperProfile:
    """
    Scraping rules for one listing site.

    Text sources (`category_text`, `price_text`, ...) name card fields.
    Several names are joined with a space; "a|b" means the first non-empty
    of a and b.

    Attributes:
        container_selector: CSS selector for one listing card
        title .. image: Field extractors, evaluated inside the card
        base_origin: Origin for relative URLs (defaults to the source's)
        category_rules: Ordered regex -> labels table
        price_rules: Free-text price rules
        gazetteer: Neighborhood lookup table
        venue_patterns: Heuristics used when there is no structured venue
        known_venues: Literal venue names looked up before the heuristics
        default_venue: Venue when nothing else matched
        default_neighborhood: Fixed neighborhood for single-district sites
        topical_filter: Keep a card only if title + description match
        locality_filter: Keep a card only if it has a structured venue or
            its title matches
        description_template: Synthesized description, formatted with venue
        rewrite_image_urls: Absolutize image URLs
        tags: Tags attached to every candidate
    """

    container_selector: str
    title: FieldExtractor
    description: FieldExtractor = EMPTY
    date: FieldExtractor = EMPTY
    venue: FieldExtractor = EMPTY
    price: FieldExtractor = EMPTY
    link: FieldExtractor = DEFAULT_LINK
    image: FieldExtractor = DEFAULT_IMAGE
    base_origin: Optional[str] = None

    category_rules: CategoryRules = DEFAULT_RULES
    category_text: Tuple[str, ...] = ("title", "description")
    price_rules: PriceRules = DEFAULT_PRICE_RULES
    price_text: Tuple[str, ...] = ("title", "description")

    gazetteer: Gazetteer = CHARLOTTE_NEIGHBORHOODS
    neighborhood_text: Tuple[str, ...] = ("venue",)
    default_neighborhood: str = ""

    venue_patterns: Tuple[Pattern[str], ...] = (AT_VENUE_PATTERN,)
    venue_text: Tuple[str, ...] = ("title", "description")
    known_venues: Tuple[str, ...] = ()
    default_venue: str = ""

    topical_filter: Optional[Pattern[str]] = None
    locality_filter: Optional[Pattern[str]] = None
    description_template: Optional[str] = None
    rewrite_image_urls: bool = True
    tags: Tuple[str, ...] = field(default_factory=tuple)


def _card_text(card: Dict[str, str], names: Tuple[str, ...]) -> str:
    parts = []
    for name in names:
        alternatives = [card.get(alt, "") for alt in name.split("|")]
        parts.append(next((value for value in alternatives if value), ""))
    return " ".join(parts)


class ScraperAdapter(BaseSourceAdapter):
    """
    Adapter for HTML listing pages.

    Subclasses set `profile`; the page is fetched through the cache and
    every card matching the container selector becomes one candidate.
    """

    kind = AdapterKind.SCRAPER
    profile: ScraperProfile

    @property
    def origin(self) -> str:
        return self.profile.base_origin or origin_of(self.source.url)

    async def fetch_raw(self) -> str:
        return await self.fetch_with_cache(self.source.url)

    def parse(self, raw: str) -> Iterator[RawCandidate]:
        """Yield one candidate per usable card; broken cards are skipped."""
        soup = BeautifulSoup(raw, "lxml")
        for element in soup.select(self.profile.container_selector):
            try:
                candidate = self.parse_card(element)
            except Exception as e:
                self.logger.debug("Card skipped", exc_info=True)
                self.run_log.warning(self.name, f"Failed to parse event: {e}")
                continue
            if candidate is not None:
                yield candidate

    def extract_card(self, element: Tag) -> Dict[str, str]:
        """Run every field extractor of the profile against one card."""
        return {name: getattr(self.profile, name).extract(element) for name in CARD_FIELDS}

    def parse_card(self, element: Tag) -> Optional[RawCandidate]:
        """
        Build a candidate from one card.

        Returns:
            RawCandidate, or None when the card is rejected (no title,
            off-topic, or not verifiably local)
        """
        profile = self.profile
        card = self.extract_card(element)
        title = card["title"]
        if not title:
            return None

        if profile.topical_filter is not None:
            if not profile.topical_filter.search(f"{title} {card['description']}"):
                return None

        if profile.locality_filter is not None and not card["venue"]:
            if not profile.locality_filter.search(title):
                return None

        description = card["description"]
        if profile.description_template is not None:
            description = profile.description_template.format(
                venue=card["venue"] or METRO_NAME
            )

        return RawCandidate(
            title=title,
            description=description,
            start_datetime=parse_date_text(card["date"], self.tz),
            end_datetime=None,
            venue=RawVenue(
                name=self._resolve_venue(card),
                address="",
                neighborhood=self._resolve_neighborhood(card),
            ),
            category=classify(_card_text(card, profile.category_text), profile.category_rules),
            price=extract_price(_card_text(card, profile.price_text).strip(), profile.price_rules),
            image=(
                absolutize_image(card["image"], self.origin)
                if profile.rewrite_image_urls
                else card["image"] or None
            ),
            url=absolutize_link(card["link"], self.origin, self.source.url),
            source_url=self.source.url,
            tags=list(profile.tags),
        )

    def _resolve_venue(self, card: Dict[str, str]) -> str:
        """Structured venue, then known venues, then text heuristics, then default."""
        if card["venue"]:
            return card["venue"]
        text = _card_text(card, self.profile.venue_text)
        return (
            find_known_venue(text, self.profile.known_venues)
            or extract_venue(text, self.profile.venue_patterns)
            or self.profile.default_venue
        )

    def _resolve_neighborhood(self, card: Dict[str, str]) -> str:
        if self.profile.default_neighborhood:
            return self.profile.default_neighborhood
        return find_neighborhood(
            _card_text(card, self.profile.neighborhood_text), self.profile.gazetteer
        )


__all__ = ["METRO_NAME", "ScraperAdapter", "ScraperProfile"]
