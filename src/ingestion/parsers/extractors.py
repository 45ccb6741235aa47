"""
Field Extractors.

Per-field extraction strategies for listing cards, expressed as data so a
source's scraping rules are a table rather than code:

- SelectText(selector): visible text of the first match
- SelectAttr(selector, attr): attribute value of the first match
- FieldExtractor(strategies): tries strategies in order; first non-empty
  value wins

Selectors are CSS selectors evaluated with BeautifulSoup/soupsieve relative
to the card element.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Tuple
from urllib.parse import urlsplit

from bs4.element import Tag


class Extractor(ABC):
    """A single strategy for pulling one string out of a card element."""

    @abstractmethod
    def extract(self, element: Tag) -> str:
        """Return the extracted value, or "" when nothing was found."""


@dataclass(frozen=True)
class SelectText(Extractor):
    """Text content of the first element matching `selector`."""

    selector: str

    def extract(self, element: Tag) -> str:
        match = element.select_one(self.selector)
        if match is None:
            return ""
        return match.get_text(" ", strip=True)


@dataclass(frozen=True)
class SelectAttr(Extractor):
    """Attribute `attr` of the first element matching `selector`."""

    selector: str
    attr: str

    def extract(self, element: Tag) -> str:
        match = element.select_one(self.selector)
        if match is None:
            return ""
        value = match.get(self.attr)
        if isinstance(value, list):  # multi-valued attributes such as class
            value = " ".join(value)
        return (value or "").strip()


@dataclass(frozen=True)
class FieldExtractor:
    """Ordered fallback chain of extractors for one field."""

    strategies: Tuple[Extractor, ...]

    @classmethod
    def of(cls, *strategies: Extractor) -> "FieldExtractor":
        return cls(tuple(strategies))

    def extract(self, element: Tag) -> str:
        for strategy in self.strategies:
            value = strategy.extract(element)
            if value:
                return value
        return ""


EMPTY = FieldExtractor(())


# ============================================================================
# URL helpers
# ============================================================================


def origin_of(url: str) -> str:
    """scheme://host of a URL."""
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}"


def absolutize_image(url: Optional[str], origin: str) -> Optional[str]:
    """
    Rewrite a relative image URL against the source origin.

    "//cdn/x.jpg" -> "https://cdn/x.jpg", "/x.jpg" -> origin + "/x.jpg";
    missing -> None.
    """
    if not url:
        return None
    if url.startswith("//"):
        return "https:" + url
    if url.startswith("/"):
        return origin.rstrip("/") + url
    return url


def absolutize_link(url: Optional[str], origin: str, fallback: str) -> str:
    """
    Rewrite a relative link against the source origin.

    Missing links fall back to the listing page URL.
    """
    if not url:
        return fallback
    if url.startswith("//"):
        return "https:" + url
    if url.startswith("/"):
        return origin.rstrip("/") + url
    return url
