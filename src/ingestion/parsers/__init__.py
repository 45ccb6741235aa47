"""
HTML parsing helpers for scraping adapters.

Field extraction strategies and URL normalization shared by every
listing-page source.
"""

from .extractors import (
    EMPTY,
    Extractor,
    FieldExtractor,
    SelectAttr,
    SelectText,
    absolutize_image,
    absolutize_link,
    origin_of,
)

__all__ = [
    "EMPTY",
    "Extractor",
    "FieldExtractor",
    "SelectAttr",
    "SelectText",
    "absolutize_image",
    "absolutize_link",
    "origin_of",
]
