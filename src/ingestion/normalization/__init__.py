"""
Normalization module for event data.

This package provides:
- normalize: RawCandidate -> CanonicalEvent
- compute_confidence / generate_event_id: derived canonical fields
- classify: keyword category rules
- extract_price: free-text price rules
- find_neighborhood / extract_venue: location heuristics
- parse_datetime / parse_date_text: tolerant date coercion
"""

from .classifier import DEFAULT_RULES, CategoryRule, CategoryRules, classify
from .date_parser import DEFAULT_TIMEZONE, parse_date_text, parse_datetime
from .location_parser import (
    AT_VENUE_PATTERN,
    CHARLOTTE_NEIGHBORHOODS,
    CHARLOTTE_VENUE_NEIGHBORHOODS,
    IN_VENUE_PATTERN,
    Gazetteer,
    extract_venue,
    find_known_venue,
    find_neighborhood,
    gazetteer_from_names,
)
from .normalizer import (
    CONFIDENCE_WEIGHTS,
    compute_confidence,
    generate_event_id,
    normalize,
    normalize_all,
    sanitize_text,
)
from .price_parser import DEFAULT_PRICE_RULES, PriceRules, extract_price

__all__ = [
    # Normalizer
    "normalize",
    "normalize_all",
    "compute_confidence",
    "generate_event_id",
    "sanitize_text",
    "CONFIDENCE_WEIGHTS",
    # Categories
    "CategoryRule",
    "CategoryRules",
    "DEFAULT_RULES",
    "classify",
    # Price
    "PriceRules",
    "DEFAULT_PRICE_RULES",
    "extract_price",
    # Location
    "Gazetteer",
    "gazetteer_from_names",
    "CHARLOTTE_NEIGHBORHOODS",
    "CHARLOTTE_VENUE_NEIGHBORHOODS",
    "AT_VENUE_PATTERN",
    "IN_VENUE_PATTERN",
    "extract_venue",
    "find_known_venue",
    "find_neighborhood",
    # Dates
    "DEFAULT_TIMEZONE",
    "parse_datetime",
    "parse_date_text",
]
