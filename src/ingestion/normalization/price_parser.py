"""
Price Parser.

Turns free-text price hints from listings into a RawPrice.

Rules are per source (each site words prices differently), so the
patterns and fallback notes live in a PriceRules table that adapters
carry as data.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Pattern

from src.schemas.event import RawPrice

FREE_PATTERN = re.compile(r"free|no cost|complimentary|no charge|no cover")
RANGE_PATTERN = re.compile(r"\$(\d+(?:\.\d{2})?)\s*-\s*\$?(\d+(?:\.\d{2})?)")
SINGLE_PATTERN = re.compile(r"\$(\d+(?:\.\d{2})?)")


@dataclass(frozen=True)
class PriceRules:
    """
    Price extraction rules for one source.

    Attributes:
        free_pattern: Matches explicit free language; None disables the rule
        range_pattern: Two capture groups (min, max); None disables ranges
        single_pattern: One capture group
        range_note / single_note: Notes attached to numeric prices
        default_note: Note when nothing matched
        empty_note: Note when there is no price text at all
        budget_threshold: Single prices at or below this get budget_note
        passthrough_unmatched: Use the raw text as the note when nothing matched
    """

    free_pattern: Optional[Pattern[str]] = FREE_PATTERN
    range_pattern: Optional[Pattern[str]] = RANGE_PATTERN
    single_pattern: Pattern[str] = SINGLE_PATTERN
    free_note: str = "Free"
    range_note: str = "Ticketed"
    single_note: str = "Ticketed"
    default_note: str = ""
    empty_note: Optional[str] = None
    budget_threshold: Optional[float] = None
    budget_note: str = "Budget-friendly"
    passthrough_unmatched: bool = False


DEFAULT_PRICE_RULES = PriceRules()


def extract_price(text: Optional[str], rules: PriceRules = DEFAULT_PRICE_RULES) -> RawPrice:
    """
    Extract a price from listing text.

    Order: free language -> "$N-$M" range -> "$N" single -> default note.

    Examples (default rules):
        "Free admission"  -> RawPrice(0, 0, notes="Free")
        "$15 - $25"       -> RawPrice(15, 25, notes="Ticketed")
        "Tickets $20"     -> RawPrice(20, None, notes="Ticketed")
        "Call for prices" -> RawPrice(None, None, notes="")
    """
    if not text or not text.strip():
        note = rules.empty_note if rules.empty_note is not None else rules.default_note
        return RawPrice(min=None, max=None, notes=note)

    lowered = text.lower()

    if rules.free_pattern is not None and rules.free_pattern.search(lowered):
        return RawPrice(min=0.0, max=0.0, notes=rules.free_note)

    if rules.range_pattern is not None:
        match = rules.range_pattern.search(lowered)
        if match:
            return RawPrice(
                min=float(match.group(1)),
                max=float(match.group(2)),
                notes=rules.range_note,
            )

    match = rules.single_pattern.search(lowered)
    if match:
        amount = float(match.group(1))
        note = rules.single_note
        if rules.budget_threshold is not None and amount <= rules.budget_threshold:
            note = rules.budget_note
        return RawPrice(min=amount, max=None, notes=note)

    if rules.passthrough_unmatched:
        return RawPrice(min=None, max=None, notes=text.strip())
    return RawPrice(min=None, max=None, notes=rules.default_note)
