"""
Location Parser.

Heuristics for venue names and neighborhoods in free listing text:

- neighborhood: case-insensitive substring match against a fixed gazetteer,
  first entry wins (no disambiguation);
- venue: "at <Capitalized phrase>" / "in <Capitalized phrase>" when the
  listing has no structured venue field;
- known venues: literal venue names looked up in a title.
"""

from __future__ import annotations

import re
from typing import Iterable, Pattern, Sequence, Tuple

# (needle, neighborhood) pairs; needles are matched case-insensitively.
Gazetteer = Tuple[Tuple[str, str], ...]


def gazetteer_from_names(names: Iterable[str]) -> Gazetteer:
    """Build a gazetteer where each district name matches itself."""
    return tuple((name, name) for name in names)


CHARLOTTE_NEIGHBORHOODS: Gazetteer = gazetteer_from_names(
    [
        "Uptown",
        "South End",
        "NoDa",
        "Plaza Midwood",
        "Dilworth",
        "Myers Park",
        "Ballantyne",
        "University",
        "Montford",
        "Elizabeth",
    ]
)

# Venue -> district for the big arenas and theaters
CHARLOTTE_VENUE_NEIGHBORHOODS: Gazetteer = (
    ("uptown", "Uptown"),
    ("bank of america stadium", "Uptown"),
    ("spectrum center", "Uptown"),
    ("truist field", "Uptown"),
    ("pnc music pavilion", "University"),
    ("bojangles coliseum", "East Charlotte"),
    ("ovens auditorium", "East Charlotte"),
    ("blumenthal", "Uptown"),
    ("knight theater", "Uptown"),
    ("belk theater", "Uptown"),
)

AT_VENUE_PATTERN = re.compile(r"\bat\s+([A-Z][^,.]+)")
IN_VENUE_PATTERN = re.compile(r"\bin\s+([A-Z][^,.]+)")


def find_neighborhood(text: str | None, gazetteer: Gazetteer = CHARLOTTE_NEIGHBORHOODS) -> str:
    """
    Return the first gazetteer district found in text, or "".

    Matching is a case-insensitive substring test in gazetteer order.
    """
    if not text:
        return ""
    lowered = text.lower()
    for needle, neighborhood in gazetteer:
        if needle.lower() in lowered:
            return neighborhood
    return ""


def extract_venue(
    text: str | None,
    patterns: Sequence[Pattern[str]] = (AT_VENUE_PATTERN,),
) -> str:
    """
    Extract a venue name with the first matching pattern, or "".

    Patterns must capture the venue in group 1.
    """
    if not text:
        return ""
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return match.group(1).strip()
    return ""


def find_known_venue(text: str | None, venues: Sequence[str]) -> str:
    """Return the first known venue name contained in text (case-sensitive)."""
    if not text:
        return ""
    for venue in venues:
        if venue in text:
            return venue
    return ""
