"""
Keyword Category Classifier.

Maps listing text to category labels using an ordered table of
regex -> labels rules. A record may receive several labels; when no rule
matches, a single catch-all label is applied.

Each source carries its own rule table (sites word things differently);
the tables below are the shared building blocks.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Pattern, Sequence, Tuple

from src.schemas.event import DEFAULT_CATEGORY, EventCategory

C = EventCategory


@dataclass(frozen=True)
class CategoryRule:
    """One classification rule: if `pattern` matches, add `labels`."""

    pattern: Pattern[str]
    labels: Tuple[EventCategory, ...]

    @classmethod
    def of(cls, pattern: str, *labels: EventCategory) -> "CategoryRule":
        return cls(re.compile(pattern), tuple(labels))


CategoryRules = Tuple[CategoryRule, ...]


def classify(
    text: str | None,
    rules: Sequence[CategoryRule],
    default: Sequence[EventCategory] = (DEFAULT_CATEGORY,),
) -> List[str]:
    """
    Classify text into an ordered, duplicate-free list of labels.

    Text is lowercased before matching, so rule patterns are written in
    lowercase.
    """
    lowered = (text or "").lower()
    labels: List[str] = []

    for rule in rules:
        if rule.pattern.search(lowered):
            for label in rule.labels:
                if label.value not in labels:
                    labels.append(label.value)

    if not labels:
        labels = [label.value for label in default]
    return labels


# ============================================================================
# Shared rule tables
# ============================================================================

DEFAULT_RULES: CategoryRules = (
    CategoryRule.of(r"concert|music|live music|band|dj", C.CONCERT, C.NIGHTLIFE),
    CategoryRule.of(r"bar|brewery|wine|beer|cocktail", C.BAR, C.NIGHTLIFE),
    CategoryRule.of(r"restaurant|dining|food|brunch|dinner", C.RESTAURANT),
    CategoryRule.of(r"sport|game|panthers|hornets", C.SPORTS),
    CategoryRule.of(r"festival|fair|market", C.SPECIAL),
    CategoryRule.of(r"opening|new|debut|launch", C.OPENING),
    CategoryRule.of(r"party|dance|club|nightclub", C.NIGHTLIFE),
    CategoryRule.of(r"comedy|theater|show", C.ENTERTAINMENT),
)
