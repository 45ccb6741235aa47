"""
Unit tests for the classifier module.

Rule tables are per source, so a few of them are exercised directly.
"""

from src.ingestion.normalization.classifier import DEFAULT_RULES, CategoryRule, classify
from src.ingestion.sources.clt_today import CLT_TODAY
from src.ingestion.sources.ticketmaster import TICKETMASTER
from src.ingestion.sources.uptown_charlotte import UPTOWN_CHARLOTTE
from src.schemas.event import EventCategory


class TestClassify:
    """Tests for classify."""

    def test_multiple_labels_in_rule_order(self):
        """Should collect labels from every matching rule, without duplicates."""
        labels = classify("Live music and craft beer", DEFAULT_RULES)
        assert labels == ["concert", "nightlife", "bar"]

    def test_case_insensitive(self):
        """Should lowercase the text before matching."""
        assert classify("BRUNCH SOCIAL", DEFAULT_RULES) == ["restaurant"]

    def test_default_when_nothing_matches(self):
        """Should fall back to the catch-all label."""
        assert classify("Quiet afternoon", DEFAULT_RULES) == ["special"]

    def test_empty_text(self):
        """Should treat None as no text."""
        assert classify(None, DEFAULT_RULES) == ["special"]

    def test_custom_default(self):
        """Should accept a different fallback."""
        rules = (CategoryRule.of(r"yoga", EventCategory.ACTIVE),)
        assert classify("Trivia", rules, default=(EventCategory.ENTERTAINMENT,)) == [
            "entertainment"
        ]


class TestSourceRuleTables:
    """Per-source tables word things differently."""

    def test_uptown_active_rule(self):
        """Should label a 5K as active on the Uptown calendar."""
        assert "active" in classify("Uptown 5K Fun Run", UPTOWN_CHARLOTTE.category_rules)

    def test_clt_today_soccer_is_sports(self):
        """Should count Charlotte FC as sports."""
        assert "sports" in classify("Charlotte FC watch party", CLT_TODAY.category_rules)

    def test_ticketmaster_tour(self):
        """Should read 'tour' as a concert on Ticketmaster."""
        labels = classify("Summer Tour 2024", TICKETMASTER.category_rules)
        assert labels == ["concert", "nightlife"]
