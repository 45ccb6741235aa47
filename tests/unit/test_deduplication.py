"""
Unit tests for the deduplication module.

Tests for dedupe keys, pairwise merging and the merging deduplicator.
"""

from datetime import datetime, timedelta, timezone

import pytest

from src.ingestion.deduplication import (
    MergingDeduplicator,
    dedupe,
    dedupe_key,
    merge_events,
    normalize_for_matching,
)
from src.ingestion.normalization.normalizer import compute_confidence
from src.schemas.event import PriceInfo, VenueInfo

JUNE_1_6PM = datetime(2024, 6, 1, 18, 0, tzinfo=timezone.utc)

# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def taste_of_charlotte(create_event):
    """The same festival as listed by two sources."""
    first = create_event(
        title="Taste of Charlotte",
        venue_name="Uptown",
        start_datetime=JUNE_1_6PM,
        source_name="Visit Charlotte",
        tags=["festival"],
    )
    second = create_event(
        title="taste of charlotte!!",
        venue=VenueInfo(name="uptown", address="Tryon St", neighborhood="Uptown"),
        start_datetime=JUNE_1_6PM + timedelta(hours=1, minutes=30),
        source_name="CLTtoday",
        description="Food from 30 restaurants",
        image="https://img.example.com/taste.jpg",
        price=PriceInfo(min=0, max=0, notes="Free"),
        tags=["local-news", "festival"],
    )
    return first, second


# =============================================================================
# TEST CLASSES
# =============================================================================


class TestNormalizeForMatching:
    """Tests for normalize_for_matching."""

    def test_strips_punctuation_and_case(self):
        """Should lowercase and drop punctuation."""
        assert normalize_for_matching("  Taste of   Charlotte!! ") == "taste of charlotte"

    def test_underscores_dropped(self):
        """Should treat underscores as punctuation."""
        assert normalize_for_matching("jazz_night") == "jazznight"


class TestDedupeKey:
    """Tests for dedupe_key."""

    def test_same_key_for_variants(self, taste_of_charlotte):
        """Should give textual variants on the same day one key."""
        first, second = taste_of_charlotte
        assert dedupe_key(first) == dedupe_key(second) == (
            "taste of charlotte",
            "uptown",
            "2024-06-01",
        )

    def test_undated_key(self, create_event):
        """Should use an empty date for unscheduled events."""
        assert dedupe_key(create_event(start_datetime=None))[2] == ""


class TestMergeEvents:
    """Tests for merge_events."""

    def test_backfills_from_secondary(self, taste_of_charlotte):
        """Should fill the primary's empty fields from the other event."""
        first, second = taste_of_charlotte
        merged = merge_events(first, second)

        # second is more complete, so it is primary
        assert merged.id == second.id
        assert merged.source.name == "CLTtoday"
        assert merged.source.merged_from == "Visit Charlotte"
        assert merged.tags == ["local-news", "festival"]
        assert merged.confidence == compute_confidence(merged)

    def test_primary_fields_win(self, create_event):
        """Should keep the primary's populated fields."""
        primary = create_event(description="Primary text", url="https://a.example")
        secondary = create_event(description="Other text")
        merged = merge_events(primary, secondary)
        assert merged.description == "Primary text"

    def test_fills_description_and_image(self, create_event):
        """Should take missing description, image and address from the secondary."""
        primary = create_event(url="https://a.example", image=None, confidence=0.95)
        secondary = create_event(
            description="Details",
            image="https://img.example.com/x.jpg",
            venue=VenueInfo(name="Test Venue", address="1 Main St", lat=35.2, lng=-80.8),
        )
        merged = merge_events(primary, secondary)

        assert merged.description == "Details"
        assert merged.image == "https://img.example.com/x.jpg"
        assert merged.venue.address == "1 Main St"
        assert (merged.venue.lat, merged.venue.lng) == (35.2, -80.8)

    def test_zero_price_not_overwritten(self, create_event):
        """Should keep a 0 price on the primary."""
        primary = create_event(description="d", price=PriceInfo(min=0, max=0, notes="Free"))
        secondary = create_event(price=PriceInfo(min=20, max=40, notes="Ticketed"))
        merged = merge_events(primary, secondary)
        assert (merged.price.min, merged.price.max, merged.price.notes) == (0, 0, "Free")

    def test_first_seen_wins_ties(self, create_event):
        """Should keep the earlier event as primary on equal confidence."""
        first = create_event(source_name="A")
        second = create_event(source_name="B")
        assert merge_events(first, second).source.name == "A"
        assert merge_events(second, first).source.name == "B"

    def test_more_than_six_hours_apart_not_merged(self, create_event):
        """Should drop the weaker event instead of merging."""
        early = create_event(start_datetime=JUNE_1_6PM - timedelta(hours=7), source_name="A")
        late = create_event(
            start_datetime=JUNE_1_6PM, source_name="B", description="More complete"
        )
        result = merge_events(early, late)
        assert result == late
        assert result.source.merged_from is None

    def test_exactly_six_hours_merged(self, create_event):
        """Should merge events exactly six hours apart."""
        a = create_event(start_datetime=JUNE_1_6PM - timedelta(hours=6), source_name="A")
        b = create_event(start_datetime=JUNE_1_6PM, source_name="B")
        assert merge_events(a, b).source.merged_from == "B"

    def test_commutative_backfill(self, taste_of_charlotte):
        """Should produce the same merged fields regardless of argument order."""
        first, second = taste_of_charlotte
        ab = merge_events(first, second)
        ba = merge_events(second, first)

        assert ab.model_dump(exclude={"source", "tags"}) == ba.model_dump(
            exclude={"source", "tags"}
        )
        assert set(ab.tags) == set(ba.tags)


class TestMergingDeduplicator:
    """Tests for MergingDeduplicator."""

    def test_taste_of_charlotte_merged(self, taste_of_charlotte):
        """Should merge both listings into one event."""
        result = MergingDeduplicator().deduplicate(list(taste_of_charlotte))
        assert len(result) == 1
        assert result[0].source.merged_from == "Visit Charlotte"

    def test_order_of_first_appearance(self, create_event):
        """Should keep one event per key in first-seen order."""
        a = create_event(title="Alpha")
        b = create_event(title="Beta")
        a_again = create_event(title="ALPHA!", description="dup")
        result = dedupe([a, b, a_again])
        # the duplicate is more complete, so it represents the key
        assert [e.title for e in result] == ["ALPHA!", "Beta"]

    def test_different_days_kept(self, create_event):
        """Should not merge the same title on different days."""
        a = create_event(start_datetime=JUNE_1_6PM)
        b = create_event(start_datetime=JUNE_1_6PM + timedelta(days=1))
        assert len(dedupe([a, b])) == 2

    def test_idempotent(self, taste_of_charlotte, create_event):
        """Should find nothing further to merge in its own output."""
        events = [*taste_of_charlotte, create_event(title="Other")]
        once = dedupe(events)
        assert dedupe(once) == once

    def test_empty(self):
        """Should handle an empty list."""
        assert dedupe([]) == []
