"""
Unit tests for the price_parser module.
"""

import pytest

from src.ingestion.normalization.price_parser import PriceRules, extract_price
from src.ingestion.sources.charlotte_on_the_cheap import CHARLOTTE_ON_THE_CHEAP
from src.ingestion.sources.eventbrite import EVENTBRITE
from src.ingestion.sources.ticketmaster import TICKETMASTER


class TestExtractPrice:
    """Tests for extract_price with the default rules."""

    @pytest.mark.parametrize(
        "text",
        ["Free admission", "No cover all night", "Complimentary tastings"],
    )
    def test_free_language(self, text):
        """Should read free language as a zero price."""
        price = extract_price(text)
        assert (price.min, price.max, price.notes) == (0.0, 0.0, "Free")

    def test_range(self):
        """Should read "$N - $M" as a range."""
        price = extract_price("Tickets $15 - $25 at the door")
        assert (price.min, price.max, price.notes) == (15.0, 25.0, "Ticketed")

    def test_single(self):
        """Should read a lone "$N" as a minimum."""
        price = extract_price("Tickets $20.50")
        assert (price.min, price.max, price.notes) == (20.5, None, "Ticketed")

    def test_free_wins_over_amounts(self):
        """Should check free language before amounts."""
        assert extract_price("Free before 9, $10 after").notes == "Free"

    def test_nothing_matched(self):
        """Should return an empty price when nothing matches."""
        price = extract_price("Call for details")
        assert (price.min, price.max, price.notes) == (None, None, "")

    def test_empty_text(self):
        """Should handle missing text."""
        assert extract_price(None).min is None


class TestSourcePriceRules:
    """Price wording differs per source."""

    def test_budget_note(self):
        """Should flag cheap single prices on Charlotte on the Cheap."""
        price = extract_price("Only $8 per person", CHARLOTTE_ON_THE_CHEAP.price_rules)
        assert (price.min, price.notes) == (8.0, "Budget-friendly")

    def test_budget_threshold_inclusive(self):
        """Should treat exactly $10 as budget-friendly."""
        assert extract_price("$10", CHARLOTTE_ON_THE_CHEAP.price_rules).notes == "Budget-friendly"

    def test_cheap_default_note(self):
        """Should use the site note when there is no price."""
        price = extract_price("Bring a blanket", CHARLOTTE_ON_THE_CHEAP.price_rules)
        assert price.notes == "Check for low-cost options"

    def test_ticketmaster_never_free(self):
        """Should not read free language on Ticketmaster."""
        price = extract_price("Free parking, tickets $45", TICKETMASTER.price_rules)
        assert (price.min, price.notes) == (45.0, "Starting at")

    def test_ticketmaster_default_note(self):
        """Should point to Ticketmaster when no price is shown."""
        assert extract_price("", TICKETMASTER.price_rules).notes == "Check Ticketmaster"

    def test_eventbrite_passthrough(self):
        """Should keep unrecognized price text as the note."""
        assert extract_price("Sales end soon", EVENTBRITE.price_rules).notes == "Sales end soon"

    def test_range_disabled(self):
        """Should fall through to the single rule when ranges are off."""
        rules = PriceRules(range_pattern=None)
        price = extract_price("$15 - $25", rules)
        assert (price.min, price.max) == (15.0, None)
