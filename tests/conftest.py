"""
Shared pytest fixtures for the Charlotte Event Feed test suite.

Provides factories for canonical events, source descriptors and raw
candidates, plus a throwaway cache and run log.
"""

from datetime import datetime, timezone
from typing import Optional

import pytest

from src.ingestion.cache import FileCache
from src.ingestion.normalization.normalizer import compute_confidence, generate_event_id
from src.monitoring.run_log import RunLog
from src.schemas.event import (
    CanonicalEvent,
    PriceInfo,
    RawCandidate,
    RawPrice,
    RawVenue,
    SourceDescriptor,
    SourceInfo,
    VenueInfo,
)

FIXED_NOW = datetime(2024, 5, 29, 16, 0, tzinfo=timezone.utc)  # Wednesday, noon in Charlotte


@pytest.fixture
def now():
    """Reference run time used across ranking and pipeline tests."""
    return FIXED_NOW


@pytest.fixture
def make_source():
    """
    Return a function that creates SourceDescriptor objects.

    Example:
        source = make_source(name="Visit Charlotte", adapter="visit_charlotte")
    """

    def _make_source(
        name: str = "Test Source",
        url: str = "https://events.example.com/listings",
        adapter: str = "test_adapter",
        **kwargs,
    ) -> SourceDescriptor:
        return SourceDescriptor(name=name, url=url, adapter=adapter, **kwargs)

    return _make_source


@pytest.fixture
def create_event():
    """
    Return a function that creates CanonicalEvent objects with sensible defaults.

    `id` and `confidence` are derived the same way the normalizer derives
    them unless passed explicitly. All defaults can be overridden via
    keyword arguments.

    Example:
        event = create_event(title="My Event", venue_name="The Evening Muse")
    """

    def _create_event(
        title: str = "Test Event",
        venue_name: str = "Test Venue",
        start_datetime: Optional[datetime] = datetime(2024, 6, 1, 0, 0, tzinfo=timezone.utc),
        source_name: str = "test",
        **kwargs,
    ) -> CanonicalEvent:
        venue = kwargs.pop("venue", None) or VenueInfo(name=venue_name)
        defaults = {
            "id": generate_event_id(title, venue.name, start_datetime),
            "title": title,
            "start_datetime": start_datetime,
            "venue": venue,
            "category": ["special"],
            "price": PriceInfo(),
            "source": SourceInfo(
                name=source_name,
                url="https://events.example.com/listings",
                scraped_at=FIXED_NOW,
            ),
        }
        defaults.update(kwargs)
        event = CanonicalEvent(**defaults)

        if "confidence" in kwargs:
            return event
        return event.model_copy(update={"confidence": compute_confidence(event)})

    return _create_event


@pytest.fixture
def sample_event(create_event):
    """
    Return a single default test event.

    Useful for tests that need a basic event to work with.
    """
    return create_event()


@pytest.fixture
def make_candidate():
    """Return a function that creates RawCandidate objects."""

    def _make_candidate(title: str = "Test Event", **kwargs) -> RawCandidate:
        defaults = {
            "title": title,
            "description": "A test event",
            "start_datetime": "2024-06-01T20:00:00Z",
            "venue": RawVenue(name="Test Venue", address="100 N Tryon St"),
            "category": ["special"],
            "price": RawPrice(),
            "url": "https://events.example.com/e/1",
            "source_url": "https://events.example.com/listings",
        }
        defaults.update(kwargs)
        return RawCandidate(**defaults)

    return _make_candidate


@pytest.fixture
def cache(tmp_path):
    """Empty file cache in a temporary directory."""
    return FileCache(tmp_path / "cache")


@pytest.fixture
def run_log():
    """Fresh run log."""
    return RunLog(started_at=FIXED_NOW)
