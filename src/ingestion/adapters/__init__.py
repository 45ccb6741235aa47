"""
Source adapters.

BaseSourceAdapter holds the shared fetch machinery (rate limiting, cache,
failure boundary); ScraperAdapter and APIAdapter are the two families that
concrete sources build on.
"""

from .api_adapter import PAGE_SIZE, APIAdapter
from .base_adapter import USER_AGENT, BaseSourceAdapter, FetchError
from .scraper_adapter import METRO_NAME, ScraperAdapter, ScraperProfile

__all__ = [
    "APIAdapter",
    "BaseSourceAdapter",
    "FetchError",
    "METRO_NAME",
    "PAGE_SIZE",
    "ScraperAdapter",
    "ScraperProfile",
    "USER_AGENT",
]
