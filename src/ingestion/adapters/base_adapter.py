"""
Base Source Adapter.

Abstract base class defining the interface for all source adapters.
Each adapter turns one configured source into a list of RawCandidate
records; the fetching strategy (HTML page, JSON API) is up to the subclass.
"""

from __future__ import annotations

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from datetime import tzinfo
from typing import Any, Callable, Dict, Iterator, List, Optional

import httpx

from src.ingestion.cache import FileCache
from src.ingestion.normalization.date_parser import DEFAULT_TIMEZONE
from src.monitoring.run_log import RunLog
from src.schemas.event import AdapterKind, RawCandidate, SourceDescriptor

USER_AGENT = (
    "Mozilla/5.0 (compatible; CharlotteEventFeed/1.0; "
    "+https://github.com/charlotte-event-feed/charlotte-event-feed)"
)
DEFAULT_RATE_LIMIT_DELAY_S = 1.0
DEFAULT_TIMEOUT_S = 30.0


class FetchError(RuntimeError):
    """An outbound request returned a non-success response."""

    def __init__(self, url: str, status_code: int, reason: str = ""):
        self.url = url
        self.status_code = status_code
        message = f"HTTP {status_code}: {reason}" if reason else f"HTTP {status_code}"
        super().__init__(message)


class BaseSourceAdapter(ABC):
    """
    Abstract base class for source adapters.

    Provides the shared fetch machinery:
        - per-instance rate limiting between outbound requests
        - cached GETs (fetch_with_cache)
        - the failure boundary in fetch(): any exception while fetching or
          parsing is recorded once in the run log and yields []

    Subclasses must implement:
        - fetch_raw(): Retrieve the raw payload (HTML text, decoded JSON)
        - parse(): Yield RawCandidate records from that payload
    """

    kind: AdapterKind = AdapterKind.SCRAPER

    def __init__(
        self,
        source: SourceDescriptor,
        cache: FileCache,
        run_log: RunLog,
        client: Optional[httpx.AsyncClient] = None,
        rate_limit_delay: float = DEFAULT_RATE_LIMIT_DELAY_S,
        timeout: float = DEFAULT_TIMEOUT_S,
        tz: tzinfo = DEFAULT_TIMEZONE,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the adapter.

        Args:
            source: Configured source this adapter reads
            cache: Response cache
            run_log: Log for the current run
            client: Shared HTTP client; one is created (and owned) if omitted
            rate_limit_delay: Minimum seconds between consecutive requests
            timeout: Per-request timeout in seconds
            tz: Feed timezone, for dates published without an offset
            clock: Monotonic clock used for rate limiting
        """
        self.source = source
        self.cache = cache
        self.run_log = run_log
        self.rate_limit_delay = rate_limit_delay
        self.timeout = timeout
        self.tz = tz
        self.logger = logging.getLogger(f"adapter.{source.name}")
        self._client = client
        self._owns_client = client is None
        self._clock = clock
        self._last_request_at: Optional[float] = None

    @property
    def name(self) -> str:
        """Source name used in log entries and provenance."""
        return self.source.name

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers={"User-Agent": USER_AGENT},
                timeout=self.timeout,
                follow_redirects=True,
            )
        return self._client

    async def _rate_limit(self) -> None:
        """Wait until rate_limit_delay has passed since the previous request ended."""
        if self._last_request_at is None:
            return
        elapsed = self._clock() - self._last_request_at
        if elapsed < self.rate_limit_delay:
            wait = self.rate_limit_delay - elapsed
            self.logger.debug("Rate limiting: sleeping %.2fs", wait)
            await asyncio.sleep(wait)

    async def _get(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """
        Rate-limited GET.

        Raises:
            FetchError: On a non-2xx response
            httpx.HTTPError: On transport failures
        """
        await self._rate_limit()
        try:
            response = await self._get_client().get(
                url,
                params=params,
                headers={"User-Agent": USER_AGENT, **(headers or {})},
                timeout=self.timeout,
            )
        finally:
            self._last_request_at = self._clock()

        self.logger.debug("GET %s -> %d", response.url, response.status_code)
        if not response.is_success:
            raise FetchError(url, response.status_code, response.reason_phrase)
        return response

    async def fetch_with_cache(self, url: str, headers: Optional[Dict[str, str]] = None) -> str:
        """
        Fetch a URL's body, serving it from the cache when possible.

        Fresh responses are written back to the cache.
        """
        cached = self.cache.get(url)
        if cached is not None:
            self.run_log.info(self.name, f"Cache hit for {url}")
            return cached

        self.run_log.info(self.name, f"Fetching {url}")
        try:
            response = await self._get(url, headers=headers)
        except (FetchError, httpx.HTTPError) as e:
            self.run_log.error(self.name, f"Fetch failed for {url}: {e}")
            raise

        body = response.text
        self.cache.set(url, body)
        return body

    @abstractmethod
    async def fetch_raw(self) -> Any:
        """
        Retrieve the raw payload for this source.

        Returns:
            HTML text or decoded JSON; None means "nothing to parse"
        """

    @abstractmethod
    def parse(self, raw: Any) -> Iterator[RawCandidate]:
        """
        Yield candidates from the raw payload.

        Per-record problems should be logged and skipped here; anything
        raised propagates to fetch() and fails the whole source.
        """

    async def fetch(self) -> List[RawCandidate]:
        """
        Fetch and parse this source.

        Never raises: failures are recorded as a single error entry and an
        empty list is returned. Success records one entry with the item
        count.
        """
        try:
            raw = await self.fetch_raw()
            candidates = list(self.parse(raw)) if raw is not None else []
        except Exception as e:
            self.logger.debug("Fetch aborted", exc_info=True)
            self.run_log.error(
                self.name,
                f"Adapter failed: {e}",
                status="failed",
                error=str(e),
            )
            return []

        self.run_log.success(
            self.name,
            f"Fetched {len(candidates)} events",
            items_found=len(candidates),
            status="success",
        )
        return candidates

    async def close(self) -> None:
        """Close the HTTP client if this adapter created it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "BaseSourceAdapter":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
