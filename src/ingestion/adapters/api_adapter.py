"""
API Source Adapter.

Adapter for JSON search APIs. A subclass names its credential, builds one
search request and maps each record of the response envelope to a
RawCandidate.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Callable, Dict, Iterable, Iterator, Optional

from src.configs.settings import read_credential
from src.schemas.event import AdapterKind, RawCandidate

from .base_adapter import BaseSourceAdapter

PAGE_SIZE = 100


class APIAdapter(BaseSourceAdapter):
    """
    Adapter for API-based data sources.

    Provides:
    - Credential lookup at fetch time (missing key -> one warning, no events)
    - A single rate-limited search request
    - Record-level fault isolation while mapping the response

    Subclasses implement:
        - build_request(api_key): (url, params, headers) for the search call
        - iter_records(payload): records inside the response envelope
        - parse_record(record): one record -> RawCandidate
    """

    kind = AdapterKind.API
    credential_name: str = ""

    def __init__(
        self,
        *args,
        credential_reader: Callable[[str], Optional[str]] = read_credential,
        city: str = "Charlotte",
        state_code: str = "NC",
        **kwargs,
    ):
        """
        Initialize the API adapter.

        Args:
            credential_reader: Resolves a credential name to its value
            city: Metro area searched
            state_code: State of the metro area
            *args, **kwargs: Passed to BaseSourceAdapter
        """
        super().__init__(*args, **kwargs)
        self.credential_reader = credential_reader
        self.city = city
        self.state_code = state_code

    async def fetch_raw(self) -> Optional[Any]:
        """
        Run the search request.

        Returns:
            Decoded JSON payload, or None when no credential is configured

        Raises:
            FetchError / httpx.HTTPError / ValueError on transport, status or
            JSON decoding failures
        """
        api_key = self.credential_reader(self.credential_name)
        if not api_key:
            self.run_log.warning(self.name, "No API key found - skipping")
            return None

        url, params, headers = self.build_request(api_key)
        self.run_log.info(self.name, f"Querying {url}")
        response = await self._get(
            url,
            params=params,
            headers={"Accept": "application/json", **headers},
        )
        return response.json()

    def parse(self, raw: Any) -> Iterator[RawCandidate]:
        """Map envelope records to candidates, skipping malformed ones."""
        records = list(self.iter_records(raw))
        if not records:
            self.run_log.info(self.name, "No events found in API response")
            return

        for record in records:
            try:
                yield self.parse_record(record)
            except Exception as e:
                self.logger.debug("Record skipped", exc_info=True)
                self.run_log.warning(self.name, f"Failed to parse event: {e}")

    @abstractmethod
    def build_request(self, api_key: str) -> tuple[str, Dict[str, Any], Dict[str, str]]:
        """Return (url, query params, extra headers) for the search call."""

    @abstractmethod
    def iter_records(self, payload: Any) -> Iterable[Any]:
        """
        Return the records inside the response envelope.

        Raise for a malformed envelope; return an empty iterable when the
        envelope is valid but holds no events.
        """

    @abstractmethod
    def parse_record(self, record: Any) -> RawCandidate:
        """Map one API record to a RawCandidate."""
