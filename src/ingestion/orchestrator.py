"""
Feed Orchestrator.

Coordinates one crawl run end to end:

    load sources -> sweep cache -> fetch each enabled source (sequentially,
    in priority order) -> normalize -> dedupe -> filter/rank -> write feed

The run log is saved even when the run fails.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone, tzinfo
from pathlib import Path
from typing import Dict, List, Optional, Tuple
from zoneinfo import ZoneInfo

import httpx

from src.configs.settings import Settings, get_settings
from src.ingestion.adapters.base_adapter import USER_AGENT
from src.ingestion.cache import FileCache
from src.ingestion.deduplication import EventDeduplicator, MergingDeduplicator
from src.ingestion.factory import AdapterFactory
from src.ingestion.normalization.normalizer import normalize_all
from src.ingestion.persist import FeedWriter
from src.ingestion.ranking import EventRanker
from src.monitoring.run_log import PIPELINE_SOURCE, RunLog
from src.schemas.event import CanonicalEvent, RawCandidate, SourceDescriptor

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class RunContext:
    """State shared by every stage of one run."""

    run_log: RunLog
    tz: tzinfo
    started_at: datetime = field(default_factory=_utc_now)
    run_id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])


@dataclass
class RunResult:
    """Outcome of a completed run."""

    run_id: str
    events: List[CanonicalEvent]
    raw_count: int
    normalized_count: int
    deduplicated_count: int
    output_paths: Dict[str, Path] = field(default_factory=dict)
    log_path: Optional[Path] = None

    @property
    def count(self) -> int:
        return len(self.events)


class FeedOrchestrator:
    """
    Runs the crawl pipeline.

    Responsibilities:
    - Create adapters for enabled sources from the source configuration
    - Fetch sources one at a time, isolating failures per source
    - Run normalization, deduplication and ranking
    - Write the feed files and the run log
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        factory: Optional[AdapterFactory] = None,
        cache: Optional[FileCache] = None,
        deduplicator: Optional[EventDeduplicator] = None,
        writer: Optional[FeedWriter] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the orchestrator; collaborators default from settings."""
        self.settings = settings or get_settings()
        self.factory = factory or AdapterFactory(self.settings.SOURCES_CONFIG_PATH)
        self.cache = cache or FileCache(
            self.settings.CACHE_DIR,
            max_age=timedelta(days=self.settings.CACHE_MAX_AGE_DAYS),
        )
        self.deduplicator = deduplicator or MergingDeduplicator()
        self.writer = writer or FeedWriter(self.settings.DATA_DIR)
        self.client = client

    def new_context(self, now: Optional[datetime] = None) -> RunContext:
        started_at = now or _utc_now()
        return RunContext(
            run_log=RunLog(started_at=started_at),
            tz=ZoneInfo(self.settings.TIMEZONE),
            started_at=started_at,
        )

    # ========================================================================
    # STAGES
    # ========================================================================

    async def fetch_source(
        self,
        source: SourceDescriptor,
        ctx: RunContext,
        client: httpx.AsyncClient,
    ) -> List[RawCandidate]:
        """
        Fetch one source. Never raises: failures are logged and yield [].
        """
        ctx.run_log.info(PIPELINE_SOURCE, f"Fetching from: {source.name}")
        try:
            adapter = self.factory.create_adapter(
                source,
                cache=self.cache,
                run_log=ctx.run_log,
                api_options={
                    "city": self.settings.CITY,
                    "state_code": self.settings.STATE_CODE,
                },
                client=client,
                rate_limit_delay=self.settings.RATE_LIMIT_DELAY_S,
                timeout=self.settings.REQUEST_TIMEOUT_S,
                tz=ctx.tz,
            )
            if adapter is None:
                return []
            return await adapter.fetch()
        except Exception as e:
            ctx.run_log.error(PIPELINE_SOURCE, f"Failed to fetch from {source.name}: {e}")
            return []

    async def fetch_all(
        self, sources: List[SourceDescriptor], ctx: RunContext
    ) -> List[Tuple[RawCandidate, SourceDescriptor]]:
        """Fetch sources sequentially, keeping each candidate's source."""
        collected: List[Tuple[RawCandidate, SourceDescriptor]] = []
        owns_client = self.client is None
        client = self.client or httpx.AsyncClient(
            headers={"User-Agent": USER_AGENT},
            timeout=self.settings.REQUEST_TIMEOUT_S,
            follow_redirects=True,
        )
        try:
            for source in sources:
                for candidate in await self.fetch_source(source, ctx, client):
                    collected.append((candidate, source))
        finally:
            if owns_client:
                await client.aclose()
        return collected

    def normalize_candidates(
        self,
        collected: List[Tuple[RawCandidate, SourceDescriptor]],
        ctx: RunContext,
    ) -> List[CanonicalEvent]:
        ctx.run_log.info(PIPELINE_SOURCE, f"Normalizing {len(collected)} raw events...")
        return normalize_all(collected, scraped_at=ctx.started_at, tz=ctx.tz)

    # ========================================================================
    # EXECUTION
    # ========================================================================

    async def run(self, now: Optional[datetime] = None) -> RunResult:
        """
        Execute one full crawl.

        Raises:
            SourceConfigError: When the source configuration is unusable.
                The run log is still written.
        """
        ctx = self.new_context(now)
        run_log = ctx.run_log
        run_log.info(
            PIPELINE_SOURCE,
            f"Starting Charlotte event crawl (run {ctx.run_id})",
            env=self.settings.ENV,
        )

        try:
            for source in self.factory.sources:
                if not source.enabled:
                    run_log.info(PIPELINE_SOURCE, f"Skipping disabled source: {source.name}")
            sources = self.factory.enabled_sources()

            self.cache.clear_expired()

            collected = await self.fetch_all(sources, ctx)
            normalized = self.normalize_candidates(collected, ctx)

            run_log.info(PIPELINE_SOURCE, "Deduplicating events...")
            deduplicated = self.deduplicator.deduplicate(normalized)

            run_log.info(PIPELINE_SOURCE, f"Ranking and filtering {len(deduplicated)} events...")
            ranker = EventRanker(
                now=ctx.started_at,
                tz=ctx.tz,
                window_days=self.settings.FEED_WINDOW_DAYS,
            )
            ranked = ranker.filter_and_rank(deduplicated, run_log=run_log)

            output_paths = self.writer.write(ranked, now=ctx.started_at)
            run_log.success(PIPELINE_SOURCE, f"Crawl complete! Found {len(ranked)} events")
        except Exception as e:
            run_log.error(PIPELINE_SOURCE, f"Crawl failed: {e}")
            raise
        finally:
            log_path = run_log.save(self.settings.DATA_DIR)

        logger.info(
            "Run %s: %d raw, %d normalized, %d deduplicated, %d published",
            ctx.run_id,
            len(collected),
            len(normalized),
            len(deduplicated),
            len(ranked),
        )
        return RunResult(
            run_id=ctx.run_id,
            events=ranked,
            raw_count=len(collected),
            normalized_count=len(normalized),
            deduplicated_count=len(deduplicated),
            output_paths=output_paths,
            log_path=log_path,
        )
