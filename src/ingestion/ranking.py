"""
Event Filter and Ranker.

Selects the events worth publishing and orders them:

- drops dated events in the past or beyond the feed window;
- drops family/kids events (the feed targets adult nightlife and dining);
- scores the rest on confidence, category, recency and weekend timing.

Undated events are kept but penalized, so they sink below dated ones.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, tzinfo
from typing import Dict, List, Optional

from src.ingestion.normalization.date_parser import DEFAULT_TIMEZONE
from src.monitoring.run_log import PIPELINE_SOURCE, RunLog
from src.schemas.event import CanonicalEvent
from src.schemas.event import EventCategory as C

logger = logging.getLogger(__name__)

CATEGORY_WEIGHTS: Dict[str, float] = {
    C.NIGHTLIFE.value: 20,
    C.CONCERT.value: 15,
    C.RESTAURANT.value: 15,
    C.BAR.value: 15,
    C.SPORTS.value: 15,
    C.ENTERTAINMENT.value: 10,
    C.OPENING.value: 10,
    C.SPECIAL.value: 5,
    C.ACTIVE.value: 5,
}

FAMILY_PATTERN = re.compile(r"kids|children|family|toddler|baby", re.IGNORECASE)

CONFIDENCE_WEIGHT = 30
SOON_DAYS, SOON_BONUS = 3, 15
THIS_WEEK_DAYS, THIS_WEEK_BONUS = 7, 10
WEEKEND_BONUS = 10
UNDATED_PENALTY = -20
WEEKEND_DAYS = (4, 5)  # Friday, Saturday
DEFAULT_WINDOW_DAYS = 14


@dataclass
class EventRanker:
    """
    Filter/rank stage for one run.

    Attributes:
        now: Reference time for the date window and recency
        tz: Local timezone for the weekend bonus
        window_days: Events further ahead than this are dropped
        category_weights: Label -> score contribution (unknown labels add 0)
    """

    now: datetime
    tz: tzinfo = DEFAULT_TIMEZONE
    window_days: int = DEFAULT_WINDOW_DAYS
    category_weights: Dict[str, float] = field(default_factory=lambda: dict(CATEGORY_WEIGHTS))

    def is_eligible(self, event: CanonicalEvent) -> bool:
        """Whether an event survives the date-window and family filters."""
        start = event.start_datetime
        if start is not None:
            if start < self.now or start > self.now + timedelta(days=self.window_days):
                return False

        return not FAMILY_PATTERN.search(f"{event.title} {event.description}")

    def score(self, event: CanonicalEvent) -> float:
        """Ranking score; higher is better."""
        score = event.confidence * CONFIDENCE_WEIGHT
        score += sum(self.category_weights.get(label, 0) for label in event.category)

        start = event.start_datetime
        if start is None:
            return score + UNDATED_PENALTY

        days_until = (start - self.now).total_seconds() / 86400
        if days_until <= SOON_DAYS:
            score += SOON_BONUS
        elif days_until <= THIS_WEEK_DAYS:
            score += THIS_WEEK_BONUS

        if start.astimezone(self.tz).weekday() in WEEKEND_DAYS:
            score += WEEKEND_BONUS
        return score

    def filter(self, events: List[CanonicalEvent]) -> List[CanonicalEvent]:
        return [event for event in events if self.is_eligible(event)]

    def rank(self, events: List[CanonicalEvent]) -> List[CanonicalEvent]:
        """
        Score and sort events, best first.

        The sort is stable: equal scores keep their input order. Returned
        events carry `rank_score`.
        """
        scored = [event.model_copy(update={"rank_score": self.score(event)}) for event in events]
        return sorted(scored, key=lambda event: event.rank_score, reverse=True)

    def filter_and_rank(
        self,
        events: List[CanonicalEvent],
        run_log: Optional[RunLog] = None,
    ) -> List[CanonicalEvent]:
        """Filter, then rank. Reports undated events to the run log."""
        undated = sum(1 for event in events if event.start_datetime is None)
        if undated and run_log is not None:
            run_log.warning(PIPELINE_SOURCE, f"{undated} events have no start_datetime")

        eligible = self.filter(events)
        logger.info(f"Kept {len(eligible)} of {len(events)} events after filtering")
        return self.rank(eligible)


def filter_and_rank(
    events: List[CanonicalEvent],
    now: datetime,
    tz: tzinfo = DEFAULT_TIMEZONE,
    window_days: int = DEFAULT_WINDOW_DAYS,
    run_log: Optional[RunLog] = None,
) -> List[CanonicalEvent]:
    """Filter and rank with the default weights."""
    return EventRanker(now=now, tz=tz, window_days=window_days).filter_and_rank(
        events, run_log=run_log
    )
