"""
Feed output files.

Writes the ranked events as the two files the static site reads:

- ``events-<YYYY-MM-DD>.json``: the run's events as a JSON array
- ``latest.json``: ``{updated_at, count, events}``, overwritten each run
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from src.schemas.event import CanonicalEvent, format_timestamp

logger = logging.getLogger(__name__)

LATEST_FILENAME = "latest.json"


class FeedWriter:
    """Writes ranked events to the data directory."""

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)

    def dated_path(self, now: datetime) -> Path:
        return self.data_dir / f"events-{now.astimezone(timezone.utc).date().isoformat()}.json"

    @property
    def latest_path(self) -> Path:
        return self.data_dir / LATEST_FILENAME

    def write(
        self, events: List[CanonicalEvent], now: Optional[datetime] = None
    ) -> Dict[str, Path]:
        """
        Write both output files.

        Args:
            events: Ranked events, written in order
            now: Run time used for the file date and `updated_at`

        Returns:
            {"events": dated file path, "latest": latest.json path}
        """
        now = now or datetime.now(timezone.utc)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        payload = [event.to_feed_dict() for event in events]

        dated = self.dated_path(now)
        self._dump(dated, payload)
        logger.info(f"Saved {len(payload)} events to {dated}")

        latest: Dict[str, Any] = {
            "updated_at": format_timestamp(now),
            "count": len(payload),
            "events": payload,
        }
        self._dump(self.latest_path, latest)
        logger.info(f"Updated {self.latest_path}")

        return {"events": dated, "latest": self.latest_path}

    @staticmethod
    def _dump(path: Path, data: Any) -> None:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

