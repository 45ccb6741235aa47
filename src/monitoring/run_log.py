"""
Run Log.

Run-scoped accumulator for crawl log entries. Every entry is mirrored to
stdlib logging and kept in memory so the whole run (plus a per-source
summary) can be persisted as one dated JSON file at the end.

A RunLog is created per run and passed explicitly to the stages that need
it; there is no module-level instance.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

# Source name for entries written by the pipeline itself
PIPELINE_SOURCE = "Crawler"

# RunLog level -> stdlib level
_STDLIB_LEVELS = {
    "info": logging.INFO,
    "success": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class LogEntry:
    """A single run log entry."""

    timestamp: datetime
    level: str
    source: str
    message: str
    meta: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Flatten into the persisted shape (meta keys at top level)."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "level": self.level,
            "source": self.source,
            "message": self.message,
            **self.meta,
        }


class RunLog:
    """
    In-memory log for one crawl run.

    Levels are ``info``, ``warning``, ``error`` and ``success``. Entries
    may carry arbitrary metadata; ``items_found`` and ``status`` are used
    by :meth:`summary`.
    """

    def __init__(self, started_at: Optional[datetime] = None):
        self.started_at = started_at or _utc_now()
        self.entries: List[LogEntry] = []

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------

    def log(self, level: str, source: str, message: str, **meta: Any) -> LogEntry:
        """Record an entry and mirror it to stdlib logging."""
        if level not in _STDLIB_LEVELS:
            raise ValueError(f"Unknown log level: {level}")

        entry = LogEntry(
            timestamp=_utc_now(),
            level=level,
            source=source,
            message=message,
            meta=dict(meta),
        )
        self.entries.append(entry)
        logger.log(
            _STDLIB_LEVELS[level],
            "%s: %s",
            source,
            message,
            extra={"source": source, "payload": entry.meta},
        )
        return entry

    def info(self, source: str, message: str, **meta: Any) -> LogEntry:
        return self.log("info", source, message, **meta)

    def warning(self, source: str, message: str, **meta: Any) -> LogEntry:
        return self.log("warning", source, message, **meta)

    def error(self, source: str, message: str, **meta: Any) -> LogEntry:
        return self.log("error", source, message, **meta)

    def success(self, source: str, message: str, **meta: Any) -> LogEntry:
        return self.log("success", source, message, **meta)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def entries_for(self, source: str, level: Optional[str] = None) -> List[LogEntry]:
        """Entries recorded for a source, optionally filtered by level."""
        return [
            e
            for e in self.entries
            if e.source == source and (level is None or e.level == level)
        ]

    def count(self, level: str) -> int:
        """Number of entries at a level."""
        return sum(1 for e in self.entries if e.level == level)

    def summary(self) -> Dict[str, Any]:
        """
        Aggregate the run's entries.

        Returns:
            Dict with total_events, errors, warnings and per-source
            {events, errors, status}.
        """
        summary: Dict[str, Any] = {
            "total_events": 0,
            "sources": {},
            "errors": 0,
            "warnings": 0,
        }

        for entry in self.entries:
            if entry.level == "error":
                summary["errors"] += 1
            elif entry.level == "warning":
                summary["warnings"] += 1

            items_found = entry.meta.get("items_found") or 0
            summary["total_events"] += items_found

            source = summary["sources"].setdefault(
                entry.source, {"events": 0, "errors": 0, "status": "unknown"}
            )
            source["events"] += items_found
            if entry.meta.get("status"):
                source["status"] = entry.meta["status"]
            if entry.level == "error":
                source["errors"] += 1

        return summary

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def to_dict(self, ended_at: Optional[datetime] = None) -> Dict[str, Any]:
        ended_at = ended_at or _utc_now()
        return {
            "scrape_start": self.started_at.isoformat(),
            "scrape_end": ended_at.isoformat(),
            "duration_ms": int((ended_at - self.started_at).total_seconds() * 1000),
            "total_logs": len(self.entries),
            "logs": [e.to_dict() for e in self.entries],
            "summary": self.summary(),
        }

    def save(self, output_dir: Path) -> Path:
        """
        Write the run log to ``scrape-log-<YYYY-MM-DD>.json`` in output_dir.

        Returns:
            Path of the written file
        """
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        ended_at = _utc_now()
        path = output_dir / f"scrape-log-{ended_at.date().isoformat()}.json"

        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(ended_at), f, indent=2, ensure_ascii=False, default=str)

        logger.info(f"Run log saved to {path}")
        return path
