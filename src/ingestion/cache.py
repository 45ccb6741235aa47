"""
File Cache.

Simple file-based cache for HTTP response bodies, keyed by URL.

Each entry is one JSON file named ``md5(url).json`` holding
``{url, timestamp, data}``. Entries expire after a fixed age: at read time
the stored timestamp is checked; the sweep uses file modification time.

Not safe for concurrent writers; one crawl runs at a time.
"""

import hashlib
import json
import logging
import time
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_MAX_AGE = timedelta(days=7)


class FileCache:
    """URL-keyed response cache persisted as one file per entry."""

    def __init__(self, cache_dir: Path, max_age: timedelta = DEFAULT_MAX_AGE):
        """
        Initialize the cache.

        Args:
            cache_dir: Directory holding cache files (created if missing)
            max_age: Age after which an entry is considered expired
        """
        self.cache_dir = Path(cache_dir)
        self.max_age = max_age
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def cache_key(url: str) -> str:
        """Hash a URL into a cache file stem."""
        return hashlib.md5(url.encode("utf-8")).hexdigest()

    def path_for(self, url: str) -> Path:
        return self.cache_dir / f"{self.cache_key(url)}.json"

    def get(self, url: str) -> Optional[str]:
        """
        Return the cached body for a URL, or None if absent or expired.

        Expired entries are deleted on read. Unreadable entries are treated
        as misses.
        """
        path = self.path_for(url)
        if not path.exists():
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                cached = json.load(f)
            written_at = datetime.fromisoformat(cached["timestamp"])
            if written_at.tzinfo is None:
                written_at = written_at.replace(tzinfo=timezone.utc)

            if datetime.now(timezone.utc) - written_at > self.max_age:
                path.unlink(missing_ok=True)
                return None

            return cached["data"]
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning(f"Cache read error for {url}: {e}")
            return None

    def set(self, url: str, data: str) -> None:
        """Store a response body. Write errors are logged, not raised."""
        entry = {
            "url": url,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "data": data,
        }
        try:
            with open(self.path_for(url), "w", encoding="utf-8") as f:
                json.dump(entry, f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.warning(f"Cache write error for {url}: {e}")

    def clear_expired(self) -> int:
        """
        Delete cache files whose modification time is older than max_age.

        Returns:
            Number of files removed
        """
        cutoff = time.time() - self.max_age.total_seconds()
        cleared = 0

        for path in self.cache_dir.glob("*.json"):
            if path.stat().st_mtime < cutoff:
                path.unlink(missing_ok=True)
                cleared += 1

        if cleared:
            logger.info(f"Cleared {cleared} expired cache files")
        return cleared

    def clear_all(self) -> int:
        """Delete every cache file. Returns the number removed."""
        cleared = 0
        for path in self.cache_dir.glob("*.json"):
            path.unlink(missing_ok=True)
            cleared += 1
        return cleared
