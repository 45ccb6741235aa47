"""
Ingestion Layer for the Charlotte Event Feed.

This package turns configured sources into the published feed.

Key Components:
- Source adapters: fetch listings (HTML pages, JSON APIs) as raw candidates
- Normalization: candidates -> canonical events
- Deduplication: one event per (title, venue, day)
- Ranking: date window, family filter and scoring
- FeedOrchestrator: runs the stages in order for one crawl
"""
