#!/usr/bin/env python3
"""Command-line interface for the Charlotte Event Feed.

Commands:
  - event-feed run          : Crawl every enabled source and write the feed
  - event-feed sources      : List configured sources and their status
  - event-feed clear-cache  : Remove expired (or all) cached responses

Typical usage:
  python -m src.cli run --data-dir data
  python -m src.cli sources --sources src/configs/sources.yaml
  python -m src.cli clear-cache --all
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from datetime import timedelta
from pathlib import Path

from src.configs.settings import Settings
from src.ingestion.cache import FileCache
from src.ingestion.factory import AdapterFactory, SourceConfigError
from src.ingestion.orchestrator import FeedOrchestrator
from src.monitoring.logging import configure_logging


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="event-feed", description="Charlotte Event Feed CLI")
    sub = p.add_subparsers(dest="cmd")

    # run
    pr = sub.add_parser("run", help="Crawl sources and write the feed")
    pr.add_argument("--sources", "-s", default=None, help="Path to sources YAML")
    pr.add_argument("--data-dir", "-o", default=None, help="Feed output directory")
    pr.add_argument("--json-logs", action="store_true", help="Emit JSON logs")
    pr.add_argument("--log-level", default=None, help="Log level (default from settings)")

    # sources
    ps = sub.add_parser("sources", help="List configured sources")
    ps.add_argument("--sources", "-s", default=None, help="Path to sources YAML")

    # clear-cache
    pc = sub.add_parser("clear-cache", help="Remove cached responses")
    pc.add_argument("--all", action="store_true", help="Remove every entry, not only expired ones")

    return p.parse_args(argv)


def _settings_for(args: argparse.Namespace) -> Settings:
    overrides = {}
    if getattr(args, "sources", None):
        overrides["SOURCES_CONFIG_PATH"] = Path(args.sources)
    if getattr(args, "data_dir", None):
        overrides["DATA_DIR"] = Path(args.data_dir)
        overrides["CACHE_DIR"] = Path(args.data_dir) / "cache"
    if getattr(args, "log_level", None):
        overrides["LOG_LEVEL"] = args.log_level
    return Settings(**overrides)


def main(argv: list[str] | None = None) -> int:
    """Run the CLI with the given arguments."""
    try:
        return _main_impl(argv)
    except SourceConfigError as e:
        print(f"Error: Invalid source configuration: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def _main_impl(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    if not args.cmd:
        print("Error: Command required. Use --help for usage info.", file=sys.stderr)
        return 1

    settings = _settings_for(args)

    if args.cmd == "sources":
        factory = AdapterFactory(settings.SOURCES_CONFIG_PATH)
        print(f"{'PRIORITY':<10} {'NAME':<26} {'ADAPTER':<24} {'STATUS'}")
        print("-" * 72)
        for info in sorted(factory.list_sources(), key=lambda s: s["priority"]):
            status = "enabled" if info["enabled"] else "disabled"
            if not info["registered"]:
                status += " (unknown adapter)"
            print(f"{info['priority']:<10} {info['name']:<26} {info['adapter']:<24} {status}")
        return 0

    if args.cmd == "clear-cache":
        cache = FileCache(
            settings.CACHE_DIR, max_age=timedelta(days=settings.CACHE_MAX_AGE_DAYS)
        )
        removed = cache.clear_all() if args.all else cache.clear_expired()
        print(f"Removed {removed} cache files from {settings.CACHE_DIR}")
        return 0

    if args.cmd == "run":
        configure_logging(settings.log_level, json_logs=args.json_logs)
        result = asyncio.run(FeedOrchestrator(settings=settings).run())
        print(f"Wrote {result.count} events to {result.output_paths['latest']}")
        return 0

    print(f"Error: Unknown command: {args.cmd}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
