"""
Unit tests for the run_log and logging modules.
"""

import json
import logging
from unittest.mock import patch

import pytest

from src.monitoring import run_log as run_log_module
from src.monitoring.logging import JsonFormatter, TextFormatter, configure_logging
from src.monitoring.run_log import PIPELINE_SOURCE, RunLog

# =============================================================================
# TEST CLASSES
# =============================================================================


class TestRunLog:
    """Tests for RunLog recording and summaries."""

    def test_levels(self, run_log):
        """Should record entries at each level."""
        run_log.info("A", "starting")
        run_log.warning("A", "odd")
        run_log.error("B", "broken")
        run_log.success("A", "done", items_found=3)

        assert [e.level for e in run_log.entries] == ["info", "warning", "error", "success"]
        assert run_log.count("warning") == 1

    def test_unknown_level(self, run_log):
        """Should reject levels outside the vocabulary."""
        with pytest.raises(ValueError):
            run_log.log("debug", "A", "noise")

    def test_summary(self, run_log):
        """Should aggregate events, errors and the last status per source."""
        run_log.info(PIPELINE_SOURCE, "Starting")
        run_log.success("Visit Charlotte", "Fetched 4 events", items_found=4, status="success")
        run_log.error("Axios Charlotte", "Fetch failed for https://www.axios.com/local/charlotte: HTTP 500")
        run_log.error("Axios Charlotte", "Adapter failed", status="failed", error="HTTP 500")
        run_log.warning("Eventbrite API", "No API key found - skipping")

        summary = run_log.summary()
        assert summary["total_events"] == 4
        assert summary["errors"] == 2
        assert summary["warnings"] == 1
        assert summary["sources"]["Visit Charlotte"] == {
            "events": 4,
            "errors": 0,
            "status": "success",
        }
        assert summary["sources"]["Axios Charlotte"] == {"events": 0, "errors": 2, "status": "failed"}
        assert summary["sources"]["Eventbrite API"]["status"] == "unknown"

    def test_entries_for(self, run_log):
        """Should filter entries by source and level."""
        run_log.info("A", "one")
        run_log.warning("A", "two")
        run_log.info("B", "three")
        assert [e.message for e in run_log.entries_for("A")] == ["one", "two"]
        assert [e.message for e in run_log.entries_for("A", "warning")] == ["two"]

    def test_mirrors_to_stdlib(self, run_log):
        """Should forward entries to the module logger."""
        with patch.object(run_log_module.logger, "log") as mock_log:
            run_log.warning("Uptown Charlotte", "Failed to parse event: boom")

        level, fmt, source, message = mock_log.call_args.args
        assert level == logging.WARNING
        assert (source, message) == ("Uptown Charlotte", "Failed to parse event: boom")
        assert mock_log.call_args.kwargs["extra"]["source"] == "Uptown Charlotte"

    def test_save(self, run_log, tmp_path):
        """Should write the dated log file with entries and summary."""
        run_log.success("A", "done", items_found=2, status="success")
        path = run_log.save(tmp_path)

        assert path.name.startswith("scrape-log-")
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["total_logs"] == 1
        assert data["logs"][0]["items_found"] == 2
        assert data["summary"]["total_events"] == 2
        assert data["duration_ms"] >= 0


class TestLoggingSetup:
    """Tests for configure_logging and the formatters."""

    def _record(self, **extra):
        record = logging.LogRecord("src.test", logging.INFO, __file__, 1, "hello %s", ("x",), None)
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_json_formatter(self):
        """Should render source and payload extras."""
        line = JsonFormatter().format(self._record(source="Crawler", payload={"n": 1}))
        data = json.loads(line)
        assert data["msg"] == "hello x"
        assert data["source"] == "Crawler"
        assert data["payload"] == {"n": 1}

    def test_text_formatter(self):
        """Should include the source in brackets."""
        line = TextFormatter().format(self._record(source="Crawler"))
        assert line == "INFO src.test [Crawler] hello x"

    @pytest.fixture
    def restore_logging(self):
        yield
        for name in ("src", "adapter"):
            logger = logging.getLogger(name)
            for handler in list(logger.handlers):
                logger.removeHandler(handler)
            logger.propagate = True
            logger.setLevel(logging.NOTSET)

    def test_configure_replaces_handlers(self, restore_logging):
        """Should leave exactly one handler after repeated setup."""
        configure_logging("DEBUG")
        logger = configure_logging("WARNING", json_logs=True)

        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JsonFormatter)
        assert logger.level == logging.WARNING
        assert len(logging.getLogger("adapter").handlers) == 1
