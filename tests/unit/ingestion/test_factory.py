"""
Unit tests for the factory module.

Tests for source loading and AdapterFactory.
"""

from pathlib import Path

import pytest
import yaml

from src.ingestion.factory import (
    DEFAULT_CONFIG_PATH,
    AdapterFactory,
    SourceConfigError,
    enabled_sources,
    load_sources,
)
from src.ingestion.sources.ticketmaster_api import TicketmasterAPIAdapter
from src.ingestion.sources.visit_charlotte import VisitCharlotteAdapter
from src.monitoring.run_log import PIPELINE_SOURCE

# =============================================================================
# TEST CONFIG FIXTURES
# =============================================================================


@pytest.fixture
def sample_config():
    """Sample source config for testing."""
    return {
        "sources": [
            {
                "name": "Visit Charlotte",
                "url": "https://www.charlottesgotalot.com/events",
                "adapter": "visit_charlotte",
                "priority": 3,
            },
            {
                "name": "Ticketmaster API",
                "url": "https://app.ticketmaster.com/discovery/v2/events.json",
                "adapter": "ticketmaster_api",
                "priority": 1,
            },
            {
                "name": "Disabled Source",
                "url": "https://disabled.example.com",
                "adapter": "visit_charlotte",
                "priority": 0,
                "enabled": False,
            },
            {
                "name": "Mystery Source",
                "url": "https://mystery.example.com",
                "adapter": "myspace",
                "priority": 3,
            },
        ]
    }


@pytest.fixture
def config_file(tmp_path, sample_config):
    """Write the sample config to a temporary file."""
    path = tmp_path / "sources.yaml"
    path.write_text(yaml.dump(sample_config), encoding="utf-8")
    return path


# =============================================================================
# TEST CLASSES
# =============================================================================


class TestLoadSources:
    """Tests for load_sources."""

    def test_load_valid_config(self, config_file):
        """Should load every entry in file order."""
        sources = load_sources(config_file)
        assert [s.name for s in sources] == [
            "Visit Charlotte",
            "Ticketmaster API",
            "Disabled Source",
            "Mystery Source",
        ]

    def test_missing_file(self, tmp_path):
        """Should raise SourceConfigError for a missing file."""
        with pytest.raises(SourceConfigError, match="Config not found"):
            load_sources(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        """Should raise SourceConfigError for malformed YAML."""
        path = tmp_path / "bad.yaml"
        path.write_text("sources: [unclosed", encoding="utf-8")
        with pytest.raises(SourceConfigError, match="Invalid YAML"):
            load_sources(path)

    @pytest.mark.parametrize("content", ["", "sources: {}", "other: []", "- a\n- b"])
    def test_missing_sources_list(self, tmp_path, content):
        """Should require a top-level sources list."""
        path = tmp_path / "sources.yaml"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(SourceConfigError, match="'sources' list"):
            load_sources(path)

    def test_invalid_entry(self, tmp_path):
        """Should name the offending entry."""
        path = tmp_path / "sources.yaml"
        path.write_text(yaml.dump({"sources": [{"name": "No URL", "adapter": "x"}]}), encoding="utf-8")
        with pytest.raises(SourceConfigError, match="Invalid source #0"):
            load_sources(path)

    def test_default_config_is_valid(self):
        """Should ship a loadable default config."""
        sources = load_sources(DEFAULT_CONFIG_PATH)
        assert len(sources) == 9


class TestEnabledSources:
    """Tests for enabled_sources."""

    def test_priority_order_and_ties(self, config_file):
        """Should drop disabled sources and keep file order on ties."""
        names = [s.name for s in enabled_sources(load_sources(config_file))]
        assert names == ["Ticketmaster API", "Visit Charlotte", "Mystery Source"]


class TestAdapterFactory:
    """Tests for AdapterFactory."""

    def test_init_uses_default_path(self):
        """Should use the packaged config when no path is given."""
        assert AdapterFactory().config_path == DEFAULT_CONFIG_PATH

    def test_sources_lazy_loaded(self, config_file):
        """Should not read the file until sources are accessed."""
        factory = AdapterFactory(config_file)
        assert factory._sources is None
        assert len(factory.sources) == 4
        assert factory._sources is not None

    def test_list_sources(self, config_file):
        """Should report registration status for every source."""
        listed = {s["name"]: s for s in AdapterFactory(config_file).list_sources()}
        assert listed["Visit Charlotte"]["registered"] is True
        assert listed["Mystery Source"]["registered"] is False
        assert listed["Disabled Source"]["enabled"] is False

    def test_reload_config(self, config_file, sample_config):
        """Should re-read the file after reload_config."""
        factory = AdapterFactory(config_file)
        assert len(factory.sources) == 4

        sample_config["sources"] = sample_config["sources"][:1]
        Path(config_file).write_text(yaml.dump(sample_config), encoding="utf-8")
        factory.reload_config()
        assert len(factory.sources) == 1

    def test_create_scraper_adapter(self, config_file, cache, run_log):
        """Should build the registered scraper adapter."""
        factory = AdapterFactory(config_file)
        source = factory.sources[0]
        adapter = factory.create_adapter(
            source,
            cache=cache,
            run_log=run_log,
            api_options={"city": "Raleigh"},
            rate_limit_delay=0.0,
        )
        assert isinstance(adapter, VisitCharlotteAdapter)
        assert adapter.source is source
        assert adapter.rate_limit_delay == 0.0

    def test_create_api_adapter_with_options(self, config_file, cache, run_log):
        """Should pass API-only options to API adapters."""
        factory = AdapterFactory(config_file)
        adapter = factory.create_adapter(
            factory.sources[1],
            cache=cache,
            run_log=run_log,
            api_options={"city": "Raleigh", "state_code": "NC"},
        )
        assert isinstance(adapter, TicketmasterAPIAdapter)
        assert adapter.city == "Raleigh"

    def test_unknown_adapter_key(self, config_file, cache, run_log):
        """Should warn and return None for an unregistered key."""
        factory = AdapterFactory(config_file)
        assert factory.create_adapter(factory.sources[3], cache=cache, run_log=run_log) is None

        warnings = run_log.entries_for(PIPELINE_SOURCE, "warning")
        assert [w.message for w in warnings] == ["No adapter found for: myspace"]
