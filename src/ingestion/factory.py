"""
Adapter Factory for config-driven adapter creation.

Reads the source list from YAML and creates the registered adapter for
each enabled source, in priority order.

Usage:
    from src.ingestion.factory import AdapterFactory

    factory = AdapterFactory()
    for source in factory.enabled_sources():
        adapter = factory.create_adapter(source, cache=cache, run_log=run_log)
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import ValidationError

from src.ingestion.adapters.base_adapter import BaseSourceAdapter
from src.ingestion.cache import FileCache
from src.ingestion.sources import get_adapter_class
from src.monitoring.run_log import PIPELINE_SOURCE, RunLog
from src.schemas.event import AdapterKind, SourceDescriptor

logger = logging.getLogger(__name__)

# Default config path
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "configs" / "sources.yaml"


class SourceConfigError(ValueError):
    """The source configuration file is missing or invalid."""


def load_sources(config_path: Union[str, Path]) -> List[SourceDescriptor]:
    """
    Load and validate the source list.

    Raises:
        SourceConfigError: Missing file, invalid YAML, missing `sources`
            list, or an invalid entry
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise SourceConfigError(f"Config not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SourceConfigError(f"Invalid YAML in {config_path}: {e}") from e

    entries = config.get("sources") if isinstance(config, dict) else None
    if not isinstance(entries, list):
        raise SourceConfigError(f"{config_path} must define a 'sources' list")

    sources = []
    for index, entry in enumerate(entries):
        try:
            sources.append(SourceDescriptor.model_validate(entry))
        except ValidationError as e:
            raise SourceConfigError(f"Invalid source #{index} in {config_path}: {e}") from e
    logger.debug("Loaded %d sources from %s", len(sources), config_path)
    return sources


def enabled_sources(sources: List[SourceDescriptor]) -> List[SourceDescriptor]:
    """Enabled sources in ascending priority; ties keep file order."""
    return sorted((s for s in sources if s.enabled), key=lambda s: s.priority)


class AdapterFactory:
    """
    Factory for creating source adapters from YAML configuration.

    Reads source entries from sources.yaml and creates the adapter
    registered under each entry's `adapter` key.
    """

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """
        Initialize the factory.

        Args:
            config_path: Path to sources.yaml. If not provided, uses default.
        """
        self.config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._sources: Optional[List[SourceDescriptor]] = None

    @property
    def sources(self) -> List[SourceDescriptor]:
        """Load and cache the configured sources."""
        if self._sources is None:
            self._sources = load_sources(self.config_path)
        return self._sources

    def list_sources(self) -> List[Dict[str, Any]]:
        """
        List all configured sources with their status.

        Returns:
            One dict per source: name, adapter, priority, enabled and
            whether the adapter key is registered
        """
        return [
            {
                "name": source.name,
                "adapter": source.adapter,
                "priority": source.priority,
                "enabled": source.enabled,
                "registered": get_adapter_class(source.adapter) is not None,
            }
            for source in self.sources
        ]

    def enabled_sources(self) -> List[SourceDescriptor]:
        """Enabled sources in the order they should run."""
        return enabled_sources(self.sources)

    def create_adapter(
        self,
        source: SourceDescriptor,
        *,
        cache: FileCache,
        run_log: RunLog,
        api_options: Optional[Dict[str, Any]] = None,
        **adapter_kwargs: Any,
    ) -> Optional[BaseSourceAdapter]:
        """
        Create the adapter for a source.

        Args:
            source: Configured source
            cache: Response cache shared by the run
            run_log: Log for the current run
            api_options: Extra arguments for API adapters only (city, state_code)
            **adapter_kwargs: Passed to every adapter (client, rate_limit_delay, tz, ...)

        Returns:
            Adapter instance, or None when the adapter key is unknown (a
            warning is recorded and the source is skipped)
        """
        adapter_cls = get_adapter_class(source.adapter)
        if adapter_cls is None:
            run_log.warning(PIPELINE_SOURCE, f"No adapter found for: {source.adapter}")
            return None
        if adapter_cls.kind == AdapterKind.API and api_options:
            adapter_kwargs = {**adapter_kwargs, **api_options}
        return adapter_cls(source, cache, run_log, **adapter_kwargs)

    def reload_config(self) -> None:
        """Reload configuration from disk."""
        self._sources = None
