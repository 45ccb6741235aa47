"""
Adapter registry.

Maps the `adapter` key used in the source configuration to an adapter
class. Source modules register themselves with the decorator on import.
"""

from typing import Callable, Dict, Optional, Type

from src.ingestion.adapters.base_adapter import BaseSourceAdapter

AdapterClass = Type[BaseSourceAdapter]
ADAPTER_REGISTRY: Dict[str, AdapterClass] = {}


def register_adapter(key: str) -> Callable[[AdapterClass], AdapterClass]:
    """
    Decorator to register an adapter class under a configuration key.

    Usage:
        @register_adapter("visit_charlotte")
        class VisitCharlotteAdapter(ScraperAdapter):
            profile = VISIT_CHARLOTTE
    """

    def decorator(cls: AdapterClass) -> AdapterClass:
        ADAPTER_REGISTRY[key] = cls
        return cls

    return decorator


def get_adapter_class(key: str) -> Optional[AdapterClass]:
    """Look up a registered adapter class, or None for an unknown key."""
    return ADAPTER_REGISTRY.get(key)
