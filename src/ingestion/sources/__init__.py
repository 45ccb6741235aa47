"""
Charlotte event sources.

Importing this package registers every source adapter in ADAPTER_REGISTRY
under the key used in the source configuration file.
"""

from . import (  # noqa: F401  (registration side effects)
    axios_charlotte,
    charlotte_on_the_cheap,
    clt_today,
    eventbrite,
    eventbrite_api,
    ticketmaster,
    ticketmaster_api,
    uptown_charlotte,
    visit_charlotte,
)
from .registry import ADAPTER_REGISTRY, get_adapter_class, register_adapter

__all__ = ["ADAPTER_REGISTRY", "get_adapter_class", "register_adapter"]
