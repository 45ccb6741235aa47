"""Run logging and log formatting for the event crawler."""

from .logging import JsonFormatter, TextFormatter, configure_logging
from .run_log import PIPELINE_SOURCE, LogEntry, RunLog

__all__ = [
    "JsonFormatter",
    "TextFormatter",
    "configure_logging",
    "LogEntry",
    "PIPELINE_SOURCE",
    "RunLog",
]
