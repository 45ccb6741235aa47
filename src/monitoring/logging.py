"""Console logging setup with optional JSON output.

Records may carry `source` and `payload` extras (set by RunLog); both
formatters render them when present.
"""

from __future__ import annotations

import json
import logging
import sys
import time

ROOT_LOGGER_NAME = "src"

# ---------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------


class JsonFormatter(logging.Formatter):
    """Format log records as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        """Render one record as a JSON line."""
        base = {
            "ts": time.time(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        source = getattr(record, "source", None)
        if source:
            base["source"] = source

        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)

        # allow structured payload
        payload = getattr(record, "payload", None)
        if isinstance(payload, dict) and payload:
            base["payload"] = payload

        return json.dumps(base, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """Format log records as human-readable text."""

    def format(self, record: logging.LogRecord) -> str:
        """Render one record as a single text line."""
        parts = [record.levelname, record.name]

        source = getattr(record, "source", None)
        if source:
            parts.append(f"[{source}]")

        parts.append(record.getMessage())
        s = " ".join(parts)

        if record.exc_info:
            s += "\n" + self.formatException(record.exc_info)

        return s


# ---------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------


def configure_logging(level: str = "INFO", *, json_logs: bool = False) -> logging.Logger:
    """
    Install a console handler on the package logger.

    Safe to call repeatedly; existing handlers are replaced.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False

    for h in list(logger.handlers):
        logger.removeHandler(h)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logger.level)
    handler.setFormatter(JsonFormatter() if json_logs else TextFormatter())
    logger.addHandler(handler)

    # adapter.<source> loggers live outside the package namespace
    adapter_logger = logging.getLogger("adapter")
    adapter_logger.setLevel(logger.level)
    adapter_logger.propagate = False
    for h in list(adapter_logger.handlers):
        adapter_logger.removeHandler(h)
    adapter_logger.addHandler(handler)

    return logger
