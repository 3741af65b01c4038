"""Structured Logging: record-aware log formatting for the counter service.

Invariants:
    - Every line carries timestamp, level, logger name and message
    - Record context passed via `extra` (record_id, kind, pubkey, counter_count,
      error_code, reason, path) appears in BOTH formats; json as keys, text as key=value
    - Author pubkeys are shortened to their first 8 hex chars in logs
    - setup_logging is idempotent: calling it again replaces its handler, never stacks one
"""

import json
import logging
from datetime import datetime, timezone


CONTEXT_FIELDS: tuple[str, ...] = (
    "record_id", "kind", "pubkey", "counter_count",
    "error_code", "reason", "path",
)

PUBKEY_PREFIX = 8


def short_pubkey(pubkey: str) -> str:
    if len(pubkey) <= PUBKEY_PREFIX:
        return pubkey
    return pubkey[:PUBKEY_PREFIX] + "..."


def record_context(record: logging.LogRecord) -> dict:
    """Context fields set on a log record, pubkey shortened."""
    context = {}
    for key in CONTEXT_FIELDS:
        value = record.__dict__.get(key)
        if value is None:
            continue
        if key == "pubkey" and isinstance(value, str):
            value = short_pubkey(value)
        context[key] = value
    return context


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **record_context(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class ContextTextFormatter(logging.Formatter):
    """Human-readable lines for development, record context appended as key=value."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s - %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = record_context(record)
        if not context:
            return line
        pairs = " ".join(f"{k}={v}" for k, v in context.items())
        first, newline, rest = line.partition("\n")
        return f"{first} [{pairs}]{newline}{rest}"


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the nostrcount handler on the root logger, replacing a previous one."""
    for existing in list(logging.root.handlers):
        if getattr(existing, "nostrcount", False):
            logging.root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.nostrcount = True
    handler.setFormatter(JSONFormatter() if fmt == "json" else ContextTextFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
