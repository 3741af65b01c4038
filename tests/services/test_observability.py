"""Structured Logging: record context in both formats, pubkey shortening, idempotent setup."""

import json
import logging

from nostrcount.infrastructure.observability import (
    ContextTextFormatter, JSONFormatter, setup_logging, short_pubkey,
)


ALICE = "a" * 64


def _log_record(**extra) -> logging.LogRecord:
    return logging.makeLogRecord({
        "name": "nostrcount.test", "levelname": "INFO", "levelno": logging.INFO,
        "msg": "Counter published", **extra,
    })


def test_short_pubkey():
    assert short_pubkey(ALICE) == "aaaaaaaa..."
    assert short_pubkey("abc") == "abc"


def test_json_formatter_surfaces_record_context():
    line = JSONFormatter().format(_log_record(record_id="r1", pubkey=ALICE, kind=30078))
    log = json.loads(line)
    assert log["message"] == "Counter published"
    assert log["record_id"] == "r1"
    assert log["kind"] == 30078
    assert log["pubkey"] == "aaaaaaaa..."
    assert "counter_count" not in log


def test_text_formatter_appends_context_pairs():
    line = ContextTextFormatter().format(_log_record(record_id="r1", counter_count=3))
    assert line.endswith("Counter published [record_id=r1 counter_count=3]")


def test_text_formatter_without_context_is_plain():
    assert ContextTextFormatter().format(_log_record()).endswith("- Counter published")


def test_setup_logging_replaces_its_own_handler():
    before = list(logging.root.handlers)
    level = logging.root.level
    try:
        first = setup_logging("DEBUG", "json")
        second = setup_logging("WARNING", "text")
        assert first not in logging.root.handlers
        assert second in logging.root.handlers
        assert isinstance(second.formatter, ContextTextFormatter)
        assert logging.root.level == logging.WARNING
    finally:
        for handler in list(logging.root.handlers):
            if handler not in before:
                logging.root.removeHandler(handler)
        logging.root.setLevel(level)
