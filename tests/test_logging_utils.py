"""Tests for console/file logging setup and watch events."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from digest_watch.config import LoggingConfig
from digest_watch.logging_utils import get_logger, setup_logging, watch_event


@pytest.fixture
def file_logger(tmp_path: Path):
    cfg = LoggingConfig(level="DEBUG", console=False, file=True, filename="run.jsonl")
    logger = setup_logging(cfg, tmp_path)
    yield tmp_path / "run.jsonl"
    for handler in logger.handlers:
        handler.close()
    logger.handlers = []


def _records(path: Path) -> list[dict]:
    for handler in logging.getLogger("digest_watch").handlers:
        handler.flush()
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


def test_watch_event_keeps_fields_as_keys(file_logger: Path):
    watch_event(get_logger("poller"), "new_digest", digest_id=42)

    record = _records(file_logger)[-1]
    assert record["event"] == "new_digest"
    assert record["digest_id"] == 42
    assert record["logger"] == "digest_watch.poller"
    assert record["level"] == "INFO"
    assert "message" not in record


def test_watch_event_drops_none_fields(file_logger: Path):
    watch_event(get_logger("unread"), "unread_count_changed", logging.DEBUG, count=3, previous=None)

    record = _records(file_logger)[-1]
    assert record["level"] == "DEBUG"
    assert record["count"] == 3
    assert "previous" not in record


def test_plain_records_carry_message(file_logger: Path):
    get_logger("cli").warning("config %s not found", "watch.yaml")

    record = _records(file_logger)[-1]
    assert record["message"] == "config watch.yaml not found"
    assert "event" not in record


def test_file_output_needs_log_dir(tmp_path: Path):
    logger = setup_logging(LoggingConfig(console=False, file=True), None)
    assert logger.handlers == []
    assert list(tmp_path.iterdir()) == []


def test_level_below_threshold_is_not_written(tmp_path: Path):
    cfg = LoggingConfig(level="WARNING", console=False, file=True, filename="quiet.jsonl")
    logger = setup_logging(cfg, tmp_path)

    watch_event(get_logger("poller"), "digest_check_failed", logging.DEBUG, error="ValueError: boom")
    watch_event(get_logger("service"), "test_digest_failed", logging.WARNING, error="offline")
    for handler in logger.handlers:
        handler.flush()

    lines = (tmp_path / "quiet.jsonl").read_text(encoding="utf-8").splitlines()
    assert [json.loads(line)["event"] for line in lines] == ["test_digest_failed"]

    for handler in logger.handlers:
        handler.close()
    logger.handlers = []
