"""Tests for the JSONL logging sink."""

import json
import logging

import pytest

from incontext.logging_setup import JsonlHandler
from incontext.logging_setup import init_json_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def _records(path):
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


def test_writes_one_json_object_per_record(tmp_path, restore_root_logger):
    log_file = tmp_path / "logs" / "out.jsonl"
    init_json_logging(log_file, "DEBUG")

    logging.getLogger("incontext.test").info("resolved %s", "@proj/a.ts", extra={"event": "resolve", "root": "proj"})

    (record,) = _records(log_file)
    assert record["lvl"] == "INFO"
    assert record["logger"] == "incontext.test"
    assert record["message"] == "resolved @proj/a.ts"
    assert record["event"] == "resolve"
    assert record["root"] == "proj"
    assert record["schema"] == {"name": "incontext.log", "ver": "1.0.0"}


def test_level_filters(tmp_path, restore_root_logger):
    log_file = tmp_path / "out.jsonl"
    init_json_logging(log_file, "warning")

    logger = logging.getLogger("incontext.test")
    logger.info("hidden")
    logger.warning("shown")

    assert [r["message"] for r in _records(log_file)] == ["shown"]


def test_reinit_replaces_handler(tmp_path, restore_root_logger):
    first = init_json_logging(tmp_path / "a.jsonl")
    second = init_json_logging(tmp_path / "b.jsonl")

    handlers = [h for h in logging.getLogger().handlers if isinstance(h, JsonlHandler)]
    assert handlers == [second]
    assert first is not second


def test_exception_is_recorded(tmp_path, restore_root_logger):
    log_file = tmp_path / "out.jsonl"
    init_json_logging(log_file)

    try:
        raise ValueError("boom")
    except ValueError:
        logging.getLogger("incontext.test").exception("failed")

    (record,) = _records(log_file)
    assert "ValueError: boom" in record["exc"]
