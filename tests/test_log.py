import json
import logging
import sys

import pytest

from askline.log import (
    JSONFormatter,
    log_attempt,
    log_resolution,
    resolve_level,
    setup_logging,
)


@pytest.fixture
def clean_logger():
    logger = logging.getLogger("askline")
    saved_level = logger.level
    saved_handlers = list(logger.handlers)
    yield logger
    for handler in logger.handlers:
        if handler not in saved_handlers:
            handler.close()
    logger.handlers[:] = saved_handlers
    logger.setLevel(saved_level)


def _owned(logger):
    return [h for h in logger.handlers if not isinstance(h, logging.NullHandler)]


def _record(name="askline.attempt", level=logging.DEBUG, msg="prompt_attempt", exc_info=None):
    return logging.LogRecord(name, level, __file__, 1, msg, None, exc_info)


class TestJSONFormatter:
    def test_data_flattened_into_entry(self):
        record = _record()
        record.data = {"attempt": 2, "outcome": "rejected"}
        entry = json.loads(JSONFormatter().format(record))
        assert entry["logger"] == "askline.attempt"
        assert entry["event"] == "prompt_attempt"
        assert entry["level"] == "debug"
        assert entry["attempt"] == 2
        assert entry["outcome"] == "rejected"

    def test_data_cannot_shadow_core_keys(self):
        record = _record()
        record.data = {"level": "bogus", "prompt": "x: "}
        entry = json.loads(JSONFormatter().format(record))
        assert entry["level"] == "debug"
        assert entry["prompt"] == "x: "

    def test_exception_included(self):
        try:
            raise ValueError("boom")
        except ValueError:
            exc_info = sys.exc_info()
        entry = json.loads(JSONFormatter().format(_record(exc_info=exc_info)))
        assert entry["error"] == {"type": "ValueError", "message": "boom"}


class TestResolveLevel:
    @pytest.mark.parametrize("level, expected", [
        ("debug", logging.DEBUG),
        ("INFO", logging.INFO),
        (30, 30),
        (None, logging.ERROR),
        ("loud", logging.ERROR),
    ])
    def test_resolve(self, level, expected):
        assert resolve_level(level, logging.ERROR) == expected


class TestSetupLogging:
    def test_library_is_silent_until_configured(self):
        handlers = logging.getLogger("askline").handlers
        assert any(isinstance(h, logging.NullHandler) for h in handlers)

    def test_stderr_by_default(self, clean_logger):
        logger = setup_logging()
        assert logger is clean_logger
        [handler] = _owned(logger)
        assert type(handler) is logging.StreamHandler
        assert logger.level == logging.WARNING

    def test_file_handler(self, clean_logger, tmp_path):
        setup_logging(tmp_path / "logs")
        assert clean_logger.level == logging.DEBUG
        log_attempt("x: ", 1, "accepted", raw="hello")
        log_resolution("x: ", 1, "accepted")
        for handler in clean_logger.handlers:
            handler.flush()
        lines = (tmp_path / "logs" / "askline.jsonl").read_text().splitlines()
        entries = [json.loads(line) for line in lines]
        assert [e["event"] for e in entries] == ["prompt_attempt", "prompt_resolved"]
        assert entries[0]["raw"] == "hello"
        assert entries[1]["attempts"] == 1

    def test_repeated_calls_replace_handler(self, clean_logger, tmp_path):
        setup_logging()
        setup_logging(tmp_path, level="info")
        [handler] = _owned(clean_logger)
        assert isinstance(handler, logging.FileHandler)
        assert clean_logger.level == logging.INFO

    def test_host_handlers_left_alone(self, clean_logger):
        host = logging.StreamHandler()
        clean_logger.addHandler(host)
        setup_logging()
        setup_logging()
        assert host in clean_logger.handlers
        assert len(_owned(clean_logger)) == 2


def test_log_attempt_omits_empty_fields(caplog):
    with caplog.at_level(logging.DEBUG, logger="askline"):
        log_attempt("x: ", 3, "empty")
    record = caplog.records[-1]
    assert record.data == {"prompt": "x: ", "attempt": 3, "outcome": "empty"}
