"""Logging helpers."""

import json
import logging

from src.tsaap.core.logging import ColoredFormatter, JSONFormatter, get_log_level, get_logger


def make_record(**extra):
    record = logging.LogRecord("tsaap.test", logging.INFO, __file__, 10, "hello %s", ("world",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestLogging:

    def test_loggers_live_under_tsaap(self):
        assert get_logger("notes").name == "tsaap.notes"

    def test_json_formatter_includes_extra(self):
        line = JSONFormatter().format(make_record(note_id="n1"))

        entry = json.loads(line)
        assert entry["message"] == "hello world"
        assert entry["level"] == "INFO"
        assert entry["extra"] == {"note_id": "n1"}

    def test_colored_formatter_leaves_record_alone(self):
        record = make_record()
        ColoredFormatter("%(levelname)s %(message)s").format(record)

        assert record.levelname == "INFO"

    def test_log_level_names(self):
        assert get_log_level("debug") == logging.DEBUG
        assert get_log_level("bogus") == logging.INFO
