"""Tests for log entry chaining"""

import inspect
import io
import json
from datetime import datetime, timezone

import pytest

from fieldlog import FieldLogger, LogEntry, LogLevel, new_logger
from fieldlog.core.call_site import CallSite


def emit(chain, level="info", message="msg"):
    """Emit through a chain whose logger writes to a StringIO, return the record."""
    buf = chain.logger.output
    start = len(buf.getvalue())
    getattr(chain, level)(message)
    return json.loads(buf.getvalue()[start:])


@pytest.fixture
def logger():
    return new_logger(io.StringIO(), None, "DEBUG")


class TestFieldChaining:
    """Test copy-on-write field accumulation."""

    def test_logger_with_field_starts_chain(self, logger):
        entry = logger.with_field("a", 1)
        assert isinstance(entry, LogEntry)
        assert entry.logger is logger
        assert entry.fields == {"a": 1}

    def test_parent_unchanged_by_child(self, logger):
        e1 = logger.with_field("a", 1)
        e2 = e1.with_field("b", 2)

        assert emit(e1)["fields"] == {"a": 1}
        assert emit(e2)["fields"] == {"a": 1, "b": 2}
        assert e1.fields == {"a": 1}

    def test_overwrite(self, logger):
        entry = logger.with_field("a", 1).with_field("a", 2)
        assert emit(entry)["fields"] == {"a": 2}

    def test_non_string_key_on_chain(self, logger):
        entry = logger.with_field("a", 1).with_field({"unhashable": True}, 2).with_field(3, 4)
        assert entry.fields == {"a": 1, "{'unhashable': True}": 2, "3": 4}
        assert emit(entry)["fields"] == {"a": 1, "{'unhashable': True}": 2, "3": 4}

    def test_overwrite_does_not_touch_ancestor(self, logger):
        base = logger.with_field("a", 1)
        base.with_field("a", 2)
        assert base.fields == {"a": 1}

    def test_sibling_chains_are_isolated(self, logger):
        base = logger.with_field("request", "r-1")
        left = base.with_field("side", "left")
        right = base.with_field("side", "right").with_field("extra", True)

        assert emit(left)["fields"] == {"request": "r-1", "side": "left"}
        assert emit(right)["fields"] == {"request": "r-1", "side": "right", "extra": True}
        assert emit(base)["fields"] == {"request": "r-1"}

    def test_fields_are_read_only(self, logger):
        entry = logger.with_field("a", 1)
        with pytest.raises(TypeError):
            entry.fields["b"] = 2

    def test_entry_attributes_are_frozen(self, logger):
        entry = logger.with_field("a", 1)
        with pytest.raises(AttributeError):
            entry.message = "changed"

    def test_caller_dict_is_copied(self, logger):
        source = {"a": 1}
        entry = LogEntry(logger, source)
        source["b"] = 2
        assert entry.fields == {"a": 1}

    def test_intermediate_entries_are_not_stamped(self, logger):
        entry = logger.with_field("a", 1).with_error(ValueError("x"))
        assert entry.timestamp is None
        assert entry.level is None
        assert entry.message == ""
        assert entry.line == 0
        assert not entry.finalized

    def test_emitting_does_not_stamp_the_chain(self, logger):
        entry = logger.with_field("a", 1)
        entry.warn("once")
        assert entry.timestamp is None
        assert entry.level is None

    def test_entry_without_logger_is_silent(self):
        LogEntry(fields={"a": 1}).error("nobody listens")


class TestErrorAttachment:
    """Test with_error behavior."""

    def test_error_fields(self, logger):
        err = ValueError("bad input")
        record = emit(logger.with_error(err), "error")

        assert record["error"] == "bad input"
        assert record["errorData"] == {"type": "ValueError", "message": "bad input"}
        assert set(record["errorLocation"]) == {"package", "function", "file", "line"}

    def test_raw_error_value_kept(self, logger):
        err = KeyError("missing")
        entry = logger.with_error(err)
        assert entry.error_data is err
        assert entry.error_message == str(err)

    def test_none_error(self, logger):
        entry = logger.with_error(None)
        assert isinstance(entry, LogEntry)

        record = emit(entry)
        assert "error" not in record
        assert "errorData" not in record
        assert "errorLocation" not in record

    def test_none_error_clears_inherited_error(self, logger):
        entry = logger.with_error(ValueError("old")).with_error(None)
        record = emit(entry)
        assert "error" not in record
        assert "errorData" not in record

    def test_error_survives_later_fields(self, logger):
        entry = logger.with_error(RuntimeError("down")).with_field("retry", 3)
        record = emit(entry)
        assert record["error"] == "down"
        assert record["fields"] == {"retry": 3}
        assert "errorLocation" in record

    def test_error_replaced_by_new_error(self, logger):
        first = logger.with_error(RuntimeError("first"))
        second = first.with_error(RuntimeError("second"))

        assert emit(first)["error"] == "first"
        assert emit(second)["error"] == "second"

    def test_error_location_is_where_error_was_attached(self, logger):
        attach_line = inspect.currentframe().f_lineno + 1
        entry = logger.with_error(OSError("io"))
        log_line = inspect.currentframe().f_lineno + 1
        record = emit(entry)

        location = record["errorLocation"]
        assert location["line"] == attach_line
        assert location["file"] == "test_log_entry.py"
        assert location["package"] == __name__
        assert location["function"] == "(TestErrorAttachment).test_error_location_is_where_error_was_attached"
        assert attach_line != log_line

    def test_error_location_on_chained_entry(self, logger):
        base = logger.with_field("a", 1)
        attach_line = inspect.currentframe().f_lineno + 1
        entry = base.with_error(OSError("io"))
        assert entry.error_location.line == attach_line
        assert base.error_location is None

    def test_unprintable_error(self, logger):
        class Unprintable(Exception):
            def __str__(self):
                raise RuntimeError("no")

        entry = logger.with_error(Unprintable())
        assert entry.error_message == "<unprintable Unprintable>"


class TestFinalize:
    """Test stamping and record layout."""

    def test_finalize_returns_copy(self, logger):
        entry = logger.with_field("a", 1)
        site = CallSite("app", "main", "main.py", 7)
        stamp = datetime(2024, 5, 1, 12, 0, 0, 123456, tzinfo=timezone.utc)

        record = entry.finalize(LogLevel.WARN, "hi", site, stamp)

        assert record is not entry
        assert record.finalized
        assert record.level == LogLevel.WARN
        assert record.timestamp == stamp
        assert (record.package, record.function, record.file, record.line) == ("app", "main", "main.py", 7)
        assert record.fields == {"a": 1}
        assert entry.timestamp is None

    def test_to_dict_key_order(self, logger):
        site = CallSite("app", "main", "main.py", 7)
        record = (logger.with_field("a", 1)
            .with_error(ValueError("v"))
            .finalize(LogLevel.ERROR, "boom", site))

        assert list(record.to_dict()) == [
            "timestamp", "level", "package", "function", "file", "line",
            "fields", "error", "errorData", "errorLocation", "message",
        ]

    def test_to_dict_omits_optional_keys(self, logger):
        record = LogEntry(logger).finalize(LogLevel.INFO, "plain", CallSite("p", "f", "x.py", 1))
        assert list(record.to_dict()) == [
            "timestamp", "level", "package", "function", "file", "line", "message",
        ]

    def test_unfinalized_to_dict_has_no_timestamp(self, logger):
        assert "timestamp" not in logger.with_field("a", 1).to_dict()

    def test_from_dict(self, logger):
        data = {
            "timestamp": "2024-05-01T12:00:00.123456+00:00",
            "level": "WARN",
            "package": "app",
            "function": "(Worker).run",
            "file": "worker.py",
            "line": 40,
            "fields": {"job": 9},
            "error": "timeout",
            "errorData": {"type": "TimeoutError", "message": "timeout"},
            "errorLocation": {"package": "app", "function": "poll", "file": "poll.py", "line": 3},
            "message": "slow job",
        }

        entry = LogEntry.from_dict(data, logger)

        assert entry.level == LogLevel.WARN
        assert entry.error_location == CallSite("app", "poll", "poll.py", 3)
        assert entry.to_dict() == data
        assert entry.logger is logger


class TestCapabilitySet:
    """Logger and LogEntry expose the same capability set."""

    def test_both_are_field_loggers(self, logger):
        assert isinstance(logger, FieldLogger)
        assert isinstance(logger.with_field("a", 1), FieldLogger)
        assert isinstance(logger.with_error(None), FieldLogger)

    def test_interchangeable(self, logger):
        def handle(log: FieldLogger):
            log.with_field("step", "handle").info("handled")

        handle(logger)
        handle(logger.with_field("request", "r-9"))

        lines = [json.loads(line) for line in logger.output.getvalue().splitlines()]
        assert lines[0]["fields"] == {"step": "handle"}
        assert lines[1]["fields"] == {"request": "r-9", "step": "handle"}
