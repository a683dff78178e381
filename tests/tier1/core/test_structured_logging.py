"""Tests for structured logging helpers."""

import json
import logging

from replicator.core.config import reset_settings
from replicator.core.logging import (
    ContextFilter,
    JSONFormatter,
    LogContext,
    TextFormatter,
    configure_logging,
)


def make_record(msg="hello", **extra):
    record = logging.LogRecord("replicator.test", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:

    def test_basic_fields(self):
        data = json.loads(JSONFormatter().format(make_record()))
        assert data["level"] == "INFO"
        assert data["logger"] == "replicator.test"
        assert data["message"] == "hello"
        assert "timestamp" in data

    def test_extra_fields(self):
        data = json.loads(JSONFormatter().format(make_record(replicator="phones", rows=3)))
        assert data["replicator"] == "phones"
        assert data["rows"] == 3


class TestLogContext:

    def test_fields_added_and_restored(self):
        context_filter = ContextFilter()

        with LogContext(form="profile", replicator="phones"):
            record = make_record()
            context_filter.filter(record)
            assert record.form == "profile"
            assert record.replicator == "phones"

        record = make_record()
        context_filter.filter(record)
        assert not hasattr(record, "form")

    def test_nested_contexts(self):
        with LogContext(replicator="people"):
            with LogContext(replicator="phones"):
                assert LogContext._context["replicator"] == "phones"
            assert LogContext._context["replicator"] == "people"
        assert "replicator" not in LogContext._context

    def test_explicit_extra_wins(self):
        with LogContext(replicator="phones"):
            record = make_record(replicator="explicit")
            ContextFilter().filter(record)
        assert record.replicator == "explicit"


class TestConfigureLogging:

    def test_json_handler(self):
        logger = configure_logging("DEBUG", "json", logger_name="replicator.test_json")
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)

    def test_text_handler_replaces_existing(self):
        name = "replicator.test_text"
        configure_logging("INFO", "text", logger_name=name)
        logger = configure_logging("WARNING", "text", logger_name=name)
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, TextFormatter)
        assert logger.level == logging.WARNING

    def test_defaults_come_from_settings(self, monkeypatch):
        monkeypatch.setenv("REPLICATOR_LOG_LEVEL", "ERROR")
        monkeypatch.setenv("REPLICATOR_LOG_FORMAT", "json")
        reset_settings()

        logger = configure_logging(logger_name="replicator.test_settings")

        assert logger.level == logging.ERROR
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)

    def test_explicit_arguments_override_settings(self, monkeypatch):
        monkeypatch.setenv("REPLICATOR_LOG_FORMAT", "json")
        reset_settings()

        logger = configure_logging("DEBUG", "text", logger_name="replicator.test_override")

        assert logger.level == logging.DEBUG
        assert isinstance(logger.handlers[0].formatter, TextFormatter)
