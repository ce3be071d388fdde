"""Tests for root logging setup."""

from __future__ import annotations

import json
import logging
import sys

import pytest

from clipboard_to_file.logs import JsonFormatter, configure_logging


@pytest.fixture(autouse=True)
def _restore_root():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestConfigureLogging:
    def test_level(self):
        configure_logging("warn")
        assert logging.getLogger().level == logging.WARNING

    def test_unknown_level_is_info(self):
        configure_logging("chatty")
        assert logging.getLogger().level == logging.INFO

    def test_json_output(self, capsys):
        configure_logging("debug", "json")
        logging.getLogger("clipboard_to_file.test").info("created %s", "a.txt")
        line = capsys.readouterr().err.strip().splitlines()[-1]
        data = json.loads(line)
        assert data["level"] == "info"
        assert data["logger"] == "clipboard_to_file.test"
        assert data["message"] == "created a.txt"

    def test_text_output(self, capsys):
        configure_logging("info", "text")
        logging.getLogger("clipboard_to_file.test").warning("careful")
        assert "WARNING clipboard_to_file.test: careful" in capsys.readouterr().err


class TestJsonFormatter:
    def test_exception_included(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = logging.getLogger("x").makeRecord(
                "x", logging.ERROR, __file__, 1, "failed", (), exc_info=sys.exc_info()
            )
        data = json.loads(JsonFormatter().format(record))
        assert "RuntimeError: boom" in data["exc_info"]
