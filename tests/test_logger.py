"""
Unit tests for logging setup (utils/logger.py).
"""

import logging
import sys
from unittest.mock import MagicMock

import pytest

from node_cli.exceptions import LoggerInitError
from node_cli.utils.logger import init_logger, install_crash_handler, parse_log_filters


class TestParseLogFilters:
    """Tests for the filter pattern parser."""

    def test_empty_pattern(self):
        assert parse_log_filters(None) == (logging.INFO, {})
        assert parse_log_filters("") == (logging.INFO, {})

    def test_root_level(self):
        assert parse_log_filters("warn") == (logging.WARNING, {})

    def test_targets(self):
        root, targets = parse_log_filters("debug, sync=trace ,db=error")

        assert root == logging.DEBUG
        assert targets == {"sync": logging.DEBUG, "db": logging.ERROR}

    def test_off_silences(self):
        _, targets = parse_log_filters("noisy=off")

        assert targets["noisy"] > logging.CRITICAL

    def test_unknown_level(self):
        with pytest.raises(LoggerInitError, match="loud"):
            parse_log_filters("sync=loud")

    def test_empty_target(self):
        with pytest.raises(LoggerInitError):
            parse_log_filters("=debug")


class TestInitLogger:
    """Tests for init_logger()."""

    def test_sets_levels(self):
        init_logger("error,node_cli.test_target=debug")

        assert logging.getLogger().level == logging.ERROR
        assert logging.getLogger("node_cli.test_target").level == logging.DEBUG

        logging.getLogger("node_cli.test_target").setLevel(logging.NOTSET)

    def test_invalid_pattern_leaves_logging_untouched(self):
        root = logging.getLogger()
        handlers = list(root.handlers)

        with pytest.raises(LoggerInitError):
            init_logger("what=ever")

        assert root.handlers == handlers


class TestCrashHandler:
    """Tests for install_crash_handler()."""

    def test_reports_support_url(self, monkeypatch, capsys):
        previous = MagicMock()
        monkeypatch.setattr(sys, "excepthook", previous)

        install_crash_handler("https://example.com/bugs", "1.0.0")
        error = ValueError("boom")
        sys.excepthook(ValueError, error, None)

        err = capsys.readouterr().err
        assert "https://example.com/bugs" in err
        assert "Version: 1.0.0" in err
        previous.assert_called_once_with(ValueError, error, None)

    def test_keyboard_interrupt_is_quiet(self, monkeypatch, capsys):
        previous = MagicMock()
        monkeypatch.setattr(sys, "excepthook", previous)

        install_crash_handler("https://example.com/bugs", "1.0.0")
        sys.excepthook(KeyboardInterrupt, KeyboardInterrupt(), None)

        assert "report" not in capsys.readouterr().err
        previous.assert_called_once()
