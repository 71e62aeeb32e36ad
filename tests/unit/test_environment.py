"""Tests for CEXPR_LOG_LEVEL handling."""

from __future__ import annotations

import logging

import pytest

from cexpr.core.environment import (
    CEXPR_LOG_LEVEL_VAR,
    LogLevel,
    configure_logging,
    get_log_level,
)


class TestGetLogLevel:
    def test_default_is_warning(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(CEXPR_LOG_LEVEL_VAR, raising=False)
        assert get_log_level() == LogLevel.WARNING

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("debug", LogLevel.DEBUG),
            ("INFO", LogLevel.INFO),
            (" error ", LogLevel.ERROR),
            ("warn", LogLevel.WARNING),
            ("err", LogLevel.ERROR),
        ],
    )
    def test_values(self, monkeypatch: pytest.MonkeyPatch, raw: str, expected: LogLevel) -> None:
        monkeypatch.setenv(CEXPR_LOG_LEVEL_VAR, raw)
        assert get_log_level() == expected

    def test_unknown_value_warns(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        monkeypatch.setenv(CEXPR_LOG_LEVEL_VAR, "loud")
        with caplog.at_level(logging.WARNING):
            assert get_log_level() == LogLevel.WARNING
        assert "Unknown CEXPR_LOG_LEVEL value 'loud'" in caplog.text


class TestConfigureLogging:
    def test_numeric_levels(self) -> None:
        assert LogLevel.DEBUG.numeric == logging.DEBUG
        assert LogLevel.ERROR.numeric == logging.ERROR

    def test_explicit_level(self) -> None:
        assert configure_logging(LogLevel.DEBUG) == LogLevel.DEBUG
        assert logging.getLogger("cexpr").level == logging.DEBUG

    def test_level_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(CEXPR_LOG_LEVEL_VAR, "info")
        assert configure_logging() == LogLevel.INFO
        assert logging.getLogger("cexpr").level == logging.INFO
