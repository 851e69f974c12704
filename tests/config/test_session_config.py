"""Tests for the session timeout configuration provider."""

from __future__ import annotations

import logging

import pytest

from vaultguard.config.session_config import resolve_session_timeout
from vaultguard.utils.errors import ValidationError
from vaultguard.utils.session_guard import SessionTimerConfig

ENV = "VAULTGUARD_SESSION_TIMEOUT_MS"


class TestResolveSessionTimeout:
    def test_default(self) -> None:
        config = resolve_session_timeout(environ={})
        assert config == SessionTimerConfig(timeout_ms=60_000, tick_interval_ms=1000)

    def test_minutes_from_command_line(self) -> None:
        assert resolve_session_timeout(5, environ={}).timeout_ms == 5 * 60 * 1000

    def test_minutes_as_text(self) -> None:
        assert resolve_session_timeout(" 2 ", environ={}).timeout_ms == 120_000

    def test_stored_preference_in_ms(self) -> None:
        assert resolve_session_timeout(environ={ENV: "90000"}).timeout_ms == 90_000

    def test_command_line_wins(self) -> None:
        config = resolve_session_timeout(1, environ={ENV: "90000"})
        assert config.timeout_ms == 60_000

    def test_empty_env_falls_back(self) -> None:
        assert resolve_session_timeout(environ={ENV: ""}).timeout_ms == 60_000

    def test_reads_os_environ(self, monkeypatch) -> None:
        monkeypatch.setenv(ENV, "1500")
        assert resolve_session_timeout().timeout_ms == 1500

    @pytest.mark.parametrize("raw", ["abc", "0", "-5", "1.5", "10ms"])
    def test_invalid_env(self, raw: str) -> None:
        with pytest.raises(ValidationError):
            resolve_session_timeout(environ={ENV: raw})

    @pytest.mark.parametrize("minutes", [0, -3, "x", True])
    def test_invalid_minutes(self, minutes: object) -> None:
        with pytest.raises(ValidationError):
            resolve_session_timeout(minutes, environ={})

    def test_logs_source(self, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="vaultguard.config.session_config"):
            resolve_session_timeout(3, environ={})
        assert "command line: 3 minutes" in caplog.text
