"""Tests for environment-driven settings and error types."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from fallthrough.foundation.config import FallthroughSettings, LoggingSettings, clear_settings_cache, get_settings
from fallthrough.foundation.errors import EffectTypeError, ErrorCode, ExitError, FallthroughError, UnwrapError


class TestSettings:
    def test_defaults(self) -> None:
        settings = FallthroughSettings()
        assert settings.debug is False
        assert settings.logging.level == "INFO"
        assert settings.logging.format == "console"
        assert settings.logging.colors is None
        assert settings.logging.trace_branches is False
        assert settings.effective_log_level == "INFO"

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FALLTHROUGH_LOG_LEVEL", "warning")
        monkeypatch.setenv("FALLTHROUGH_LOG_FORMAT", "JSON")
        monkeypatch.setenv("FALLTHROUGH_LOG_TRACE_BRANCHES", "1")
        settings = LoggingSettings()
        assert settings.level == "WARNING"
        assert settings.format == "json"
        assert settings.trace_branches is True

    def test_debug_implies_debug_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FALLTHROUGH_DEBUG", "true")
        monkeypatch.setenv("FALLTHROUGH_LOG_LEVEL", "ERROR")
        settings = FallthroughSettings()
        assert settings.logging.level == "ERROR"
        assert settings.effective_log_level == "DEBUG"

    def test_rejects_unknown_level(self) -> None:
        with pytest.raises(ValidationError):
            LoggingSettings(level="LOUD")

    def test_cached_until_cleared(self, monkeypatch: pytest.MonkeyPatch) -> None:
        first = get_settings()
        assert get_settings() is first

        monkeypatch.setenv("FALLTHROUGH_LOG_LEVEL", "ERROR")
        assert get_settings().logging.level == "INFO"

        clear_settings_cache()
        assert get_settings() is not first
        assert get_settings().logging.level == "ERROR"


class TestErrors:
    def test_codes_per_class(self) -> None:
        assert FallthroughError("x").code is ErrorCode.UNKNOWN
        assert UnwrapError("x").code is ErrorCode.UNWRAP_FAILED
        assert EffectTypeError("x").code is ErrorCode.NOT_AN_EFFECT
        assert ExitError("x").code is ErrorCode.EXIT_OUTSIDE_BLOCK

    def test_code_override(self) -> None:
        assert FallthroughError("x", code=ErrorCode.NOT_AN_EFFECT).code is ErrorCode.NOT_AN_EFFECT
        assert FallthroughError("x").code is ErrorCode.UNKNOWN

    def test_builtin_bases(self) -> None:
        assert isinstance(UnwrapError("x"), RuntimeError)
        assert isinstance(EffectTypeError("x"), TypeError)
        assert isinstance(ExitError("x"), RuntimeError)

    def test_render_and_repr(self) -> None:
        err = UnwrapError.wrong_variant("unwrap", "Absent")
        assert str(err) == "unwrap() on Absent"
        assert err.render() == "[UNWRAP_FAILED] unwrap() on Absent"
        assert repr(err) == "UnwrapError('unwrap() on Absent', code=UNWRAP_FAILED)"

    def test_expected_names_offending_value(self) -> None:
        err = EffectTypeError.expected("Effect", 42)
        assert err.message == "Expected Effect, got int: 42"
