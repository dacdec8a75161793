"""Tests for llmhub.config."""

from __future__ import annotations

import pytest

from llmhub.config import resolve_enable_caching


class TestResolveEnableCaching:
    def test_explicit_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LLMHUB_ENABLE_CACHING", "true")
        assert resolve_enable_caching(False) is False

    def test_default_disabled(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("LLMHUB_ENABLE_CACHING", raising=False)
        assert resolve_enable_caching() is False

    @pytest.mark.parametrize("value", ["1", "true", "TRUE", "yes", " on "])
    def test_true_values(self, monkeypatch: pytest.MonkeyPatch, value: str) -> None:
        monkeypatch.setenv("LLMHUB_ENABLE_CACHING", value)
        assert resolve_enable_caching() is True

    @pytest.mark.parametrize("value", ["0", "false", "No", "off", ""])
    def test_false_values(self, monkeypatch: pytest.MonkeyPatch, value: str) -> None:
        monkeypatch.setenv("LLMHUB_ENABLE_CACHING", value)
        assert resolve_enable_caching() is False

    def test_invalid_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LLMHUB_ENABLE_CACHING", "maybe")
        with pytest.raises(ValueError, match="Invalid LLMHUB_ENABLE_CACHING value 'maybe'"):
            resolve_enable_caching()
