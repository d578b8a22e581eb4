"""Tests for settings parsing."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from plaingov.config import RetrievalSettings, Settings


class TestRetrievalSettings:
    def test_defaults(self):
        cfg = RetrievalSettings()
        assert cfg.fetch_max_retries == 0
        assert cfg.allowed_hosts == frozenset({"www.canada.ca", "www.alberta.ca"})

    def test_host_list_parsing(self, monkeypatch):
        monkeypatch.setenv("ALLOWED_SOURCE_HOSTS", " WWW.Canada.ca , ,www.ontario.ca")
        assert RetrievalSettings().allowed_hosts == frozenset({"www.canada.ca", "www.ontario.ca"})

    def test_retries_bounded(self, monkeypatch):
        monkeypatch.setenv("FETCH_MAX_RETRIES", "50")
        with pytest.raises(ValidationError):
            RetrievalSettings()


class TestSettings:
    def test_log_level_normalized(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert Settings().log_level == "DEBUG"

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        with pytest.raises(ValidationError):
            Settings()
