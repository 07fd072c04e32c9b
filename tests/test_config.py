"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest

from actions_prune.config import (
    DEFAULT_API_URL,
    get_allowed_origins,
    get_github_settings,
)
from actions_prune.services.github_errors import GitHubConfigurationError


class TestGetGitHubSettings:
    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("GITHUB_API_URL", "https://ghe.example.com/api/v3/")
        monkeypatch.setenv("GITHUB_API_TIMEOUT", "12.5")
        monkeypatch.setenv("GITHUB_PER_PAGE", "50")

        settings = get_github_settings()

        assert settings.api_url == "https://ghe.example.com/api/v3"
        assert settings.token == "test_token_12345"
        assert settings.timeout == 12.5
        assert settings.per_page == 50

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("GITHUB_API_URL", raising=False)
        monkeypatch.delenv("GITHUB_API_TIMEOUT", raising=False)
        monkeypatch.delenv("GITHUB_PER_PAGE", raising=False)

        settings = get_github_settings()

        assert settings.api_url == DEFAULT_API_URL
        assert settings.timeout == 30.0
        assert settings.per_page == 100

    def test_explicit_token_wins(self):
        assert get_github_settings(token="caller-token").token == "caller-token"

    def test_falls_back_to_gh_token(self, monkeypatch):
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        monkeypatch.setenv("GH_TOKEN", "gh-cli-token")

        assert get_github_settings().token == "gh-cli-token"

    def test_missing_token(self, monkeypatch):
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        monkeypatch.delenv("GH_TOKEN", raising=False)

        with pytest.raises(GitHubConfigurationError, match="GITHUB_TOKEN or GH_TOKEN"):
            get_github_settings()

    @pytest.mark.parametrize("value", ["abc", "0", "-1"])
    def test_invalid_timeout(self, monkeypatch, value):
        monkeypatch.setenv("GITHUB_API_TIMEOUT", value)

        with pytest.raises(GitHubConfigurationError, match="GITHUB_API_TIMEOUT"):
            get_github_settings()

    def test_per_page_is_clamped(self, monkeypatch):
        monkeypatch.setenv("GITHUB_PER_PAGE", "500")
        assert get_github_settings().per_page == 100

        monkeypatch.setenv("GITHUB_PER_PAGE", "0")
        assert get_github_settings().per_page == 1


def test_allowed_origins_filters_empty_values(monkeypatch):
    monkeypatch.setenv("ALLOWED_ORIGINS", "http://localhost:3000,,  , http://localhost:4200")

    assert get_allowed_origins() == ["http://localhost:3000", "http://localhost:4200"]


def test_allowed_origins_required(monkeypatch):
    monkeypatch.delenv("ALLOWED_ORIGINS", raising=False)

    with pytest.raises(RuntimeError, match="ALLOWED_ORIGINS"):
        get_allowed_origins()
