"""Environment-driven settings for GitHub API access."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .services.github_errors import GitHubConfigurationError

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_PER_PAGE = 100
MAX_PER_PAGE = 100


@dataclass(frozen=True)
class GitHubSettings:
    api_url: str
    token: str
    timeout: float
    per_page: int


def _get_required_env(*keys: str) -> str:
    """Return the first non-empty variable among ``keys`` or raise."""
    for key in keys:
        value = os.getenv(key)
        if value:
            return value
    raise GitHubConfigurationError(
        f"Missing required environment variable: {' or '.join(keys)}"
    )


def _get_float_env(key: str, default: float) -> float:
    raw = os.getenv(key)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise GitHubConfigurationError(f"{key} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise GitHubConfigurationError(f"{key} must be greater than zero")
    return value


def _get_int_env(key: str, default: int) -> int:
    raw = os.getenv(key)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise GitHubConfigurationError(f"{key} must be an integer, got {raw!r}") from exc


def get_github_settings(token: str | None = None) -> GitHubSettings:
    """Load GitHub settings from the environment.

    An explicit ``token`` (e.g. forwarded by an HTTP caller) takes precedence
    over ``GITHUB_TOKEN`` / ``GH_TOKEN``.
    """
    resolved_token = token or _get_required_env("GITHUB_TOKEN", "GH_TOKEN")
    per_page = _get_int_env("GITHUB_PER_PAGE", DEFAULT_PER_PAGE)
    return GitHubSettings(
        api_url=(os.getenv("GITHUB_API_URL") or DEFAULT_API_URL).rstrip("/"),
        token=resolved_token,
        timeout=_get_float_env("GITHUB_API_TIMEOUT", DEFAULT_TIMEOUT_SECONDS),
        per_page=max(1, min(per_page, MAX_PER_PAGE)),
    )


def get_allowed_origins() -> list[str]:
    raw = os.getenv("ALLOWED_ORIGINS")
    if not raw:
        raise RuntimeError("ALLOWED_ORIGINS environment variable is required")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
