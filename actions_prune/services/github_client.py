"""Low-level HTTP calls to the GitHub Actions API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import GitHubSettings, get_github_settings
from .github_errors import GitHubAPIError, GitHubPayloadError

logger = logging.getLogger(__name__)

API_VERSION = "2022-11-28"


def _headers(token: str) -> dict[str, str]:
    return {
        "Authorization": f"Bearer {token}",
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": API_VERSION,
    }


def _masked_headers(headers: dict[str, str]) -> dict[str, str]:
    """Mask sensitive headers before logging."""
    masked = dict(headers)
    if "Authorization" in masked:
        masked["Authorization"] = "Bearer ***"
    return masked


def _repo_url(settings: GitHubSettings, owner: str, repo: str) -> str:
    return f"{settings.api_url}/repos/{owner}/{repo}/actions"


async def _send(
    method: str,
    url: str,
    settings: GitHubSettings,
    params: dict[str, Any] | None = None,
) -> httpx.Response:
    headers = _headers(settings.token)
    logger.debug(
        "GitHub API request: method=%s url=%s params=%s headers=%s",
        method,
        url,
        params,
        _masked_headers(headers),
    )
    try:
        async with httpx.AsyncClient(timeout=httpx.Timeout(settings.timeout)) as client:
            response = await client.request(method, url, headers=headers, params=params)
    except httpx.HTTPError as exc:
        raise GitHubAPIError(f"{method} {url} failed: {exc}") from exc
    logger.debug("GitHub API response: method=%s url=%s status=%s", method, url, response.status_code)
    return response


def _json_body(response: httpx.Response, action: str) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise GitHubPayloadError(f"Failed to {action}: response is not valid JSON") from exc


def _raise_for_error(response: httpx.Response, action: str) -> None:
    if response.is_error:
        logger.error(
            "GitHub API error",
            extra={
                "status": response.status_code,
                "reason": response.reason_phrase,
                "body": response.text,
            },
        )
        raise GitHubAPIError(
            f"Failed to {action}: {response.status_code} {response.text}",
            status_code=response.status_code,
        )


async def list_workflows_raw(
    owner: str,
    repo: str,
    settings: GitHubSettings | None = None,
) -> Any:
    settings = settings or get_github_settings()
    url = f"{_repo_url(settings, owner, repo)}/workflows"
    response = await _send("GET", url, settings, params={"per_page": settings.per_page})
    _raise_for_error(response, f"list workflows for {owner}/{repo}")
    return _json_body(response, f"list workflows for {owner}/{repo}")


async def list_workflow_runs_raw(
    owner: str,
    repo: str,
    workflow_id: int,
    settings: GitHubSettings | None = None,
) -> Any:
    settings = settings or get_github_settings()
    url = f"{_repo_url(settings, owner, repo)}/workflows/{workflow_id}/runs"
    response = await _send("GET", url, settings, params={"per_page": settings.per_page})
    _raise_for_error(response, f"list runs for workflow {workflow_id}")
    return _json_body(response, f"list runs for workflow {workflow_id}")


async def delete_run_raw(
    owner: str,
    repo: str,
    run_id: int,
    settings: GitHubSettings | None = None,
) -> bool:
    """Delete a run. Returns False when the run was already gone (404)."""
    settings = settings or get_github_settings()
    url = f"{_repo_url(settings, owner, repo)}/runs/{run_id}"
    response = await _send("DELETE", url, settings)

    if response.status_code == 404:
        return False
    _raise_for_error(response, f"delete run {run_id}")
    return True
