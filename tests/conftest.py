"""Shared test fixtures and configuration."""
from __future__ import annotations

import os
from typing import Dict, Generator, List
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

# Set test environment variables before importing app
os.environ["ALLOWED_ORIGINS"] = "http://localhost:3000,http://localhost:4200"
os.environ["GITHUB_API_URL"] = "https://api.github.test"
os.environ["GITHUB_TOKEN"] = "test_token_12345"

from actions_prune.main import create_app


@pytest.fixture
def app():
    """Create a FastAPI app instance for testing."""
    return create_app()


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI app."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def mock_httpx_response():
    """Create a mock httpx Response."""
    def _create_response(
        status_code: int = 200,
        json_data: Dict | List | None = None,
        text: str = "",
    ):
        response = MagicMock()
        response.status_code = status_code
        response.is_error = status_code >= 400
        response.reason_phrase = "OK" if status_code < 400 else "Error"
        response.text = text
        response.json.return_value = json_data
        return response
    return _create_response


@pytest.fixture
def mock_async_client():
    """Create a mock async HTTP client usable as an async context manager."""
    mock_client = AsyncMock()
    mock_client.request = AsyncMock()
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=None)
    return mock_client


@pytest.fixture
def sample_workflows_payload():
    """Sample GitHub workflow listing response."""
    return {
        "total_count": 2,
        "workflows": [
            {"id": 1, "name": "CI", "path": ".github/workflows/ci.yml", "state": "active"},
            {"id": 2, "name": "Release", "path": ".github/workflows/release.yml", "state": "active"},
        ],
    }


@pytest.fixture
def sample_runs_payload():
    """Sample GitHub workflow run listing response, newest first."""
    return {
        "total_count": 2,
        "workflow_runs": [
            {
                "id": 102,
                "status": "completed",
                "conclusion": "success",
                "triggering_actor": {"login": "bob"},
                "run_started_at": "2024-06-01T00:00:00Z",
            },
            {
                "id": 101,
                "status": "completed",
                "conclusion": "failure",
                "triggering_actor": {"login": "alice"},
                "run_started_at": "2024-01-01T00:00:00Z",
            },
        ],
    }
