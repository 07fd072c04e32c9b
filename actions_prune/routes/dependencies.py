"""Shared FastAPI dependencies for route modules."""

from __future__ import annotations

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..config import GitHubSettings, get_github_settings
from ..services.github_errors import GitHubConfigurationError

security = HTTPBearer(auto_error=False)


def get_settings(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> GitHubSettings:
    # A bearer token on the request is forwarded to GitHub; otherwise use the server's token.
    token = credentials.credentials if credentials else None
    try:
        return get_github_settings(token=token)
    except GitHubConfigurationError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc
