"""Error types for GitHub Actions service operations."""

from __future__ import annotations


class GitHubConfigurationError(RuntimeError):
    """Raised when required GitHub configuration is missing."""


class GitHubAPIError(RuntimeError):
    """Raised when GitHub API calls fail."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GitHubPayloadError(GitHubAPIError):
    """Raised when a GitHub API response does not match the expected shape."""


class WorkflowNotFoundError(LookupError):
    """Raised when a workflow name does not resolve in a repository."""

    def __init__(self, owner: str, repo: str, workflow_name: str) -> None:
        super().__init__(f"Workflow '{workflow_name}' not found in {owner}/{repo}")
        self.owner = owner
        self.repo = repo
        self.workflow_name = workflow_name
