"""Workflow run HTTP routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..config import GitHubSettings
from ..schemas.runs import (
    ConclusionFilter,
    DeleteRunsRequest,
    DeleteRunsResponse,
    RunQueryResponse,
    RunQueryResultItem,
    build_criterion,
)
from ..services.github_errors import GitHubAPIError, WorkflowNotFoundError
from ..services.runs import delete_workflow_runs, query_workflow_runs
from .dependencies import get_settings

router = APIRouter(tags=["runs"])


@router.get(
    "/repos/{owner}/{repo}/workflows/{workflow_name}/runs",
    response_model=RunQueryResponse,
)
async def query_runs(
    owner: str,
    repo: str,
    workflow_name: str,
    conclusion: ConclusionFilter | None = Query(None, description="Select runs with this conclusion"),
    actor: str | None = Query(None, description="Select runs triggered by this login"),
    older_than_days: int | None = Query(None, ge=0, description="Select runs started more than N days ago"),
    settings: GitHubSettings = Depends(get_settings),
) -> RunQueryResponse:
    """
    Select runs of a workflow by conclusion, triggering actor or age.

    At most one filter may be supplied. Without a filter nothing is selected.
    When nothing matches, a single result with a null runId is returned.
    """
    try:
        criterion = build_criterion(conclusion, actor, older_than_days)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    try:
        results = await query_workflow_runs(owner, repo, workflow_name, criterion, settings=settings)
    except WorkflowNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except GitHubAPIError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc

    return RunQueryResponse(
        results=[RunQueryResultItem.from_result(result) for result in results],
        matched=sum(1 for result in results if result.matched),
    )


@router.post("/repos/{owner}/{repo}/runs/delete", response_model=DeleteRunsResponse)
async def delete_runs(
    owner: str,
    repo: str,
    payload: DeleteRunsRequest,
    settings: GitHubSettings = Depends(get_settings),
) -> DeleteRunsResponse:
    """Delete workflow runs in the given order, reporting each one."""
    report = await delete_workflow_runs(owner, repo, payload.runIds, settings=settings)
    return DeleteRunsResponse.from_report(report)
