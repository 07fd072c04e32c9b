"""Pydantic models shared across run endpoints."""
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..services.github_models import (
    ByActor,
    ByConclusion,
    ByStartedBefore,
    DeleteReport,
    RunConclusion,
    RunSelectionCriterion,
    WorkflowRunQueryResult,
)

ConclusionFilter = Literal["success", "skipped", "cancelled", "failure"]


def build_criterion(
    conclusion: Optional[str] = None,
    actor: Optional[str] = None,
    older_than_days: Optional[int] = None,
) -> Optional[RunSelectionCriterion]:
    """Turn mutually exclusive filter inputs into a single criterion.

    Raises ValueError when more than one input is supplied.
    """
    supplied = [
        name
        for name, value in (
            ("conclusion", conclusion),
            ("actor", actor),
            ("older_than_days", older_than_days),
        )
        if value is not None and value != ""
    ]
    if len(supplied) > 1:
        raise ValueError(f"Only one of conclusion, actor, older_than_days may be given (got {', '.join(supplied)})")

    if conclusion:
        value = RunConclusion(conclusion)
        if value is RunConclusion.OTHER:
            raise ValueError("conclusion 'other' cannot be used as a filter")
        return ByConclusion(value)
    if actor:
        return ByActor(actor)
    if older_than_days is not None:
        return ByStartedBefore(older_than_days)
    return None


class RunQueryResultItem(BaseModel):
    owner: str
    repo: str
    workflowName: str
    runId: Optional[int] = None

    @classmethod
    def from_result(cls, result: WorkflowRunQueryResult) -> "RunQueryResultItem":
        return cls(
            owner=result.owner,
            repo=result.repo,
            workflowName=result.workflow_name,
            runId=result.run_id,
        )


class RunQueryResponse(BaseModel):
    results: List[RunQueryResultItem]
    matched: int


class DeleteRunsRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    runIds: List[int] = Field(..., description="Workflow run IDs to delete, in order")

    @field_validator("runIds")
    @classmethod
    def validate_run_ids(cls, value: List[int]) -> List[int]:
        if not value:
            raise ValueError("runIds cannot be empty")
        return value


class DeleteRunResult(BaseModel):
    runId: int
    deleted: bool
    alreadyAbsent: bool = False
    error: Optional[str] = None


class DeleteRunsResponse(BaseModel):
    owner: str
    repo: str
    results: List[DeleteRunResult]
    succeeded: int
    failed: int
    skipped: List[int] = Field(default_factory=list)

    @classmethod
    def from_report(cls, report: DeleteReport) -> "DeleteRunsResponse":
        return cls(
            owner=report.owner,
            repo=report.repo,
            results=[
                DeleteRunResult(
                    runId=outcome.run_id,
                    deleted=outcome.deleted,
                    alreadyAbsent=outcome.already_absent,
                    error=outcome.error,
                )
                for outcome in report.outcomes
            ],
            succeeded=len(report.succeeded),
            failed=len(report.failed),
            skipped=list(report.skipped),
        )
