"""Parsing helpers for GitHub Actions payloads."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from .github_errors import GitHubPayloadError
from .github_models import RunConclusion, WorkflowDescriptor, WorkflowRun


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore")


class WorkflowPayload(_Payload):
    id: int
    name: str


class WorkflowListPayload(_Payload):
    total_count: int = 0
    workflows: List[WorkflowPayload]


class ActorPayload(_Payload):
    login: str


class WorkflowRunPayload(_Payload):
    id: int
    conclusion: Optional[str] = None
    triggering_actor: Optional[ActorPayload] = None
    run_started_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class WorkflowRunListPayload(_Payload):
    total_count: int = 0
    workflow_runs: List[WorkflowRunPayload]


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_workflow_list_payload(data: Any) -> list[WorkflowDescriptor]:
    """Normalize a workflow listing into descriptors."""
    try:
        payload = WorkflowListPayload.model_validate(data)
    except ValidationError as exc:
        raise GitHubPayloadError(f"Malformed workflow list payload: {exc}") from exc
    return [WorkflowDescriptor(name=wf.name, id=wf.id) for wf in payload.workflows]


def parse_workflow_run(run: WorkflowRunPayload) -> WorkflowRun:
    started = run.run_started_at or run.created_at
    if started is None:
        raise GitHubPayloadError(f"Workflow run {run.id} has no start timestamp")
    return WorkflowRun(
        id=run.id,
        conclusion=RunConclusion.from_api(run.conclusion),
        triggering_actor_login=run.triggering_actor.login if run.triggering_actor else None,
        started_at=_as_utc(started),
    )


def parse_workflow_run_list_payload(data: Any) -> list[WorkflowRun]:
    """Normalize a run listing into typed runs, keeping the API's order."""
    try:
        payload = WorkflowRunListPayload.model_validate(data)
    except ValidationError as exc:
        raise GitHubPayloadError(f"Malformed workflow run list payload: {exc}") from exc
    return [parse_workflow_run(run) for run in payload.workflow_runs]
