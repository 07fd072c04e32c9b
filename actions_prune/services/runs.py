"""GitHub Actions workflow run selection and deletion."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta, timezone

from ..config import GitHubSettings, get_github_settings
from .github_client import delete_run_raw, list_workflow_runs_raw, list_workflows_raw
from .github_errors import GitHubAPIError, WorkflowNotFoundError
from .github_models import (
    ByActor,
    ByConclusion,
    ByStartedBefore,
    DeleteOutcome,
    DeleteReport,
    RunSelectionCriterion,
    WorkflowDescriptor,
    WorkflowRun,
    WorkflowRunQueryResult,
)
from .github_parsers import parse_workflow_list_payload, parse_workflow_run_list_payload

logger = logging.getLogger(__name__)


async def resolve_workflow(
    owner: str,
    repo: str,
    workflow_name: str,
    settings: GitHubSettings | None = None,
) -> WorkflowDescriptor | None:
    """
    Find the workflow whose name matches ``workflow_name`` exactly.

    Returns None when the repository has no such workflow. API and payload
    failures raise GitHubAPIError instead of being reported as absent.
    """
    data = await list_workflows_raw(owner, repo, settings=settings)
    workflows = parse_workflow_list_payload(data)

    for workflow in workflows:
        if workflow.name == workflow_name:
            return workflow

    logger.info(
        "Workflow not found",
        extra={"owner": owner, "repo": repo, "workflow_name": workflow_name, "candidates": len(workflows)},
    )
    return None


def select_runs(
    runs: Iterable[WorkflowRun],
    criterion: RunSelectionCriterion | None,
    now: datetime | None = None,
) -> list[WorkflowRun]:
    """
    Narrow ``runs`` by a single criterion, preserving their order.

    Without a criterion nothing is selected.
    """
    if criterion is None:
        return []

    if isinstance(criterion, ByConclusion):
        return [run for run in runs if run.conclusion == criterion.conclusion]
    if isinstance(criterion, ByActor):
        return [run for run in runs if run.triggering_actor_login == criterion.login]
    if isinstance(criterion, ByStartedBefore):
        try:
            threshold = (now or datetime.now(timezone.utc)) - timedelta(days=criterion.days)
        except OverflowError:
            # Threshold predates datetime.min; no run can be older.
            return []
        return [run for run in runs if run.started_at < threshold]

    raise TypeError(f"Unsupported run selection criterion: {criterion!r}")


async def list_workflow_runs(
    owner: str,
    repo: str,
    workflow_id: int,
    settings: GitHubSettings | None = None,
) -> list[WorkflowRun]:
    data = await list_workflow_runs_raw(owner, repo, workflow_id, settings=settings)
    return parse_workflow_run_list_payload(data)


async def query_workflow_runs(
    owner: str,
    repo: str,
    workflow_name: str,
    criterion: RunSelectionCriterion | None,
    settings: GitHubSettings | None = None,
    now: datetime | None = None,
) -> list[WorkflowRunQueryResult]:
    """
    Resolve a workflow by name and select its runs matching ``criterion``.

    Args:
        owner: Repository owner (user or organization)
        repo: Repository name
        workflow_name: Exact workflow name as shown in the Actions tab
        criterion: At most one selection criterion; None selects nothing
        settings: GitHub settings (loaded from the environment if not provided)
        now: Reference time for age-based selection

    Returns:
        One result per matched run, newest first, or a single result with
        ``run_id=None`` when nothing matched.

    Raises:
        WorkflowNotFoundError: the workflow name does not exist in the repository
        GitHubAPIError: listing failed or returned a malformed payload
    """
    settings = settings or get_github_settings()

    workflow = await resolve_workflow(owner, repo, workflow_name, settings=settings)
    if workflow is None:
        raise WorkflowNotFoundError(owner, repo, workflow_name)

    runs = await list_workflow_runs(owner, repo, workflow.id, settings=settings)
    selected = select_runs(runs, criterion, now=now)

    logger.info(
        f"Selected {len(selected)} of {len(runs)} runs for workflow {workflow_name}",
        extra={"owner": owner, "repo": repo, "workflow_id": workflow.id, "criterion": repr(criterion)},
    )

    if not selected:
        return [WorkflowRunQueryResult(owner=owner, repo=repo, workflow_name=workflow_name)]
    return [
        WorkflowRunQueryResult(owner=owner, repo=repo, workflow_name=workflow_name, run_id=run.id)
        for run in selected
    ]


async def delete_workflow_runs(
    owner: str,
    repo: str,
    run_ids: Sequence[int | None],
    settings: GitHubSettings | None = None,
    cancel_event: asyncio.Event | None = None,
) -> DeleteReport:
    """
    Delete runs one at a time in the given order.

    A failed deletion is recorded and the remaining ids are still attempted.
    Once ``cancel_event`` is set no further requests are issued and the
    remaining ids are reported as skipped.
    """
    report = DeleteReport(owner=owner, repo=repo)
    pending = [run_id for run_id in run_ids if run_id is not None]
    if not pending:
        return report

    settings = settings or get_github_settings()

    for index, run_id in enumerate(pending):
        if cancel_event is not None and cancel_event.is_set():
            report.skipped.extend(pending[index:])
            logger.warning(
                "Deletion cancelled",
                extra={"owner": owner, "repo": repo, "skipped": len(report.skipped)},
            )
            break

        try:
            deleted = await delete_run_raw(owner, repo, run_id, settings=settings)
        except GitHubAPIError as exc:
            logger.error(f"Failed to delete run {run_id}: {exc}")
            report.outcomes.append(DeleteOutcome(run_id=run_id, deleted=False, error=str(exc)))
            continue

        if not deleted:
            logger.warning(
                f"Run {run_id} not found in {owner}/{repo}; treating as already deleted",
                extra={"owner": owner, "repo": repo, "run_id": run_id},
            )
        report.outcomes.append(DeleteOutcome(run_id=run_id, deleted=True, already_absent=not deleted))

    # GitHub also answers 404 for an unknown repository or one the token cannot see.
    if report.outcomes and all(outcome.already_absent for outcome in report.outcomes):
        logger.warning(
            f"None of the {len(report.outcomes)} runs existed in {owner}/{repo}; "
            "check the repository name and token access",
            extra={"owner": owner, "repo": repo},
        )

    logger.info(
        f"Deleted {len(report.succeeded)} of {len(pending)} runs",
        extra={"owner": owner, "repo": repo, "failed": len(report.failed)},
    )
    return report
