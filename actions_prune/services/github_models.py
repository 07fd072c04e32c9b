"""Shared GitHub Actions service models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Union


class RunConclusion(str, Enum):
    """Terminal status of a workflow run."""

    SUCCESS = "success"
    SKIPPED = "skipped"
    CANCELLED = "cancelled"
    FAILURE = "failure"
    OTHER = "other"

    @classmethod
    def from_api(cls, value: str | None) -> "RunConclusion":
        """Map a raw API conclusion onto the known set, folding the rest into OTHER."""
        if not value:
            return cls.OTHER
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


# Conclusions a caller may select on; OTHER is a catch-all, not a filter value.
SELECTABLE_CONCLUSIONS = (
    RunConclusion.SUCCESS,
    RunConclusion.SKIPPED,
    RunConclusion.CANCELLED,
    RunConclusion.FAILURE,
)


@dataclass(frozen=True)
class WorkflowDescriptor:
    """Workflow definition resolved from a repository."""

    name: str
    id: int


@dataclass(frozen=True)
class WorkflowRun:
    """Individual workflow run item from the GitHub API."""

    id: int
    conclusion: RunConclusion
    triggering_actor_login: str | None
    started_at: datetime


@dataclass(frozen=True)
class ByConclusion:
    conclusion: RunConclusion


@dataclass(frozen=True)
class ByActor:
    login: str


@dataclass(frozen=True)
class ByStartedBefore:
    """Select runs started more than ``days`` calendar days ago."""

    days: int

    def __post_init__(self) -> None:
        if self.days < 0:
            raise ValueError("days must be zero or positive")


RunSelectionCriterion = Union[ByConclusion, ByActor, ByStartedBefore]


@dataclass(frozen=True)
class WorkflowRunQueryResult:
    """One output record of a run query.

    ``run_id`` is ``None`` on the single record emitted when no run matched.
    """

    owner: str
    repo: str
    workflow_name: str
    run_id: int | None = None

    @property
    def matched(self) -> bool:
        return self.run_id is not None


@dataclass
class DeleteOutcome:
    """Result of deleting a single run."""

    run_id: int
    deleted: bool
    already_absent: bool = False
    error: str | None = None


@dataclass
class DeleteReport:
    """Per-item results of a batch delete."""

    owner: str
    repo: str
    outcomes: list[DeleteOutcome] = field(default_factory=list)
    skipped: list[int] = field(default_factory=list)

    @property
    def succeeded(self) -> list[DeleteOutcome]:
        return [outcome for outcome in self.outcomes if outcome.deleted]

    @property
    def failed(self) -> list[DeleteOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.deleted]

    @property
    def ok(self) -> bool:
        return not self.failed and not self.skipped
