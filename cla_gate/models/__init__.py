"""Pydantic models."""

from cla_gate.models.commit import Account, Commit, CommitList
from cla_gate.models.error import (
    ClaCheckError,
    ConfigurationError,
    ContributorsLoadError,
    ErrorKind,
    FetchFailureError,
    NoContextError,
    UnattributedCommitError,
)
from cla_gate.models.event import (
    EventContext,
    MergeGroupPlan,
    MergeGroupStrategy,
    PullRequestPlan,
    QueryPlan,
    ResolvedEvent,
)
from cla_gate.models.result import EvaluationResult

__all__ = [
    "Account",
    "ClaCheckError",
    "Commit",
    "CommitList",
    "ConfigurationError",
    "ContributorsLoadError",
    "ErrorKind",
    "EvaluationResult",
    "EventContext",
    "FetchFailureError",
    "MergeGroupPlan",
    "MergeGroupStrategy",
    "NoContextError",
    "PullRequestPlan",
    "QueryPlan",
    "ResolvedEvent",
    "UnattributedCommitError",
]
