"""Triggering event context and the query plans resolved from it."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator


class MergeGroupStrategy(str, Enum):
    AUTO = "auto"
    PULL_REQUESTS = "pull_requests"
    COMPARE = "compare"


class EventContext(BaseModel):
    """What the runner tells us about the triggering event."""

    name: str
    payload: dict[str, Any] = Field(default_factory=dict)
    owner: str
    repo: str


# Subsets of the webhook payloads; unknown keys are ignored.


class RepositoryOwnerPayload(BaseModel):
    login: str


class RepositoryPayload(BaseModel):
    name: str
    owner: RepositoryOwnerPayload


class HeadPayload(BaseModel):
    ref: str
    repo: RepositoryPayload


class PullRequestPayload(BaseModel):
    number: int
    head: HeadPayload


class MergeGroupPayload(BaseModel):
    base_sha: Optional[str] = None
    head_sha: Optional[str] = None
    head_ref: Optional[str] = None
    pull_requests: Optional[list[PullRequestPayload]] = None

    @property
    def has_comparison(self) -> bool:
        return bool(self.base_sha and self.head_sha and self.head_ref)


class PullRequestPlan(BaseModel):
    """Check one pull request: list its commits, read the allow-list at its head."""

    mode: Literal["pull_request"] = "pull_request"
    owner: str
    repo: str
    number: int
    head_owner: str
    head_repo: str
    head_ref: str


class MergeGroupPlan(BaseModel):
    """Check a merge-queue commit range: compare base...head, read the allow-list at head_ref."""

    mode: Literal["merge_group"] = "merge_group"
    owner: str
    repo: str
    base_sha: str
    head_sha: str
    head_ref: str


QueryPlan = Annotated[Union[PullRequestPlan, MergeGroupPlan], Field(discriminator="mode")]


class ResolvedEvent(BaseModel):
    plans: list[QueryPlan] = Field(min_length=1)

    @model_validator(mode="after")
    def plans_share_one_mode(self) -> "ResolvedEvent":
        modes = {plan.mode for plan in self.plans}
        if len(modes) != 1:
            raise ValueError(f"query plans must share one mode; got {sorted(modes)}")
        return self

    @property
    def mode(self) -> str:
        return self.plans[0].mode
