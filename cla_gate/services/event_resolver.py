"""Resolve the triggering event into typed query plans.

Event shapes handled:
- ``pull_request`` / ``pull_request_target``: any event whose payload carries
  ``pull_request`` becomes one PullRequestPlan.
- ``merge_group`` with ``pull_requests``: one PullRequestPlan per constituent PR.
- ``merge_group`` with ``base_sha``/``head_sha``/``head_ref``: one MergeGroupPlan.

Everything downstream dispatches on ``plan.mode``; nothing else inspects the
raw payload.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from cla_gate.models.error import ConfigurationError, NoContextError
from cla_gate.models.event import (
    EventContext,
    MergeGroupPayload,
    MergeGroupPlan,
    MergeGroupStrategy,
    PullRequestPayload,
    PullRequestPlan,
    ResolvedEvent,
)

logger = logging.getLogger(__name__)

MERGE_GROUP_EVENT = "merge_group"


def load_event_context(event_name: str, event_path: str, repository: str) -> EventContext:
    """Build the event context from the runner's event file and GITHUB_REPOSITORY."""
    owner, sep, repo = (repository or "").partition("/")
    if not sep or not owner or not repo:
        raise ConfigurationError(f"GITHUB_REPOSITORY must be owner/repo; got {repository!r}")

    payload: dict[str, Any] = {}
    if event_path:
        path = Path(event_path)
        try:
            raw = json.loads(path.read_text(encoding="utf-8") or "{}")
        except (OSError, json.JSONDecodeError) as exc:
            raise NoContextError(f"Could not read event payload {path}: {exc}") from exc
        if isinstance(raw, dict):
            payload = raw
    return EventContext(name=event_name or "", payload=payload, owner=owner, repo=repo)


def _pull_request_plan(event: EventContext, raw: Any) -> PullRequestPlan:
    try:
        pr = PullRequestPayload.model_validate(raw)
    except ValidationError as exc:
        logger.debug("pull request payload rejected: %s", exc)
        raise NoContextError() from exc
    return PullRequestPlan(
        owner=event.owner,
        repo=event.repo,
        number=pr.number,
        head_owner=pr.head.repo.owner.login,
        head_repo=pr.head.repo.name,
        head_ref=pr.head.ref,
    )


def _merge_group_plans(
    event: EventContext, raw: Any, strategy: MergeGroupStrategy
) -> list[PullRequestPlan] | list[MergeGroupPlan]:
    try:
        group = MergeGroupPayload.model_validate(raw)
    except ValidationError as exc:
        logger.debug("merge group payload rejected: %s", exc)
        raise NoContextError() from exc

    use_pull_requests = strategy in (MergeGroupStrategy.AUTO, MergeGroupStrategy.PULL_REQUESTS)
    if use_pull_requests and group.pull_requests is not None:
        if not group.pull_requests:
            raise NoContextError()
        return [_pull_request_plan(event, pr.model_dump()) for pr in group.pull_requests]

    use_compare = strategy in (MergeGroupStrategy.AUTO, MergeGroupStrategy.COMPARE)
    if use_compare and group.has_comparison:
        return [
            MergeGroupPlan(
                owner=event.owner,
                repo=event.repo,
                base_sha=group.base_sha,
                head_sha=group.head_sha,
                head_ref=group.head_ref,
            )
        ]
    raise NoContextError()


def resolve_event(event: EventContext, strategy: MergeGroupStrategy = MergeGroupStrategy.AUTO) -> ResolvedEvent:
    payload = event.payload
    if payload.get("pull_request"):
        plans = [_pull_request_plan(event, payload["pull_request"])]
    elif event.name == MERGE_GROUP_EVENT and isinstance(payload.get("merge_group"), dict):
        plans = _merge_group_plans(event, payload["merge_group"], strategy)
    else:
        raise NoContextError()

    resolved = ResolvedEvent(plans=plans)
    logger.info("Resolved %s event into %d %s plan(s)", event.name or "unknown", len(resolved.plans), resolved.mode)
    return resolved
