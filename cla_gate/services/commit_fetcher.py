"""Fetch the commits under review for a resolved event."""

from __future__ import annotations

import asyncio
import logging

import httpx
from pydantic import ValidationError

from cla_gate.models.commit import Commit, CommitList
from cla_gate.models.error import FetchFailureError
from cla_gate.models.event import MergeGroupPlan, PullRequestPlan, QueryPlan, ResolvedEvent
from cla_gate.services.github_client import GitHubAPIError, GitHubClient, UnexpectedResponseError

logger = logging.getLogger(__name__)


async def _pull_request_commits(client: GitHubClient, plan: PullRequestPlan) -> list[Commit]:
    rows = await client.list_pull_commits(plan.owner, plan.repo, plan.number)
    return [Commit.model_validate(row) for row in rows]


async def _merge_group_commits(client: GitHubClient, plan: MergeGroupPlan) -> list[Commit]:
    data = await client.compare_commits(plan.owner, plan.repo, plan.base_sha, plan.head_sha)
    return CommitList.model_validate(data).commits


async def _commits_for_plan(client: GitHubClient, plan: QueryPlan) -> list[Commit]:
    try:
        if plan.mode == "pull_request":
            return await _pull_request_commits(client, plan)
        return await _merge_group_commits(client, plan)
    except (GitHubAPIError, UnexpectedResponseError, httpx.HTTPError, ValidationError) as exc:
        raise FetchFailureError(f"Failed to fetch commits: {exc}") from exc


async def fetch_commits(client: GitHubClient, resolved: ResolvedEvent) -> list[Commit]:
    """All commits in scope, concatenated in plan order. First failure wins."""
    batches = await asyncio.gather(*(_commits_for_plan(client, plan) for plan in resolved.plans))
    commits = [commit for batch in batches for commit in batch]
    logger.info("Fetched %d commit(s) across %d %s plan(s)", len(commits), len(resolved.plans), resolved.mode)
    return commits
