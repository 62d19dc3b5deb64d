"""Load the CLA allow-list (a YAML list of logins) from the repository.

Pull request plans read the file from the PR head repository at the head ref,
so a contributor can sign in the same PR that adds their first commit. Merge
group plans read it from the base repository at the merge-queue head ref.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import logging
from typing import Any

import httpx
import yaml

from cla_gate.models.error import ContributorsLoadError
from cla_gate.models.event import QueryPlan, ResolvedEvent
from cla_gate.services.github_client import GitHubAPIError, GitHubClient

logger = logging.getLogger(__name__)


def _file_location(plan: QueryPlan) -> tuple[str, str, str]:
    if plan.mode == "pull_request":
        return plan.head_owner, plan.head_repo, plan.head_ref
    return plan.owner, plan.repo, plan.head_ref


def decode_content(data: Any, path: str) -> str:
    """Text of a Contents API file object."""
    if not isinstance(data, dict) or data.get("type", "file") != "file" or "content" not in data:
        raise ContributorsLoadError(f"Contributors file {path} is not a file")
    content = data.get("content") or ""
    encoding = data.get("encoding") or "base64"
    if not isinstance(content, str) or encoding != "base64":
        raise ContributorsLoadError(f"Contributors file {path} has unsupported encoding {encoding!r}")
    try:
        decoded = base64.b64decode(content.encode("utf-8"), validate=False)
        return decoded.decode("utf-8")
    except (ValueError, UnicodeDecodeError, binascii.Error) as exc:
        raise ContributorsLoadError(f"Could not decode contributors file {path}: {exc}") from exc


def parse_contributors(text: str, path: str) -> list[str]:
    """Parse a YAML sequence of logins; an empty document is an empty list.

    BaseLoader keeps every scalar as text, so logins such as ``no`` or ``007``
    are not turned into booleans or numbers. Blank entries are dropped.
    """
    try:
        data = yaml.load(text, Loader=yaml.BaseLoader)
    except yaml.YAMLError as exc:
        raise ContributorsLoadError(f"Malformed contributors file {path}: {exc}") from exc
    if data is None:
        return []
    if not isinstance(data, list):
        raise ContributorsLoadError(
            f"Contributors file {path} must be a YAML list of logins; got {type(data).__name__}"
        )
    logins: list[str] = []
    for item in data:
        if not isinstance(item, str):
            raise ContributorsLoadError(f"Contributors file {path} entries must be logins; got {item!r}")
        if item.strip():
            logins.append(item)
    return logins


async def _contributors_for_plan(client: GitHubClient, plan: QueryPlan, path: str) -> list[str]:
    owner, repo, ref = _file_location(plan)
    try:
        data = await client.get_content(owner, repo, path, ref)
    except (GitHubAPIError, httpx.HTTPError) as exc:
        raise ContributorsLoadError(f"Failed to load contributors file {path} from {owner}/{repo}@{ref}: {exc}") from exc
    logins = parse_contributors(decode_content(data, path), path)
    logger.debug("%s/%s@%s %s: %d login(s)", owner, repo, ref, path, len(logins))
    return logins


async def load_contributors(client: GitHubClient, resolved: ResolvedEvent, path: str) -> list[str]:
    """Allow-lists for every plan, concatenated; duplicates are kept."""
    lists = await asyncio.gather(*(_contributors_for_plan(client, plan, path) for plan in resolved.plans))
    contributors = [login for logins in lists for login in logins]
    logger.info("Loaded %d contributor(s) from %s", len(contributors), path)
    return contributors
