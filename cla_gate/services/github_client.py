"""Async GitHub REST client for the three read-only calls the check makes.

- bearer token auth
- one shared httpx.AsyncClient per run; use as ``async with``
- 4xx/5xx responses raise GitHubAPIError; wrongly shaped JSON raises UnexpectedResponseError
"""

from __future__ import annotations

import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
COMMITS_PER_PAGE = 100


class GitHubAPIError(RuntimeError):
    def __init__(self, status_code: int, url: str, body: str) -> None:
        super().__init__(f"GitHub API error {status_code} for {url}: {body[:200]}")
        self.status_code = status_code
        self.url = url


class UnexpectedResponseError(ValueError):
    """Successful response whose JSON does not have the expected shape."""

    def __init__(self, url: str, expected: str) -> None:
        super().__init__(f"Unexpected GitHub API response for {url}: expected {expected}")
        self.url = url


class GitHubClient:
    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_API_URL,
        user_agent: str = "cla-gate/1.0",
        timeout: float = 20.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": user_agent,
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if token:
            self._headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(timeout=timeout, headers=self._headers)

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_json(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        """GET JSON for a path or full URL."""
        url = path if path.startswith("http") else f"{self._base_url}{path}"
        r = await self._client.get(url, params=params)
        if r.status_code >= 400:
            raise GitHubAPIError(r.status_code, url, r.text)
        return r.json()

    async def list_pull_commits(self, owner: str, repo: str, number: int) -> list[dict]:
        path = f"/repos/{owner}/{repo}/pulls/{number}/commits"
        data = await self.get_json(path, params={"per_page": COMMITS_PER_PAGE})
        if not isinstance(data, list):
            raise UnexpectedResponseError(f"{self._base_url}{path}", "a list of commits")
        logger.debug("pull %s/%s#%s: %d commit(s)", owner, repo, number, len(data))
        return data

    async def compare_commits(self, owner: str, repo: str, base: str, head: str) -> dict:
        path = f"/repos/{owner}/{repo}/compare/{base}...{head}"
        data = await self.get_json(path)
        if not isinstance(data, dict):
            raise UnexpectedResponseError(f"{self._base_url}{path}", "a comparison object")
        logger.debug("compare %s/%s %s...%s: %d commit(s)", owner, repo, base, head, len(data.get("commits") or []))
        return data

    async def get_content(self, owner: str, repo: str, path: str, ref: str) -> Any:
        """Contents API response: a file object, or a list when ``path`` is a directory."""
        return await self.get_json(
            f"/repos/{owner}/{repo}/contents/{quote(path.lstrip('/'))}",
            params={"ref": ref},
        )
