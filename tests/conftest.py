"""Pytest configuration and shared payload builders."""

from __future__ import annotations

import base64
import json
from pathlib import Path
from typing import Any, Optional

import pytest

API = "https://api.github.com"


def commit_row(sha: str, login: Optional[str], account_type: str = "User") -> dict[str, Any]:
    """One entry as returned by the pulls/commits and compare endpoints."""
    author = None if login is None else {"login": login, "type": account_type, "id": 1}
    return {
        "sha": sha,
        "commit": {"message": f"commit {sha}", "author": {"name": login or "ghost", "email": "x@example.com"}},
        "author": author,
        "committer": author,
    }


def content_file(text: str, path: str = "CONTRIBUTORS.yml") -> dict[str, Any]:
    encoded = base64.b64encode(text.encode("utf-8")).decode("ascii")
    # The API wraps base64 content at 60 columns.
    wrapped = "\n".join(encoded[i : i + 60] for i in range(0, len(encoded), 60))
    return {"type": "file", "encoding": "base64", "path": path, "name": path.rsplit("/", 1)[-1], "content": wrapped}


def pull_request_payload(
    number: int = 7,
    head_owner: str = "octo",
    head_repo: str = "widgets",
    head_ref: str = "feature",
) -> dict[str, Any]:
    return {
        "number": number,
        "title": f"PR {number}",
        "head": {
            "ref": head_ref,
            "sha": f"head{number}",
            "repo": {"name": head_repo, "full_name": f"{head_owner}/{head_repo}", "owner": {"login": head_owner}},
        },
        "base": {"ref": "main"},
    }


@pytest.fixture
def write_event(tmp_path: Path):
    def _write(payload: dict[str, Any]) -> str:
        path = tmp_path / "event.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def runner_env(tmp_path: Path) -> dict[str, str]:
    """A minimal pull_request runner environment; tests fill in GITHUB_EVENT_PATH."""
    return {
        "INPUT_GITHUB-TOKEN": "test-token",
        "INPUT_CONTRIBUTORS-FILE": "CONTRIBUTORS.yml",
        "GITHUB_EVENT_NAME": "pull_request",
        "GITHUB_EVENT_PATH": "",
        "GITHUB_REPOSITORY": "octo/widgets",
        "GITHUB_API_URL": API,
        "GITHUB_OUTPUT": str(tmp_path / "github_output"),
    }
