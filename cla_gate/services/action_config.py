"""Run settings from action inputs and the runner environment.

Config: INPUT_GITHUB-TOKEN (or GITHUB_TOKEN / GH_TOKEN), INPUT_CONTRIBUTORS-FILE,
INPUT_MERGE-GROUP-STRATEGY, GITHUB_EVENT_NAME, GITHUB_EVENT_PATH,
GITHUB_REPOSITORY, GITHUB_API_URL, CLA_GATE_TIMEOUT_SECONDS, RUNNER_DEBUG.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from cla_gate.models.error import ConfigurationError
from cla_gate.models.event import MergeGroupStrategy
from cla_gate.services.action_runtime import get_input
from cla_gate.services.github_client import DEFAULT_API_URL

DEFAULT_CONTRIBUTORS_FILE = "CONTRIBUTORS.yml"


class ActionSettings(BaseModel):
    github_token: str = Field(..., min_length=1)
    contributors_file: str = Field(DEFAULT_CONTRIBUTORS_FILE, min_length=1)
    merge_group_strategy: MergeGroupStrategy = MergeGroupStrategy.AUTO
    event_name: str = ""
    event_path: str = ""
    repository: str = ""
    api_url: str = DEFAULT_API_URL
    timeout: float = Field(20.0, gt=0)
    debug: bool = False

    @field_validator("merge_group_strategy", mode="before")
    @classmethod
    def strategy_accepts_dashes(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower().replace("-", "_")
        return v


def _env_flag(environ: Mapping[str, str], name: str, default: bool = False) -> bool:
    raw = environ.get(name, "1" if default else "").strip().lower()
    return raw in {"1", "true", "yes", "on"}


def _env_timeout(environ: Mapping[str, str]) -> float:
    raw = (environ.get("CLA_GATE_TIMEOUT_SECONDS") or "20").strip()
    try:
        return max(1.0, float(raw))
    except ValueError:
        return 20.0


def _token_from_env(environ: Mapping[str, str]) -> str:
    token = get_input("github-token", environ)
    if not token:
        token = (environ.get("GITHUB_TOKEN") or environ.get("GH_TOKEN") or "").strip()
    return token


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> ActionSettings:
    """Settings from the environment; non-empty ``overrides`` (CLI flags) win."""
    env = os.environ if environ is None else environ
    values: dict[str, Any] = {
        "github_token": _token_from_env(env),
        "contributors_file": get_input("contributors-file", env) or DEFAULT_CONTRIBUTORS_FILE,
        "merge_group_strategy": get_input("merge-group-strategy", env) or MergeGroupStrategy.AUTO.value,
        "event_name": env.get("GITHUB_EVENT_NAME", ""),
        "event_path": env.get("GITHUB_EVENT_PATH", ""),
        "repository": env.get("GITHUB_REPOSITORY", ""),
        "api_url": (env.get("GITHUB_API_URL") or DEFAULT_API_URL).strip(),
        "timeout": _env_timeout(env),
        "debug": _env_flag(env, "RUNNER_DEBUG"),
    }
    for key, value in (overrides or {}).items():
        if value not in (None, ""):
            values[key] = value

    try:
        return ActionSettings(**values)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise ConfigurationError(f"Invalid action configuration: {problems}") from exc
