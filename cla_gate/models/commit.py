"""Commit and account shapes as returned by the GitHub REST API.

Only the fields the check reads are modelled; everything else in the API
payload is ignored.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class Account(BaseModel):
    """GitHub account linked to a commit. type is "User" or "Bot"."""

    login: Optional[str] = None
    type: str = "User"

    @property
    def is_bot(self) -> bool:
        return self.type.lower() == "bot"


class Commit(BaseModel):
    sha: str
    author: Optional[Account] = None

    @property
    def is_attributed(self) -> bool:
        return self.author is not None and bool(self.author.login)


class CommitList(BaseModel):
    """Wrapper for the compare endpoint, whose commits sit under a key."""

    commits: list[Commit] = Field(default_factory=list)
