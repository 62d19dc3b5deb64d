"""Error kinds and exceptions raised by the CLA check.

Every exception below is terminal: the entry point turns it into a failed run
with ``str(exc)`` as the message. Missing signatures are not an exception; they
are a failed ``EvaluationResult``.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    NO_CONTEXT = "no_context"
    FETCH_FAILURE = "fetch_failure"
    CONTRIBUTORS_LOAD_FAILURE = "contributors_load_failure"
    UNATTRIBUTED_COMMIT = "unattributed_commit"
    MISSING_SIGNATURES = "missing_signatures"


class ClaCheckError(RuntimeError):
    kind: ErrorKind = ErrorKind.NO_CONTEXT


class NoContextError(ClaCheckError):
    """Triggering event is neither a pull request nor a usable merge group."""

    kind = ErrorKind.NO_CONTEXT

    def __init__(self, message: str = "No pull request context available") -> None:
        super().__init__(message)


class ConfigurationError(ClaCheckError):
    """Required input missing or invalid; reported like a missing context."""

    kind = ErrorKind.NO_CONTEXT


class FetchFailureError(ClaCheckError):
    kind = ErrorKind.FETCH_FAILURE


class ContributorsLoadError(ClaCheckError):
    kind = ErrorKind.CONTRIBUTORS_LOAD_FAILURE


class UnattributedCommitError(ClaCheckError):
    kind = ErrorKind.UNATTRIBUTED_COMMIT

    def __init__(self, message: str = "PR contains commits without associated GitHub users") -> None:
        super().__init__(message)
