"""Decide whether every human commit author has signed the CLA."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from cla_gate.models.commit import Commit
from cla_gate.models.error import UnattributedCommitError
from cla_gate.models.result import EvaluationResult
from cla_gate.services.action_runtime import ActionRuntime

logger = logging.getLogger(__name__)

MISSING_OUTPUT = "missing"


def human_authors(commits: Iterable[Commit]) -> list[str]:
    """Distinct non-bot author logins, sorted. Raises on any unattributed commit."""
    commits = list(commits)
    unattributed = [commit.sha for commit in commits if not commit.is_attributed]
    if unattributed:
        logger.debug("unattributed commits: %s", ", ".join(unattributed))
        raise UnattributedCommitError()
    return sorted({commit.author.login for commit in commits if not commit.author.is_bot})


def evaluate(commits: Iterable[Commit], contributors: Sequence[str]) -> EvaluationResult:
    authors = human_authors(commits)
    signed = set(contributors)
    missing = [author for author in authors if author not in signed]
    return EvaluationResult(authors=authors, missing=missing)


def report(result: EvaluationResult, runtime: ActionRuntime) -> None:
    if result.passed:
        logger.info("All %d contributor(s) have signed the CLA", len(result.authors))
        return
    logger.info("Not all contributors have signed the CLA. Missing: %s", ", ".join(result.missing))
    logger.debug("check failed: %s", result.kind.value)
    runtime.set_output(MISSING_OUTPUT, result.missing_output())
    runtime.set_failed(result.failure_message())
