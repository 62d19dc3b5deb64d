from __future__ import annotations

import io

import pytest

from cla_gate.models.commit import Commit
from cla_gate.models.error import ErrorKind, UnattributedCommitError
from cla_gate.models.result import EvaluationResult
from cla_gate.services.action_runtime import ActionRuntime
from cla_gate.services.gatekeeper import evaluate, human_authors, report

from conftest import commit_row


def _commits(*rows: dict) -> list[Commit]:
    return [Commit.model_validate(row) for row in rows]


def test_missing_author_reported_and_bot_ignored() -> None:
    commits = _commits(
        commit_row("a1", "alice"),
        commit_row("b1", "bob"),
        commit_row("c1", "ci-bot", "Bot"),
    )
    result = evaluate(commits, ["alice"])

    assert not result.passed
    assert result.missing == ["bob"]
    assert result.kind is ErrorKind.MISSING_SIGNATURES
    assert result.missing_output() == "@bob"


def test_all_authors_signed_passes() -> None:
    result = evaluate(_commits(commit_row("a1", "alice")), ["alice", "carol"])

    assert result.passed
    assert result.authors == ["alice"]
    assert result.missing == []
    assert result.kind is None


@pytest.mark.parametrize("account_type", ["Bot", "BOT", "bot"])
def test_bot_type_is_case_insensitive(account_type: str) -> None:
    result = evaluate(_commits(commit_row("a1", "renovate", account_type)), [])
    assert result.passed
    assert result.authors == []


def test_authors_are_deduplicated_and_sorted() -> None:
    commits = _commits(
        commit_row("1", "zed"),
        commit_row("2", "amy"),
        commit_row("3", "zed"),
        commit_row("4", "mo"),
    )
    assert human_authors(commits) == ["amy", "mo", "zed"]

    result = evaluate(commits, ["mo"])
    assert result.missing == ["amy", "zed"]
    assert result.missing_output() == "@amy, @zed"
    assert result.failure_message() == "Missing CLA signatures for 2 contributor(s)"


def test_unattributed_commit_aborts_even_when_others_signed() -> None:
    commits = _commits(commit_row("a1", "alice"), commit_row("x1", None))

    with pytest.raises(UnattributedCommitError) as exc_info:
        evaluate(commits, ["alice"])

    assert exc_info.value.kind is ErrorKind.UNATTRIBUTED_COMMIT
    assert "without associated GitHub users" in str(exc_info.value)


def test_author_without_login_counts_as_unattributed() -> None:
    commits = [Commit(sha="a1", author={"login": "", "type": "User"})]
    with pytest.raises(UnattributedCommitError):
        evaluate(commits, [])


def test_membership_is_case_sensitive() -> None:
    result = evaluate(_commits(commit_row("a1", "Alice")), ["alice"])
    assert result.missing == ["Alice"]


def test_empty_allow_list_reports_every_human() -> None:
    commits = _commits(commit_row("1", "dave"), commit_row("2", "erin"), commit_row("3", "dependabot[bot]", "Bot"))
    assert evaluate(commits, []).missing == ["dave", "erin"]


def test_evaluation_is_repeatable() -> None:
    commits = _commits(commit_row("1", "bob"), commit_row("2", "alice"), commit_row("3", "bob"))
    first = evaluate(commits, [])
    second = evaluate(list(reversed(commits)), [])
    assert first == second
    assert first.missing_output() == "@alice, @bob"


def test_report_success_sets_nothing() -> None:
    stream = io.StringIO()
    runtime = ActionRuntime(environ={}, stream=stream)

    report(EvaluationResult(authors=["alice"], missing=[]), runtime)

    assert runtime.exit_code == 0
    assert runtime.outputs == {}
    assert stream.getvalue() == ""


def test_report_failure_sets_output_and_fails(tmp_path, caplog) -> None:
    output_file = tmp_path / "out"
    stream = io.StringIO()
    runtime = ActionRuntime(environ={"GITHUB_OUTPUT": str(output_file)}, stream=stream)

    with caplog.at_level("INFO", logger="cla_gate"):
        report(EvaluationResult(authors=["alice", "bob"], missing=["alice", "bob"]), runtime)

    assert runtime.exit_code == 1
    assert runtime.outputs == {"missing": "@alice, @bob"}
    assert output_file.read_text(encoding="utf-8") == "missing=@alice, @bob\n"
    assert "::error::Missing CLA signatures for 2 contributor(s)" in stream.getvalue()
    assert "Not all contributors have signed the CLA. Missing: alice, bob" in caplog.text
