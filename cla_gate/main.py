"""Entry point: resolve the event, fetch commits and allow-lists, gate, report.

Every error is caught here and becomes a failed run; nothing below this module
decides on exit codes.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from collections.abc import Mapping, Sequence
from typing import Optional

from cla_gate.models.error import ClaCheckError
from cla_gate.models.event import MergeGroupStrategy
from cla_gate.services.action_config import ActionSettings, load_settings
from cla_gate.services.action_runtime import ActionRuntime
from cla_gate.services.commit_fetcher import fetch_commits
from cla_gate.services.contributors_loader import load_contributors
from cla_gate.services.event_resolver import load_event_context, resolve_event
from cla_gate.services.gatekeeper import evaluate, report
from cla_gate.services.github_client import GitHubClient

logger = logging.getLogger("cla_gate")


def _setup_logging(verbose: bool = False) -> logging.Logger:
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        logger.addHandler(handler)
    logger.propagate = False
    return logger


async def check(settings: ActionSettings, runtime: ActionRuntime) -> None:
    event = load_event_context(settings.event_name, settings.event_path, settings.repository)
    resolved = resolve_event(event, settings.merge_group_strategy)
    async with GitHubClient(settings.github_token, base_url=settings.api_url, timeout=settings.timeout) as client:
        commits, contributors = await asyncio.gather(
            fetch_commits(client, resolved),
            load_contributors(client, resolved, settings.contributors_file),
        )
    report(evaluate(commits, contributors), runtime)


async def run(
    runtime: Optional[ActionRuntime] = None,
    environ: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, object]] = None,
) -> int:
    """One evaluation. Returns the process exit code (0 pass, 1 fail)."""
    runtime = runtime or ActionRuntime(environ)
    try:
        settings = load_settings(environ, overrides)
        if settings.debug:
            logger.setLevel(logging.DEBUG)
        await check(settings, runtime)
    except ClaCheckError as exc:
        logger.debug("check aborted: %s", exc.kind.value)
        runtime.set_failed(str(exc))
    except Exception as exc:
        logger.exception("Unexpected error during CLA check")
        runtime.set_failed(str(exc) or exc.__class__.__name__)
    return runtime.exit_code


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="cla-gate",
        description="Fail when a human commit author has not signed the CLA.",
    )
    parser.add_argument("--github-token", default="", help="token for the GitHub API; defaults to INPUT_GITHUB-TOKEN")
    parser.add_argument("--contributors-file", default="", help="path of the YAML allow-list in the repository")
    parser.add_argument(
        "--merge-group-strategy",
        choices=[s.value for s in MergeGroupStrategy],
        default="",
        help="how merge_group events are resolved (default: auto)",
    )
    parser.add_argument("--event-name", default="", help="defaults to GITHUB_EVENT_NAME")
    parser.add_argument("--event-path", default="", help="defaults to GITHUB_EVENT_PATH")
    parser.add_argument("--repository", default="", help="owner/repo; defaults to GITHUB_REPOSITORY")
    parser.add_argument("--api-url", default="", help="defaults to GITHUB_API_URL")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    overrides = {
        "github_token": args.github_token,
        "contributors_file": args.contributors_file,
        "merge_group_strategy": args.merge_group_strategy,
        "event_name": args.event_name,
        "event_path": args.event_path,
        "repository": args.repository,
        "api_url": args.api_url,
        "debug": True if args.verbose else None,
    }
    _setup_logging(args.verbose)
    return asyncio.run(run(overrides=overrides))


if __name__ == "__main__":
    raise SystemExit(main())
