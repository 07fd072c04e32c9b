"""Command-line entry point: query workflow runs and delete them."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import signal
import sys
from typing import Iterable, List, Optional, TextIO

from . import __version__
from .schemas.runs import build_criterion
from .services.github_errors import GitHubAPIError, GitHubConfigurationError, WorkflowNotFoundError
from .services.github_models import SELECTABLE_CONCLUSIONS, DeleteReport
from .services.runs import delete_workflow_runs, query_workflow_runs

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="actions-prune",
        description="Select and delete GitHub Actions workflow runs.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""examples:
  %(prog)s query octo repo CI --conclusion failure
  %(prog)s query octo repo CI --older-than-days 90 | %(prog)s delete octo repo
  %(prog)s delete octo repo 101 102 --dry-run
""",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    query = subparsers.add_parser("query", help="List run IDs of a workflow matching one filter")
    query.add_argument("owner", help="Repository owner")
    query.add_argument("repo", help="Repository name")
    query.add_argument("workflow", help="Workflow name (exact, case-sensitive)")
    criteria = query.add_mutually_exclusive_group(required=True)
    criteria.add_argument(
        "--conclusion",
        choices=[conclusion.value for conclusion in SELECTABLE_CONCLUSIONS],
        help="Select runs with this conclusion",
    )
    criteria.add_argument("--actor", help="Select runs triggered by this login")
    criteria.add_argument(
        "--older-than-days",
        type=_non_negative_int,
        metavar="N",
        help="Select runs started more than N days ago",
    )

    delete = subparsers.add_parser(
        "delete",
        help="Delete runs by ID (reads `query` output from stdin when no IDs are given)",
    )
    delete.add_argument("owner", help="Repository owner")
    delete.add_argument("repo", help="Repository name")
    delete.add_argument("run_ids", nargs="*", type=int, metavar="RUN_ID", help="Run IDs to delete")
    delete.add_argument("--dry-run", action="store_true", help="Print the run IDs without deleting")

    return parser


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError("must be zero or positive")
    return number


def read_run_ids(
    lines: Iterable[str],
    owner: Optional[str] = None,
    repo: Optional[str] = None,
) -> List[int]:
    """Collect run IDs from `query` JSON lines or bare integers.

    Records without a run ID (the no-match placeholder) are skipped. Records
    naming a different owner or repo than the one being pruned are rejected.
    """
    run_ids: List[int] = []
    for line in lines:
        line = line.strip()
        if not line:
            continue
        record = json.loads(line)
        if isinstance(record, dict):
            for key, expected in (("owner", owner), ("repo", repo)):
                value = record.get(key)
                if expected is not None and value is not None and value != expected:
                    raise ValueError(f"Record {key} {value!r} does not match {expected!r}: {line}")
            record = record.get("runId")
        if record is None:
            continue
        if isinstance(record, bool) or not isinstance(record, int):
            raise ValueError(f"Not a run ID: {line}")
        run_ids.append(record)
    return run_ids


async def _run_query(args: argparse.Namespace, out: TextIO) -> int:
    criterion = build_criterion(args.conclusion, args.actor, args.older_than_days)
    results = await query_workflow_runs(args.owner, args.repo, args.workflow, criterion)
    for result in results:
        record = {
            "owner": result.owner,
            "repo": result.repo,
            "workflowName": result.workflow_name,
            "runId": result.run_id,
        }
        out.write(json.dumps(record) + "\n")
    return EXIT_OK


async def _run_delete(args: argparse.Namespace, run_ids: List[int], out: TextIO) -> int:
    if args.dry_run:
        for run_id in run_ids:
            out.write(f"would delete {args.owner}/{args.repo} run {run_id}\n")
        return EXIT_OK

    cancel_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, cancel_event.set)
    except (NotImplementedError, RuntimeError):
        logger.debug("Signal handlers unavailable; Ctrl-C will abort immediately")

    try:
        report = await delete_workflow_runs(args.owner, args.repo, run_ids, cancel_event=cancel_event)
    finally:
        try:
            loop.remove_signal_handler(signal.SIGINT)
        except (NotImplementedError, RuntimeError):
            pass

    _print_report(report, out)
    return EXIT_OK if report.ok else EXIT_FAILURE


def _print_report(report: DeleteReport, out: TextIO) -> None:
    for outcome in report.outcomes:
        if outcome.deleted:
            status = "already deleted" if outcome.already_absent else "deleted"
        else:
            status = f"failed: {outcome.error}"
        out.write(f"run {outcome.run_id}: {status}\n")
    for run_id in report.skipped:
        out.write(f"run {run_id}: skipped (cancelled)\n")
    out.write(
        f"{len(report.succeeded)} deleted, {len(report.failed)} failed, {len(report.skipped)} skipped\n"
    )


def main(argv: Optional[List[str]] = None, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        if args.command == "query":
            return asyncio.run(_run_query(args, stdout))

        run_ids = list(args.run_ids)
        if not run_ids and not stdin.isatty():
            run_ids = read_run_ids(stdin, owner=args.owner, repo=args.repo)
        return asyncio.run(_run_delete(args, run_ids, stdout))
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_USAGE
    except GitHubConfigurationError as exc:
        print(f"configuration error: {exc}", file=sys.stderr)
        return EXIT_FAILURE
    except WorkflowNotFoundError as exc:
        print(f"not found: {exc}", file=sys.stderr)
        return EXIT_FAILURE
    except GitHubAPIError as exc:
        print(f"GitHub API error: {exc}", file=sys.stderr)
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
