"""CLI entrypoint for label actions.

`run` handles the event of the current GitHub Actions job; `validate` checks a
local configuration file without talking to GitHub.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from label_actions import __version__
from label_actions.action.config import ActionSettings
from label_actions.action.controller import handle
from label_actions.action.dispatcher import plan
from label_actions.action.errors import LabelActionsError
from label_actions.action.events import load_label_event
from label_actions.action.github.client import GitHubIssueClient
from label_actions.action.logging import configure_logging, emit_workflow_command
from label_actions.action.resolver import load_label_actions

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="label-actions",
        description="Apply configured actions when a label is added to an issue or PR",
    )
    parser.add_argument("--version", action="version", version=f"label-actions {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser("run", help="Handle the labeled event of the current workflow run")
    run.add_argument(
        "--config-path",
        dest="configuration_path",
        default=None,
        help="Repository path of the label-actions YAML (overrides INPUT_CONFIGURATION-PATH)",
    )
    run.add_argument(
        "--event-path",
        type=Path,
        default=None,
        help="Webhook payload JSON file (overrides GITHUB_EVENT_PATH)",
    )
    mode = run.add_mutually_exclusive_group()
    mode.add_argument(
        "--perform",
        dest="perform",
        action="store_true",
        default=None,
        help="Apply the configured actions",
    )
    mode.add_argument(
        "--dry-run",
        dest="perform",
        action="store_false",
        help="Only log what would be done",
    )

    validate = subparsers.add_parser("validate", help="Validate a local label-actions YAML file")
    validate.add_argument("path", type=Path, help="Configuration file to validate")

    return parser


def _validate(path: Path) -> int:
    try:
        label_actions = load_label_actions(path.read_text(encoding="utf-8"))
    except OSError as e:
        print(f"Could not read {path}: {e}", file=sys.stderr)
        return 1
    except LabelActionsError as e:
        print(f"{path}: {e}", file=sys.stderr)
        return 1

    for label, record in sorted(label_actions.items()):
        effects = ", ".join(plan(record)) or "nothing"
        print(f"{label}: {effects}")
    print(f"{path}: {len(label_actions)} label(s) OK")
    return 0


def _run(args: argparse.Namespace, settings: ActionSettings) -> int:
    if args.configuration_path is not None:
        settings.configuration_path = args.configuration_path
    if args.perform is not None:
        settings.perform = args.perform
    if args.event_path is not None:
        settings.github_event_path = args.event_path

    try:
        settings.require_run_context()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    assert settings.github_event_path is not None
    tracker: GitHubIssueClient | None = None
    try:
        event = load_label_event(settings.github_event_path)
        repository = event.repository or settings.github_repository
        tracker = GitHubIssueClient(
            token=settings.github_token,
            repository=repository,
            base_url=settings.github_api_url,
        )
        outcome = handle(
            event,
            tracker=tracker,
            configuration_path=settings.configuration_path,
            perform=settings.perform,
            ref=settings.github_sha or None,
        )
    except (LabelActionsError, ValueError) as e:
        logger.exception("Label action failed")
        emit_workflow_command("error", str(e))
        return 1
    finally:
        if tracker is not None:
            tracker.close()

    if not outcome.ok:
        failed = outcome.dispatch.failed if outcome.dispatch is not None else ()
        for err in failed:
            emit_workflow_command("error", str(err))
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "validate":
        return _validate(args.path)

    try:
        settings = ActionSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check the action inputs):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.effective_log_level)
    return _run(args, settings)


if __name__ == "__main__":
    raise SystemExit(main())
