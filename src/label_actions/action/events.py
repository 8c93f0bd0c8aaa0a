"""Read the `labeled` webhook payload GitHub Actions writes to GITHUB_EVENT_PATH."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .errors import EventPayloadError
from .models import LabelEvent


def parse_label_event(payload: dict[str, Any]) -> LabelEvent:
    """Extract the added label and the item number from an issues/pull_request payload.

    Raises:
        EventPayloadError: if the payload has no label name or no item number.
    """

    label = payload.get("label")
    label_name = label.get("name") if isinstance(label, dict) else None
    if not isinstance(label_name, str) or not label_name:
        raise EventPayloadError("Event payload has no label name; expected a 'labeled' event")

    issue_number: object = None
    for key in ("issue", "pull_request"):
        item = payload.get(key)
        if isinstance(item, dict):
            issue_number = item.get("number")
            break
    if isinstance(issue_number, bool) or not isinstance(issue_number, int) or issue_number <= 0:
        raise EventPayloadError("Event payload has no issue or pull request number")

    repository: str | None = None
    repo_raw = payload.get("repository")
    if isinstance(repo_raw, dict):
        full_name = repo_raw.get("full_name")
        if isinstance(full_name, str) and full_name.strip():
            repository = full_name.strip()

    return LabelEvent(label_name=label_name, issue_number=issue_number, repository=repository)


def load_label_event(path: Path) -> LabelEvent:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise EventPayloadError(f"Could not read event payload {path}: {e}") from e
    if not isinstance(raw, dict):
        raise EventPayloadError(f"Event payload {path} is not a JSON object")
    return parse_label_event(raw)
