"""Handle one label-added event from start to finish."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from .dispatcher import DispatchResult, apply, plan
from .github.client import IssueTracker
from .models import LabelEvent
from .resolver import load_label_actions

logger = logging.getLogger(__name__)


class RunStatus(str, Enum):
    NO_ACTION = "no_action"
    DRY_RUN = "dry_run"
    PERFORMED = "performed"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class RunOutcome:
    status: RunStatus
    label_name: str
    issue_number: int
    dispatch: DispatchResult | None = None

    @property
    def ok(self) -> bool:
        return self.status is not RunStatus.FAILED


def handle(
    event: LabelEvent,
    *,
    tracker: IssueTracker,
    configuration_path: str,
    perform: bool,
    ref: str | None = None,
) -> RunOutcome:
    """Resolve the configuration and run the action configured for the event's label.

    Fetch and schema errors propagate. Effect errors are reported in the outcome.
    """

    item = f"{event.repository or ''}#{event.issue_number}"
    logger.debug("Label added", extra={"label": event.label_name, "item": item})

    logger.debug("Loading config", extra={"path": configuration_path, "ref": ref})
    label_actions = load_label_actions(tracker.fetch_text(configuration_path, ref=ref))

    record = label_actions.get(event.label_name)
    if record is None:
        logger.debug(f"Ignoring label {event.label_name}, no action found in config.")
        return RunOutcome(
            status=RunStatus.NO_ACTION,
            label_name=event.label_name,
            issue_number=event.issue_number,
        )

    if not perform:
        logger.info(
            f"{item} would have been actioned on (dry-run)",
            extra={"label": event.label_name, "effects": plan(record)},
        )
        return RunOutcome(
            status=RunStatus.DRY_RUN,
            label_name=event.label_name,
            issue_number=event.issue_number,
        )

    logger.info(f"{item} performing action for label {event.label_name}")
    result = apply(record, event.issue_number, tracker=tracker)
    return RunOutcome(
        status=RunStatus.PERFORMED if result.ok else RunStatus.FAILED,
        label_name=event.label_name,
        issue_number=event.issue_number,
        dispatch=result,
    )
