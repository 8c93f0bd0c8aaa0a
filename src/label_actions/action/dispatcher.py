"""Apply an ActionRecord to an issue or pull request.

Effects run one after another in a fixed order: comment, close, reopen, lock,
labels. Each effect is guarded only by its own field. A failing effect is logged
and recorded, and the remaining effects are still attempted.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from .errors import EffectError
from .github.client import IssueTracker
from .models import ActionRecord, IssueState

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DispatchResult:
    applied: tuple[str, ...] = ()
    failed: tuple[EffectError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failed


def _effects(
    record: ActionRecord, issue_number: int, tracker: IssueTracker
) -> list[tuple[str, Callable[[], None]]]:
    effects: list[tuple[str, Callable[[], None]]] = []
    if record.comment:
        body = record.comment
        effects.append(("comment", lambda: tracker.create_comment(issue_number, body)))
    if record.close:
        effects.append(("close", lambda: tracker.set_state(issue_number, IssueState.CLOSED)))
    if record.reopen:
        effects.append(("reopen", lambda: tracker.set_state(issue_number, IssueState.OPEN)))
    if record.lock and record.lock_reason is not None:
        reason = record.lock_reason
        effects.append(("lock", lambda: tracker.lock(issue_number, reason)))
    elif record.lock:
        effects.append(("lock", lambda: tracker.lock(issue_number)))
    if record.labels:
        labels = list(record.labels)
        effects.append(("labels", lambda: tracker.add_labels(issue_number, labels)))
    return effects


def plan(record: ActionRecord) -> list[str]:
    """Names of the effects `apply` would attempt for this record, in order."""

    names = []
    if record.comment:
        names.append("comment")
    if record.close:
        names.append("close")
    if record.reopen:
        names.append("reopen")
    if record.lock:
        names.append("lock")
    if record.labels:
        names.append("labels")
    return names


def apply(record: ActionRecord, issue_number: int, *, tracker: IssueTracker) -> DispatchResult:
    applied: list[str] = []
    failed: list[EffectError] = []

    for name, effect in _effects(record, issue_number, tracker):
        try:
            effect()
        except EffectError as e:
            logger.error(
                "Effect failed",
                extra={"effect": name, "issue_number": issue_number, "error": str(e)},
            )
            failed.append(e)
            continue
        applied.append(name)
        logger.debug("Effect applied", extra={"effect": name, "issue_number": issue_number})

    return DispatchResult(applied=tuple(applied), failed=tuple(failed))
