from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class LockReason(str, Enum):
    OFF_TOPIC = "off-topic"
    TOO_HEATED = "too heated"
    RESOLVED = "resolved"
    SPAM = "spam"


class IssueState(str, Enum):
    OPEN = "open"
    CLOSED = "closed"


@dataclass(frozen=True, slots=True)
class ActionRecord:
    """Everything to do to an item when one label is added to it."""

    comment: str | None = None
    close: bool = False
    reopen: bool = False
    lock: bool = False
    lock_reason: LockReason | None = None
    labels: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class LabelEvent:
    """A label that was just added to an issue or pull request."""

    label_name: str
    issue_number: int
    repository: str | None = None
