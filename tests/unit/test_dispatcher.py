"""Unit tests for applying action records (mocked tracker)."""

from __future__ import annotations

import logging
from unittest.mock import Mock, call

import pytest

from label_actions.action.dispatcher import apply, plan
from label_actions.action.errors import EffectError
from label_actions.action.github.client import GitHubIssueClient
from label_actions.action.models import ActionRecord, IssueState, LockReason


def _tracker() -> Mock:
    return Mock(spec=GitHubIssueClient)


def test_effects_run_in_fixed_order() -> None:
    tracker = _tracker()
    record = ActionRecord(comment="hi", close=True, labels=("x",))

    result = apply(record, 7, tracker=tracker)

    assert tracker.mock_calls == [
        call.create_comment(7, "hi"),
        call.set_state(7, IssueState.CLOSED),
        call.add_labels(7, ["x"]),
    ]
    assert result.ok
    assert result.applied == ("comment", "close", "labels")


def test_labels_only_issues_a_single_add_labels_call() -> None:
    tracker = _tracker()

    apply(ActionRecord(labels=("a", "b")), 3, tracker=tracker)

    assert tracker.mock_calls == [call.add_labels(3, ["a", "b"])]


@pytest.mark.parametrize("reason", list(LockReason))
def test_lock_with_reason(reason: LockReason) -> None:
    tracker = _tracker()

    apply(ActionRecord(lock=True, lock_reason=reason), 5, tracker=tracker)

    tracker.lock.assert_called_once_with(5, reason)
    assert tracker.lock.call_args.args[1].value == reason.value


def test_lock_without_reason() -> None:
    tracker = _tracker()

    apply(ActionRecord(lock=True), 5, tracker=tracker)

    tracker.lock.assert_called_once_with(5)


def test_lock_reason_without_lock_does_nothing() -> None:
    tracker = _tracker()

    apply(ActionRecord(lock_reason=LockReason.SPAM), 5, tracker=tracker)

    assert tracker.mock_calls == []


def test_close_and_reopen_are_independent() -> None:
    tracker = _tracker()

    apply(ActionRecord(close=True, reopen=True), 9, tracker=tracker)

    assert tracker.mock_calls == [
        call.set_state(9, IssueState.CLOSED),
        call.set_state(9, IssueState.OPEN),
    ]


def test_empty_comment_is_skipped() -> None:
    tracker = _tracker()

    result = apply(ActionRecord(comment=""), 1, tracker=tracker)

    assert tracker.mock_calls == []
    assert result.applied == ()


def test_failed_effect_does_not_stop_the_rest(caplog: pytest.LogCaptureFixture) -> None:
    tracker = _tracker()
    error = EffectError("comment failed", effect="comment", issue_number=11)
    tracker.create_comment.side_effect = error
    record = ActionRecord(comment="hi", close=True, lock=True, labels=("x",))

    with caplog.at_level(logging.ERROR):
        result = apply(record, 11, tracker=tracker)

    tracker.set_state.assert_called_once_with(11, IssueState.CLOSED)
    tracker.lock.assert_called_once_with(11)
    tracker.add_labels.assert_called_once_with(11, ["x"])
    assert not result.ok
    assert result.failed == (error,)
    assert result.applied == ("close", "lock", "labels")

    failures = [r for r in caplog.records if r.getMessage() == "Effect failed"]
    assert len(failures) == 1
    assert failures[0].effect == "comment"
    assert failures[0].issue_number == 11


def test_plan_lists_effects_in_order() -> None:
    record = ActionRecord(
        comment="c",
        close=True,
        reopen=True,
        lock=True,
        lock_reason=LockReason.RESOLVED,
        labels=("l",),
    )

    assert plan(record) == ["comment", "close", "reopen", "lock", "labels"]
    assert plan(ActionRecord()) == []
