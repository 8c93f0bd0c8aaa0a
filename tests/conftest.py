"""Test configuration and fixtures."""

from __future__ import annotations

import logging
from unittest.mock import Mock

import pytest

from label_actions.action.github.client import GitHubIssueClient

CONFIG_YAML = """\
needs-repro:
  comment: Please add a minimal reproduction.
  labels:
    - waiting-for-author
spam:
  close: true
  lock: true
  lockReason: spam
wontfix:
  comment: Closing as won't fix.
  close: true
"""


@pytest.fixture
def config_yaml() -> str:
    """Provide a small, valid label-actions document."""
    return CONFIG_YAML


@pytest.fixture
def tracker(config_yaml: str) -> Mock:
    """Provide an issue tracker double serving `config_yaml`."""
    mock_tracker = Mock(spec=GitHubIssueClient)
    mock_tracker.fetch_text.return_value = config_yaml
    return mock_tracker


@pytest.fixture(autouse=True)
def clean_action_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keep the runner's environment and any local .env out of settings tests."""
    for name in (
        "INPUT_REPO-TOKEN",
        "GITHUB_TOKEN",
        "INPUT_CONFIGURATION-PATH",
        "INPUT_PERFORM",
        "GITHUB_REPOSITORY",
        "GITHUB_EVENT_PATH",
        "GITHUB_SHA",
        "GITHUB_API_URL",
        "LOG_LEVEL",
        "RUNNER_DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo `configure_logging` so handlers don't outlive a captured stdout."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
