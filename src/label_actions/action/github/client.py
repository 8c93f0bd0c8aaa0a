"""GitHub issue-tracker client.

Wraps PyGithub for repository access and a plain requests session for the issue
mutations, keeping GitHub calls out of the dispatcher and making tests easy.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Protocol

import requests
from github import Auth, Github, GithubException
from github.Repository import Repository

from label_actions.action.errors import ConfigFetchError, EffectError
from label_actions.action.models import IssueState, LockReason

logger = logging.getLogger(__name__)


class IssueTracker(Protocol):
    """The operations label actions need from the platform."""

    def fetch_text(self, path: str, *, ref: str | None = None) -> str: ...

    def create_comment(self, issue_number: int, body: str) -> None: ...

    def add_labels(self, issue_number: int, labels: Sequence[str]) -> None: ...

    def set_state(self, issue_number: int, state: IssueState) -> None: ...

    def lock(self, issue_number: int, reason: LockReason | None = None) -> None: ...


class GitHubIssueClient:
    """IssueTracker backed by the GitHub REST API."""

    def __init__(
        self,
        *,
        token: str,
        repository: str,
        base_url: str = "https://api.github.com",
        repo: Repository | None = None,
        github_api: Github | None = None,
        session: requests.Session | None = None,
    ) -> None:
        if not token:
            raise ValueError("GitHub token is required")
        if not repository.strip("/"):
            raise ValueError("GitHub repository is required")

        self._repository_name = repository.strip("/")
        self._rest_base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": "label-actions",
            }
        )

        if repo is not None:
            self._repo = repo
            self._github = None
            logger.debug("Using injected Repository instance")
            return

        auth = Auth.Token(token)
        self._github = github_api or Github(auth=auth, base_url=self._rest_base_url)
        self._repo = self._github.get_repo(self._repository_name, lazy=True)
        logger.debug("Connected to repository", extra={"repo": self._repository_name})

    def _issues_url(self, *, issue_number: int, suffix: str = "") -> str:
        if issue_number <= 0:
            raise ValueError("issue_number must be a positive integer")
        if suffix and not suffix.startswith("/"):
            suffix = "/" + suffix
        return f"{self._rest_base_url}/repos/{self._repository_name}/issues/{issue_number}{suffix}"

    def fetch_text(self, path: str, *, ref: str | None = None) -> str:
        """Return the UTF-8 text of a file in the repository.

        Raises:
            ConfigFetchError: if the file is missing, is a directory or cannot be decoded.
        """

        norm = path.lstrip("/")
        try:
            if ref:
                contents = self._repo.get_contents(norm, ref=ref)
            else:
                contents = self._repo.get_contents(norm)
        except GithubException as e:
            raise ConfigFetchError(
                f"Could not fetch {path} from {self._repository_name}: {e.status} {e.data}"
            ) from e
        except requests.RequestException as e:
            raise ConfigFetchError(
                f"Could not fetch {path} from {self._repository_name}: {e}"
            ) from e

        if isinstance(contents, list):
            raise ConfigFetchError(f"{path} is a directory, expected a file")

        try:
            return contents.decoded_content.decode("utf-8")
        except (AssertionError, UnicodeDecodeError) as e:
            raise ConfigFetchError(f"Could not decode {path}: {e}") from e

    def _send(
        self,
        method: str,
        *,
        effect: str,
        issue_number: int,
        suffix: str = "",
        payload: dict[str, Any] | None = None,
    ) -> None:
        try:
            url = self._issues_url(issue_number=issue_number, suffix=suffix)
            resp = self._session.request(method, url, json=payload, timeout=30)
            resp.raise_for_status()
        except (requests.RequestException, ValueError) as e:
            raise EffectError(
                f"{effect} failed for {self._repository_name}#{issue_number}: {e}",
                effect=effect,
                issue_number=issue_number,
            ) from e

        logger.debug(
            "Issue updated",
            extra={
                "repo": self._repository_name,
                "issue_number": issue_number,
                "effect": effect,
                "status_code": resp.status_code,
            },
        )

    def create_comment(self, issue_number: int, body: str) -> None:
        self._send(
            "POST",
            effect="comment",
            issue_number=issue_number,
            suffix="comments",
            payload={"body": body},
        )

    def add_labels(self, issue_number: int, labels: Sequence[str]) -> None:
        self._send(
            "POST",
            effect="labels",
            issue_number=issue_number,
            suffix="labels",
            payload={"labels": list(labels)},
        )

    def set_state(self, issue_number: int, state: IssueState) -> None:
        effect = "close" if state is IssueState.CLOSED else "reopen"
        self._send(
            "PATCH",
            effect=effect,
            issue_number=issue_number,
            payload={"state": state.value},
        )

    def lock(self, issue_number: int, reason: LockReason | None = None) -> None:
        # No body locks without a reason.
        payload = {"lock_reason": reason.value} if reason is not None else None
        self._send(
            "PUT",
            effect="lock",
            issue_number=issue_number,
            suffix="lock",
            payload=payload,
        )

    def close(self) -> None:
        self._session.close()
        if self._github is not None:
            self._github.close()
