"""GitHub integration for label actions."""

from label_actions.action.github.client import GitHubIssueClient, IssueTracker

__all__ = ["GitHubIssueClient", "IssueTracker"]
