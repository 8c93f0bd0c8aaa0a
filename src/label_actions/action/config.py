"""Settings for a label-actions run.

Configuration is loaded from:
- the environment GitHub Actions provides to a step (`INPUT_*`, `GITHUB_*`)
- and a local `.env` file (if present), which is handy when running locally

Action inputs reach the process as `INPUT_<NAME>` with the input name upper-cased
and hyphens kept, e.g. `INPUT_CONFIGURATION-PATH`.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONFIGURATION_PATH = ".github/label-actions.yml"


class ActionSettings(BaseSettings):
    """Settings for one invocation.

    Environment variables:
    - INPUT_REPO-TOKEN (or GITHUB_TOKEN)
    - INPUT_CONFIGURATION-PATH  (optional)
    - INPUT_PERFORM             (optional, dry-run unless truthy)
    - GITHUB_REPOSITORY, GITHUB_EVENT_PATH, GITHUB_SHA, GITHUB_API_URL
    - LOG_LEVEL, RUNNER_DEBUG   (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `ActionSettings(_env_file=path_to_env)`.
    """

    github_token: str = Field(
        default="",
        validation_alias=AliasChoices("INPUT_REPO-TOKEN", "GITHUB_TOKEN"),
        description="Token used to read the configuration and update items",
    )
    configuration_path: str = Field(
        default=DEFAULT_CONFIGURATION_PATH,
        validation_alias="INPUT_CONFIGURATION-PATH",
        description="Path of the label-actions YAML file in the repository",
    )
    perform: bool = Field(
        default=False,
        validation_alias="INPUT_PERFORM",
        description="Apply the actions; when false, only log what would happen",
    )

    github_repository: str = Field(
        default="",
        validation_alias="GITHUB_REPOSITORY",
        description="Repository the workflow runs in ('owner/repo')",
    )
    github_event_path: Path | None = Field(
        default=None,
        validation_alias="GITHUB_EVENT_PATH",
        description="Path of the JSON webhook payload that triggered the run",
    )
    github_sha: str = Field(
        default="",
        validation_alias="GITHUB_SHA",
        description="Commit the configuration is read at",
    )
    github_api_url: str = Field(
        default="https://api.github.com",
        validation_alias="GITHUB_API_URL",
        description="GitHub API base URL (useful for GitHub Enterprise)",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )
    runner_debug: bool = Field(
        default=False,
        validation_alias="RUNNER_DEBUG",
        description="Set by GitHub when step debug logging is enabled",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("perform", "runner_debug", mode="before")
    @classmethod
    def _blank_is_false(cls, value: object) -> object:
        # Unset action inputs arrive as empty strings.
        if isinstance(value, str) and not value.strip():
            return False
        return value

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.runner_debug else self.log_level

    def require_run_context(self) -> None:
        """Raise ValueError unless everything a real run needs is configured."""

        missing = []
        if not self.github_token.strip():
            missing.append("INPUT_REPO-TOKEN (or GITHUB_TOKEN)")
        if self.github_event_path is None:
            missing.append("GITHUB_EVENT_PATH")
        if missing:
            raise ValueError("Missing required settings: " + ", ".join(missing))
