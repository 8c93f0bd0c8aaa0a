"""Exceptions raised while resolving and applying label actions."""

from __future__ import annotations


class LabelActionsError(Exception):
    """Base class for all label-actions failures."""


class ConfigFetchError(LabelActionsError):
    """The configuration document could not be retrieved."""


class ConfigSchemaError(LabelActionsError):
    """A recognized option in the configuration has the wrong type.

    `label` and `option` identify the offending entry. Either can be None when the
    document is malformed above the level of a single option.
    """

    def __init__(
        self,
        message: str,
        *,
        label: str | None = None,
        option: str | None = None,
        expected: str | None = None,
    ) -> None:
        super().__init__(message)
        self.label = label
        self.option = option
        self.expected = expected

    @classmethod
    def unexpected_type(cls, *, label: str, option: str, expected: str) -> ConfigSchemaError:
        return cls(
            f"found unexpected type for {option} in label {label} (should be {expected})",
            label=label,
            option=option,
            expected=expected,
        )


class EffectError(LabelActionsError):
    """A single remote mutation against an item failed."""

    def __init__(self, message: str, *, effect: str, issue_number: int) -> None:
        super().__init__(message)
        self.effect = effect
        self.issue_number = issue_number


class EventPayloadError(LabelActionsError):
    """The trigger payload does not describe a label added to an item."""
