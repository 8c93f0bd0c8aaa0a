"""Resolve a label-actions configuration document into validated action records.

The document is a YAML mapping from label name to a mapping of options:

    needs-repro:
      comment: "Please add a minimal reproduction."
      labels: ["waiting-for-author"]
    spam:
      close: true
      lock: true
      lockReason: spam

Options outside the recognized set are ignored so that newer documents can be
read by older releases. A recognized option with the wrong type fails the whole
document.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

import yaml

from .errors import ConfigSchemaError
from .models import ActionRecord, LockReason

logger = logging.getLogger(__name__)

LabelActionMap = Mapping[str, ActionRecord]

_LOCK_REASONS: frozenset[str] = frozenset(r.value for r in LockReason)


def _is_string(value: object) -> bool:
    return isinstance(value, str)


def _is_boolean(value: object) -> bool:
    return isinstance(value, bool)


def _is_lock_reason(value: object) -> bool:
    return isinstance(value, str) and value in _LOCK_REASONS


def _is_string_list(value: object) -> bool:
    return isinstance(value, list) and all(isinstance(v, str) for v in value)


# config option -> (ActionRecord field, type check, expected description)
_OPTIONS: dict[str, tuple[str, Callable[[object], bool], str]] = {
    "comment": ("comment", _is_string, "string"),
    "close": ("close", _is_boolean, "boolean"),
    "reopen": ("reopen", _is_boolean, "boolean"),
    "lock": ("lock", _is_boolean, "boolean"),
    "lockReason": (
        "lock_reason",
        _is_lock_reason,
        "one of " + ", ".join(repr(r.value) for r in LockReason),
    ),
    "labels": ("labels", _is_string_list, "array of strings"),
}


def _resolve_entry(label: str, entry: object) -> ActionRecord:
    if entry is None:
        return ActionRecord()
    if not isinstance(entry, Mapping):
        raise ConfigSchemaError(
            f"found unexpected value for label {label} (should be a mapping of options)",
            label=label,
            expected="mapping",
        )

    values: dict[str, Any] = {}
    for option, value in entry.items():
        known = _OPTIONS.get(option) if isinstance(option, str) else None
        if known is None:
            logger.debug("Ignoring unknown option", extra={"label": label, "option": option})
            continue

        field_name, check, expected = known
        if not check(value):
            raise ConfigSchemaError.unexpected_type(label=label, option=option, expected=expected)
        values[field_name] = value

    if "lock_reason" in values:
        values["lock_reason"] = LockReason(values["lock_reason"])
    if "labels" in values:
        values["labels"] = tuple(values["labels"])
    return ActionRecord(**values)


_STR_TAG = "tag:yaml.org,2002:str"
_MERGE_TAG = "tag:yaml.org,2002:merge"


def _as_string_node(node: yaml.Node) -> yaml.Node:
    if not isinstance(node, yaml.ScalarNode) or node.tag in (_STR_TAG, _MERGE_TAG):
        return node
    return yaml.ScalarNode(_STR_TAG, node.value, node.start_mark, node.end_mark, node.style)


class _LabelDocumentLoader(yaml.SafeLoader):
    """SafeLoader that keeps top-level label names as written.

    YAML 1.1 reads labels such as `1.0`, `1234` or `yes` as numbers and booleans;
    label names are always strings.
    """

    def construct_document(self, node: yaml.Node) -> Any:
        if isinstance(node, yaml.MappingNode):
            node.value = [
                (_as_string_node(key_node), value_node) for key_node, value_node in node.value
            ]
        return super().construct_document(node)


def resolve(document: object) -> LabelActionMap:
    """Build the label -> ActionRecord map for a parsed configuration document.

    Raises:
        ConfigSchemaError: on the first option whose value has the wrong type.
    """

    if document is None:
        return MappingProxyType({})
    if not isinstance(document, Mapping):
        raise ConfigSchemaError("configuration must be a mapping of label names to actions")

    actions: dict[str, ActionRecord] = {}
    for label, entry in document.items():
        if not isinstance(label, str):
            raise ConfigSchemaError(
                f"found unexpected label name {label!r} (should be string)",
                expected="string",
            )
        actions[label] = _resolve_entry(label, entry)
    return MappingProxyType(actions)


def load_label_actions(text: str) -> LabelActionMap:
    """Parse YAML configuration text and resolve it."""

    try:
        document = yaml.load(text, Loader=_LabelDocumentLoader)  # noqa: S506 (SafeLoader subclass)
    except yaml.YAMLError as e:
        raise ConfigSchemaError(f"configuration is not valid YAML: {e}") from e
    return resolve(document)
