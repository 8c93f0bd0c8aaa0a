"""Label actions.

Apply a configured set of effects when a label is added to an issue or pull request:
- a YAML mapping from label name to actions, validated strictly
- comment, close, reopen, lock and add-labels effects applied in a fixed order
- dry-run by default, so a configuration can be tried before it acts
"""

__version__ = "0.1.0"

from label_actions.action.models import ActionRecord, LockReason
from label_actions.action.resolver import load_label_actions, resolve

__all__ = ["__version__", "ActionRecord", "LockReason", "load_label_actions", "resolve"]
