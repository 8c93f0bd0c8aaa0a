"""Console script entrypoint; the implementation lives in `label_actions.action.main`."""

from __future__ import annotations

from label_actions.action.main import main

__all__ = ["main"]


if __name__ == "__main__":
    raise SystemExit(main())
