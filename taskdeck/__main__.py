"""Thin entrypoint for ``python -m taskdeck``."""

from __future__ import annotations

from taskdeck.app import main


if __name__ == "__main__":
    raise SystemExit(main())
