"""Append-only JSONL history of add / remove / reload.

The site files themselves stay the only state; this log just records who ran
what and whether anything changed. A history write never changes the outcome
of the command it describes.
"""

from __future__ import annotations

import getpass
import os
import time
from contextlib import contextmanager
from typing import Any, Generator

from rich.console import Console
from rich.markup import escape

from localdev_common import HistoryEntry, get_config

console = Console()


def _actor() -> str:
    if os.environ.get("LOCALDEV_ACTOR"):
        return os.environ["LOCALDEV_ACTOR"]
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return ""


def append(entry: HistoryEntry) -> bool:
    """Append ``entry`` to the history file; False (with a warning) if it cannot be written."""
    cfg = get_config()
    if not cfg.history_enabled:
        return False
    try:
        cfg.history_path.parent.mkdir(parents=True, exist_ok=True)
        with open(cfg.history_path, "a") as f:
            f.write(entry.to_jsonl() + "\n")
    except OSError as exc:
        console.print(f"[dim]History not recorded ({escape(str(exc))})[/dim]")
        return False
    return True


@contextmanager
def record(command: str, site: str = "", **options: Any) -> Generator[HistoryEntry, None, None]:
    """Time the wrapped command and append its entry once it finishes.

    The body may set ``entry.outcome = "unchanged"`` or ``entry.path``; an
    exception marks the entry failed and is re-raised untouched.
    """
    entry = HistoryEntry(actor=_actor(), command=command, site=site, options=options)
    start = time.monotonic()
    try:
        yield entry
    except Exception as exc:
        entry.outcome = "failed"
        entry.error = str(exc)
        raise
    finally:
        entry.duration_ms = int((time.monotonic() - start) * 1000)
        append(entry)
