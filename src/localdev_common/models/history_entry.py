"""One line of the command history."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, Field

Outcome = Literal["applied", "unchanged", "failed"]


class HistoryEntry(BaseModel):
    """A mutating command and what it did to the include directory."""

    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    actor: str = ""
    command: str
    site: str = ""
    options: dict[str, Any] = Field(default_factory=dict)
    outcome: Outcome = "applied"
    path: str | None = None
    error: str | None = None
    duration_ms: int | None = None

    def to_jsonl(self) -> str:
        return self.model_dump_json(exclude_none=True)
