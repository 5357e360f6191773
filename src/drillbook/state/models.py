"""Persisted progress models."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List

from pydantic import BaseModel, Field


class CompletionState(BaseModel):
    """Serialized completion set: links of problems marked done."""

    links: List[str] = Field(default_factory=list)
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


__all__ = ["CompletionState"]
