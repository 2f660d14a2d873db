"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation and self-documenting fields (Field) without coupling the
  core to I/O libraries.
- The API responses are validated at the edge and the log entries serialize
  cleanly for the JSON/HTML exports.

These models describe *what* the panel holds, not *how* it is fetched or shown.
"""

from __future__ import annotations

import json
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class DistributionCatalog(BaseModel):
    """Response of the catalog endpoint."""

    distributions: list[str] = Field(
        ...,
        description="Opaque distribution identifiers the caller may invalidate.",
    )


class InvalidationRequest(BaseModel):
    """Body of the create-invalidation call."""

    paths: list[str] = Field(
        ...,
        min_length=1,
        description="Paths to submit for invalidation.",
    )


class OperationState(str, Enum):
    """Lifecycle of one user-triggered operation."""

    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class LogEntry(BaseModel):
    """One row of the operation log.

    Entries are frozen: created once, appended, rendered, never touched again.
    Which entry is active is tracked by the log itself.
    """

    model_config = ConfigDict(frozen=True)

    sequence: int = Field(
        ...,
        ge=0,
        description="Monotonic position in the log.",
    )
    header: str = Field(
        ...,
        min_length=1,
        description="Operation label plus the local time it was logged.",
    )
    detail_html: str = Field(
        default="",
        description="Escaped HTML fragment describing the operation inputs.",
    )
    payload: Any = Field(
        default=None,
        description="API record or error message, possibly JSON null.",
    )
    has_payload: bool = Field(
        default=False,
        description="False when the entry carries no payload block at all.",
    )
    created_at: datetime = Field(
        default_factory=datetime.now,
        description="Local time the entry was created.",
    )

    @property
    def anchor(self) -> str:
        return f"item-{self.sequence}"

    def pretty_payload(self) -> str:
        if not self.has_payload:
            return ""
        return pretty_payload(self.payload)


def pretty_payload(payload: Any) -> str:
    """Pretty-print a JSON value for the detail block (lossless)."""

    return json.dumps(payload, indent=2, ensure_ascii=False)
