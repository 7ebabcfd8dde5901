"""
Audit event model.

One AuditEvent is written per completed search or stats call. Events are
write-only from this service's point of view.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, Field

AuditAction = Literal["search", "stats", "bulk_upload"]


class AuditEvent(BaseModel):
    action: AuditAction
    query: Optional[str] = None
    result_count: int = 0
    success: bool
    duration_ms: float
    actor_id: Optional[str] = None
    error_kind: Optional[str] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
