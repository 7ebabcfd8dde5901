"""
Stats/Facet Aggregator

Passes the active store's unfiltered summary through unchanged for dashboards
and derives the distinct category and chapter lists from it.
"""
from __future__ import annotations

import time
from typing import List, Optional

from ..models.audit import AuditEvent
from ..models.query import MappingStats
from .audit import AuditSink
from .fallback import FallbackCoordinator


class StatsAggregator:
    def __init__(self, coordinator: FallbackCoordinator, audit_sink: AuditSink):
        self.coordinator = coordinator
        self.audit_sink = audit_sink

    async def _collect(self) -> MappingStats:
        return await self.coordinator.run(lambda store: store.stats(), name="stats")

    async def get_stats(self, *, actor_id: Optional[str] = None) -> MappingStats:
        start = time.perf_counter()
        try:
            stats = await self._collect()
        except Exception as e:
            await self._audit(False, 0, start, actor_id, getattr(e, "kind", type(e).__name__))
            raise
        await self._audit(True, stats.total_records, start, actor_id)
        return stats

    async def _audit(self, success: bool, count: int, start: float,
                     actor_id: Optional[str], error_kind: Optional[str] = None) -> None:
        await self.audit_sink.record(
            AuditEvent(
                action="stats",
                result_count=count,
                success=success,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
                actor_id=actor_id,
                error_kind=error_kind,
            )
        )

    async def get_categories(self) -> List[str]:
        return sorted((await self._collect()).categories)

    async def get_chapters(self) -> List[str]:
        return sorted((await self._collect()).chapters)
