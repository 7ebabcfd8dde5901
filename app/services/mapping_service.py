"""
Mapping Service

Single-record lookup, bulk insert, administrative clear and startup seeding,
all routed through the fallback coordinator so they hit the same store that
serves searches.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..core.errors import NotFoundError
from ..data.seed_mappings import SEED_MAPPINGS
from ..models.audit import AuditEvent
from ..models.mapping import MappingCreate, MappingRecord
from ..models.query import InsertReport
from .audit import AuditSink
from .fallback import FallbackCoordinator

logger = logging.getLogger(__name__)


class MappingService:
    def __init__(self, coordinator: FallbackCoordinator, audit_sink: AuditSink):
        self.coordinator = coordinator
        self.audit_sink = audit_sink

    async def get_by_code(self, code: str) -> MappingRecord:
        record = await self.coordinator.run(lambda store: store.get_by_code(code), name="get_by_code")
        if record is None:
            raise NotFoundError(code)
        return record

    async def insert_many(self, records: Sequence[MappingCreate], *, actor_id: Optional[str] = None) -> InsertReport:
        start = time.perf_counter()
        report = await self.coordinator.run(lambda store: store.insert_many(records), name="insert_many")
        if report.rejected:
            logger.warning(
                "mappings_rejected",
                extra={"rejected": report.rejected_codes, "inserted_count": report.inserted_count},
            )
        await self.audit_sink.record(
            AuditEvent(
                action="bulk_upload",
                result_count=report.inserted_count,
                success=True,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
                actor_id=actor_id,
            )
        )
        return report

    async def clear(self) -> int:
        removed = await self.coordinator.run(lambda store: store.clear(), name="clear")
        logger.info("mappings_cleared", extra={"deleted_count": removed})
        return removed

    async def seed_if_empty(self, seed: Optional[Iterable[Mapping[str, Any]]] = None) -> int:
        """Insert the sample mappings when the active store holds none. Returns the inserted count."""
        stats = await self.coordinator.run(lambda store: store.stats(), name="seed_check")
        if stats.total_records > 0:
            logger.info("seed_skipped", extra={"existing_records": stats.total_records})
            return 0
        records = [MappingCreate.model_validate(item) for item in (seed or SEED_MAPPINGS)]
        report = await self.coordinator.run(lambda store: store.insert_many(records), name="seed")
        logger.info("seed_completed", extra={"inserted_count": report.inserted_count})
        return report.inserted_count
