"""
Embedded mapping store.

Keeps the record set in process memory, keyed by namaste_code, and evaluates
queries with the shared ranking module. It is the last fallback tier and can
be seeded with the built-in sample mappings so search keeps working when no
other backend is reachable.
"""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence

from ..core.errors import DuplicateKeyError
from ..models.mapping import MappingCreate, MappingRecord
from ..models.query import InsertReport, MappingStats, QueryDescriptor, RejectedRecord, ResultPage
from ..services import ranking
from .base import MappingStore

logger = logging.getLogger(__name__)


def stamp(item: MappingCreate, now: datetime) -> MappingRecord:
    data = item.model_dump(exclude={"created_at", "updated_at"})
    return MappingRecord.model_validate({**data, "created_at": now, "updated_at": now})


class EmbeddedMappingStore(MappingStore):
    name = "embedded"

    def __init__(self, seed: Optional[Iterable[Mapping[str, Any]]] = None):
        self._records: Dict[str, MappingRecord] = {}
        self._write_lock = asyncio.Lock()
        if seed:
            now = datetime.now(timezone.utc)
            for item in seed:
                record = stamp(MappingCreate.model_validate(item), now)
                self._records.setdefault(record.namaste_code, record)
            logger.info("embedded_store_seeded", extra={"records": len(self._records)})

    async def _load(self) -> Dict[str, MappingRecord]:
        return self._records

    async def _commit(self, records: Dict[str, MappingRecord]) -> None:
        self._records = records

    async def find(self, descriptor: QueryDescriptor) -> ResultPage:
        records = await self._load()
        return ranking.execute(records.values(), descriptor)

    async def get_by_code(self, code: str) -> Optional[MappingRecord]:
        records = await self._load()
        return records.get(code)

    async def insert_many(self, records: Sequence[MappingCreate]) -> InsertReport:
        report = InsertReport()
        async with self._write_lock:
            updated = dict(await self._load())
            now = datetime.now(timezone.utc)
            for item in records:
                if item.namaste_code in updated:
                    conflict = DuplicateKeyError(item.namaste_code)
                    report.rejected.append(RejectedRecord(code=item.namaste_code, reason=conflict.message))
                    continue
                updated[item.namaste_code] = stamp(item, now)
                report.inserted.append(item.namaste_code)
            if report.inserted:
                await self._commit(updated)
        return report

    async def clear(self) -> int:
        async with self._write_lock:
            removed = len(await self._load())
            await self._commit({})
        return removed

    async def stats(self) -> MappingStats:
        records = await self._load()
        return ranking.summarize(records.values())
