"""
Record store interface.

Every backend (MongoDB, remote API, local JSON file, embedded) implements the
same operations with the same query semantics, so the fallback coordinator can
replay a call against any of them.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ..models.mapping import MappingCreate, MappingRecord
from ..models.query import InsertReport, MappingStats, QueryDescriptor, ResultPage


class MappingStore(ABC):
    """Uniform async interface over one mapping backend."""

    name: str = "store"

    @abstractmethod
    async def find(self, descriptor: QueryDescriptor) -> ResultPage:
        """Return the ranked page of records matching ``descriptor``."""

    @abstractmethod
    async def get_by_code(self, code: str) -> Optional[MappingRecord]:
        """Return the record for ``code`` or None."""

    @abstractmethod
    async def insert_many(self, records: Sequence[MappingCreate]) -> InsertReport:
        """Insert records one by one; duplicates are rejected, not fatal."""

    @abstractmethod
    async def clear(self) -> int:
        """Remove every record and return how many were removed."""

    @abstractmethod
    async def stats(self) -> MappingStats:
        """Summary over the full, unfiltered record set."""

    async def close(self) -> None:
        return None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r}>"
