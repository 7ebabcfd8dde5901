"""
Search & Filter Engine

Normalizes a raw search request, runs it through the fallback coordinator
and records exactly one audit event per call, whether it succeeds or fails.
The engine never retries; moving between stores is the coordinator's job.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Mapping, Optional

from ..core.config import SearchSettings
from ..core.errors import MappingServiceError
from ..models.audit import AuditEvent
from ..models.query import QueryDescriptor, ResultPage
from .audit import AuditSink
from .fallback import FallbackCoordinator
from .query_normalizer import normalize, tokenize

logger = logging.getLogger(__name__)


class SearchEngine:
    """Entry point for mapping search."""

    def __init__(self, coordinator: FallbackCoordinator, audit_sink: AuditSink, settings: Optional[SearchSettings] = None):
        self.coordinator = coordinator
        self.audit_sink = audit_sink
        self.settings = settings or SearchSettings()

    def describe(self, raw_query: Optional[str], raw_filters: Optional[Mapping[str, Any]] = None,
                 raw_page: Any = None, raw_limit: Any = None) -> QueryDescriptor:
        return normalize(
            raw_query,
            raw_filters,
            raw_page,
            raw_limit,
            default_limit=self.settings.default_limit,
            max_limit=self.settings.max_limit,
        )

    async def search(
        self,
        raw_query: Optional[str],
        raw_filters: Optional[Mapping[str, Any]] = None,
        raw_page: Any = None,
        raw_limit: Any = None,
        *,
        actor_id: Optional[str] = None,
    ) -> ResultPage:
        start = time.perf_counter()
        query_text = " ".join(tokenize(raw_query))
        try:
            descriptor = self.describe(raw_query, raw_filters, raw_page, raw_limit)
            result = await self.coordinator.run(lambda store: store.find(descriptor), name="search")
        except Exception as e:
            await self._audit(query_text, 0, False, start, actor_id, getattr(e, "kind", type(e).__name__))
            if not isinstance(e, MappingServiceError):
                logger.exception("search_failed", extra={"query": query_text})
            raise

        await self._audit(descriptor.text, result.total, True, start, actor_id)
        logger.debug("search_completed", extra={"query": descriptor.text, "total": result.total, "page": result.page})
        return result

    async def _audit(self, query: str, count: int, success: bool, start: float,
                     actor_id: Optional[str], error_kind: Optional[str] = None) -> None:
        await self.audit_sink.record(
            AuditEvent(
                action="search",
                query=query,
                result_count=count,
                success=success,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
                actor_id=actor_id,
                error_kind=error_kind,
            )
        )
