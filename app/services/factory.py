"""
Wires the three store tiers and the services on top of them from settings.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from ..core.config import Settings
from ..core.mongo import Mongo
from ..data.seed_mappings import SEED_MAPPINGS
from ..stores.api_store import RemoteApiMappingStore
from ..stores.base import MappingStore
from ..stores.embedded_store import EmbeddedMappingStore
from ..stores.file_store import JsonFileMappingStore
from ..stores.mongo_store import MongoMappingStore
from .audit import AuditSink, build_audit_sink
from .fallback import FallbackCoordinator
from .mapping_service import MappingService
from .search_engine import SearchEngine
from .stats_service import StatsAggregator

logger = logging.getLogger(__name__)


@dataclass
class Services:
    coordinator: FallbackCoordinator
    search_engine: SearchEngine
    stats: StatsAggregator
    mappings: MappingService
    audit_sink: AuditSink

    async def close(self) -> None:
        await self.coordinator.close()


def build_stores(settings: Settings) -> List[MappingStore]:
    if settings.PRIMARY_BACKEND == "api":
        primary: MappingStore = RemoteApiMappingStore(settings)
    elif Mongo.is_initialized():
        primary = MongoMappingStore(lambda: Mongo.collection(settings, "mappings"))
    else:
        primary = MongoMappingStore()
    secondary = JsonFileMappingStore(settings.stores.file_path)
    tertiary = EmbeddedMappingStore(seed=SEED_MAPPINGS if settings.stores.embedded_seed else None)
    return [primary, secondary, tertiary]


def build_services(settings: Settings, stores: List[MappingStore] | None = None) -> Services:
    stores = stores if stores is not None else build_stores(settings)
    coordinator = FallbackCoordinator(stores, timeout_seconds=settings.stores.operation_timeout_seconds)
    audit_sink = build_audit_sink(settings)
    logger.info("services_built", extra={"backends": [s.name for s in stores]})
    return Services(
        coordinator=coordinator,
        search_engine=SearchEngine(coordinator, audit_sink, settings.search),
        stats=StatsAggregator(coordinator, audit_sink),
        mappings=MappingService(coordinator, audit_sink),
        audit_sink=audit_sink,
    )
