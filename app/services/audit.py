"""
Audit sinks.

The search engine and stats aggregator hand one AuditEvent per call to a sink.
Sinks never raise: a failed audit write is logged and the call proceeds.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from pymongo.errors import PyMongoError

from ..core.config import Settings
from ..core.logging import hash_identifier
from ..core.mongo import Mongo
from ..models.audit import AuditEvent

logger = logging.getLogger(__name__)


class AuditSink(Protocol):
    async def record(self, event: AuditEvent) -> None:
        ...


class LoggingAuditSink:
    """Writes audit events to the structured log, hashing the actor id."""

    def __init__(self, salt: str):
        self.salt = salt

    async def record(self, event: AuditEvent) -> None:
        fields = event.model_dump(mode="json")
        if event.actor_id:
            fields["actor_id"] = hash_identifier(event.actor_id, self.salt)
        logger.info("audit_event", extra={"audit": fields})


class MongoAuditSink:
    """Persists audit events to the audit collection (TTL-indexed)."""

    def __init__(self, settings: Settings, fallback: LoggingAuditSink):
        self.settings = settings
        self.fallback = fallback

    async def record(self, event: AuditEvent) -> None:
        try:
            collection = Mongo.collection(self.settings, "audit")
            document = event.model_dump()
            if event.actor_id:
                document["actor_id"] = hash_identifier(event.actor_id, self.settings.audit.id_hash_salt)
            await asyncio.wait_for(
                collection.insert_one(document),
                timeout=self.settings.stores.operation_timeout_seconds,
            )
        except (PyMongoError, RuntimeError, asyncio.TimeoutError) as e:
            logger.error("mongo_audit_error", extra={"error": str(e), "action": event.action})
            await self.fallback.record(event)


def build_audit_sink(settings: Settings) -> AuditSink:
    log_sink = LoggingAuditSink(settings.audit.id_hash_salt)
    if Mongo.is_initialized():
        return MongoAuditSink(settings, log_sink)
    return log_sink
