"""
MongoDB client singleton and index management.

Provides a pooled motor client configured from settings and helpers to get collections.
Creates the unique mapping-code index, the filter/sort indexes and a TTL on the audit collection.
"""
from __future__ import annotations

import logging
from datetime import timedelta
from typing import Optional

import motor.motor_asyncio
from pymongo import ASCENDING, DESCENDING

from .config import Settings

logger = logging.getLogger(__name__)


class Mongo:
    _client: Optional[motor.motor_asyncio.AsyncIOMotorClient] = None

    @classmethod
    async def init(cls, settings: Settings) -> None:
        if cls._client is not None:
            return
        logger.info("mongo_connect", extra={"database": settings.MONGO_DATABASE})
        cls._client = motor.motor_asyncio.AsyncIOMotorClient(
            settings.MONGO_URI,
            appname=settings.APP_NAME,
            minPoolSize=2,
            maxPoolSize=50,
            serverSelectionTimeoutMS=settings.stores.server_selection_timeout_ms,
            connectTimeoutMS=settings.stores.server_selection_timeout_ms,
            uuidRepresentation="standard",
        )
        try:
            await cls._create_indexes(settings)
        except Exception:
            # No half-initialized client may remain for the stores and audit sink
            cls.close()
            raise

    @classmethod
    async def _create_indexes(cls, settings: Settings) -> None:
        db = cls.client()[settings.MONGO_DATABASE]
        mappings = db[settings.stores.mongo_collection]
        audit = db[settings.audit.collection]

        # One document per NAMASTE code
        await mappings.create_index([("namaste_code", ASCENDING)], name="uniq_namaste_code", unique=True)
        await mappings.create_index([("category", ASCENDING)], name="category_idx")
        await mappings.create_index([("chapter_name", ASCENDING)], name="chapter_idx")
        await mappings.create_index(
            [("confidence_score", DESCENDING), ("namaste_code", ASCENDING)], name="rank_idx"
        )

        ttl_seconds = int(timedelta(days=settings.audit.ttl_days).total_seconds())
        await audit.create_index("timestamp", expireAfterSeconds=ttl_seconds, name="audit_ttl")
        await audit.create_index([("action", ASCENDING)], name="audit_action_idx")

    @classmethod
    def is_initialized(cls) -> bool:
        return cls._client is not None

    @classmethod
    def client(cls) -> motor.motor_asyncio.AsyncIOMotorClient:
        if cls._client is None:
            raise RuntimeError("Mongo client not initialized. Call Mongo.init(settings) on startup.")
        return cls._client

    @classmethod
    def collection(cls, settings: Settings, which: str) -> motor.motor_asyncio.AsyncIOMotorCollection:
        db = cls.client()[settings.MONGO_DATABASE]
        if which == "mappings":
            return db[settings.stores.mongo_collection]
        if which == "audit":
            return db[settings.audit.collection]
        raise ValueError(f"Unknown collection alias: {which}")

    @classmethod
    def close(cls) -> None:
        if cls._client is not None:
            try:
                cls._client.close()
            finally:
                cls._client = None
