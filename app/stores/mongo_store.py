"""
MongoDB mapping store (primary tier).

Runs filtering, ranking and pagination server-side with the same rules as
the in-process ranking module, and classifies driver failures:
- authentication/authorization failures -> AuthRequiredError
- connection failures, server selection and network timeouts -> UnreachableError
"""
from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, TypeVar

from pymongo import ASCENDING, DESCENDING
from pymongo import errors as mongo_errors

from ..core.errors import AuthRequiredError, DuplicateKeyError, MappingServiceError, UnreachableError
from ..models.mapping import SEARCHABLE_FIELDS, MappingCreate, MappingRecord
from ..models.query import InsertReport, MappingStats, QueryDescriptor, RejectedRecord, ResultPage
from .base import MappingStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Unauthorized, AuthenticationFailed
AUTH_ERROR_CODES = {13, 18}
DUPLICATE_KEY_CODE = 11000

# BSON int64 bound for skip
MAX_SKIP = 2**63 - 1

SORT_ORDER = [("confidence_score", DESCENDING), ("namaste_code", ASCENDING)]


def build_filter(descriptor: QueryDescriptor) -> Dict[str, Any]:
    """Translate a descriptor into a MongoDB filter document."""
    clauses: List[Dict[str, Any]] = []
    if descriptor.category is not None:
        clauses.append({"category": descriptor.category})
    if descriptor.chapter_name is not None:
        clauses.append({"chapter_name": descriptor.chapter_name})

    confidence: Dict[str, float] = {}
    if descriptor.min_confidence is not None:
        confidence["$gte"] = descriptor.min_confidence
    if descriptor.max_confidence is not None:
        confidence["$lte"] = descriptor.max_confidence
    if confidence:
        clauses.append({"confidence_score": confidence})

    for token in descriptor.tokens:
        pattern = re.escape(token)
        clauses.append({"$or": [{f: {"$regex": pattern, "$options": "i"}} for f in SEARCHABLE_FIELDS]})

    if not clauses:
        return {}
    if len(clauses) == 1:
        return clauses[0]
    return {"$and": clauses}


def classify(exc: mongo_errors.PyMongoError, backend: str) -> MappingServiceError:
    if isinstance(exc, mongo_errors.OperationFailure) and exc.code in AUTH_ERROR_CODES:
        return AuthRequiredError(f"MongoDB rejected credentials: {exc}", backend=backend)
    if isinstance(exc, (mongo_errors.ConnectionFailure, mongo_errors.ServerSelectionTimeoutError, mongo_errors.ExecutionTimeout)):
        return UnreachableError(f"MongoDB unreachable: {exc}", backend=backend)
    return MappingServiceError(f"MongoDB error: {exc}")


def _to_record(doc: Dict[str, Any]) -> MappingRecord:
    doc.pop("_id", None)
    return MappingRecord.model_validate(doc)


class MongoMappingStore(MappingStore):
    name = "mongo"

    def __init__(self, collection_factory: Optional[Callable[[], Any]] = None):
        # Collection is resolved lazily so a missing client surfaces per call, not at startup
        self._collection_factory = collection_factory
        self._collection = None

    @property
    def collection(self):
        if self._collection is None:
            if self._collection_factory is None:
                raise UnreachableError("MongoDB is not configured", backend=self.name)
            try:
                self._collection = self._collection_factory()
            except RuntimeError as e:
                raise UnreachableError(str(e), backend=self.name) from e
        return self._collection

    async def _call(self, operation: str, fn: Callable[[], Awaitable[T]]) -> T:
        try:
            return await fn()
        except mongo_errors.PyMongoError as e:
            failure = classify(e, self.name)
            logger.error("mongo_operation_error", extra={"operation": operation, "error": str(e), "kind": failure.kind})
            raise failure from e

    async def find(self, descriptor: QueryDescriptor) -> ResultPage:
        collection = self.collection
        query = build_filter(descriptor)

        async def run() -> ResultPage:
            total = await collection.count_documents(query)
            if descriptor.offset > MAX_SKIP:
                return ResultPage(records=[], total=total, page=descriptor.page, limit=descriptor.limit)
            cursor = collection.find(query).sort(SORT_ORDER).skip(descriptor.offset).limit(descriptor.limit)
            docs = await cursor.to_list(length=descriptor.limit)
            return ResultPage(
                records=[_to_record(d) for d in docs],
                total=total,
                page=descriptor.page,
                limit=descriptor.limit,
            )

        return await self._call("find", run)

    async def get_by_code(self, code: str) -> Optional[MappingRecord]:
        collection = self.collection

        async def run() -> Optional[MappingRecord]:
            doc = await collection.find_one({"namaste_code": code})
            return _to_record(doc) if doc else None

        return await self._call("get_by_code", run)

    async def insert_many(self, records: Sequence[MappingCreate]) -> InsertReport:
        collection = self.collection
        report = InsertReport()
        if not records:
            return report

        now = datetime.now(timezone.utc)
        docs = [
            {**r.model_dump(exclude={"created_at", "updated_at"}), "created_at": now, "updated_at": now}
            for r in records
        ]

        async def run() -> InsertReport:
            failed: Dict[int, str] = {}
            try:
                await collection.insert_many(docs, ordered=False)
            except mongo_errors.BulkWriteError as e:
                for write_error in e.details.get("writeErrors", []):
                    if write_error.get("code") != DUPLICATE_KEY_CODE:
                        raise
                    failed[write_error["index"]] = docs[write_error["index"]]["namaste_code"]
            for index, doc in enumerate(docs):
                code = doc["namaste_code"]
                if index in failed:
                    report.rejected.append(RejectedRecord(code=code, reason=DuplicateKeyError(code).message))
                else:
                    report.inserted.append(code)
            return report

        return await self._call("insert_many", run)

    async def clear(self) -> int:
        collection = self.collection

        async def run() -> int:
            result = await collection.delete_many({})
            return result.deleted_count

        return await self._call("clear", run)

    async def stats(self) -> MappingStats:
        collection = self.collection

        async def run() -> MappingStats:
            summary = await collection.aggregate([
                {"$group": {"_id": None, "total": {"$sum": 1}, "avg": {"$avg": "$confidence_score"}}}
            ]).to_list(length=1)
            by_category = await collection.aggregate([
                {"$group": {"_id": "$category", "count": {"$sum": 1}}}
            ]).to_list(length=None)
            by_chapter = await collection.aggregate([
                {"$match": {"chapter_name": {"$nin": [None, ""]}}},
                {"$group": {"_id": "$chapter_name", "count": {"$sum": 1}}},
            ]).to_list(length=None)

            if not summary:
                return MappingStats()
            category_counts = {row["_id"]: row["count"] for row in by_category}
            chapter_counts = {row["_id"]: row["count"] for row in by_chapter}
            return MappingStats(
                total_records=summary[0]["total"],
                avg_confidence=summary[0]["avg"] or 0.0,
                categories=set(category_counts),
                chapters=set(chapter_counts),
                category_counts=category_counts,
                chapter_counts=chapter_counts,
            )

        return await self._call("stats", run)
