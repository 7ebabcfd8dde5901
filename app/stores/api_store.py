"""
Remote mapping API store.

Alternative primary tier that talks to another deployment of this service's
HTTP API instead of MongoDB directly. Response status codes are classified
the same way driver errors are:
- 401/403 -> AuthRequiredError
- transport errors, timeouts and 502/503/504 -> UnreachableError
- 400/422 -> ValidationError, 404 on single lookups -> None
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence
from urllib.parse import quote

import httpx

from ..core.config import Settings
from ..core.errors import AuthRequiredError, MappingServiceError, UnreachableError, ValidationError
from ..models.mapping import MappingCreate, MappingRecord
from ..models.query import InsertReport, MappingStats, QueryDescriptor, RejectedRecord, ResultPage
from .base import MappingStore

logger = logging.getLogger(__name__)

GATEWAY_STATUSES = {502, 503, 504}


class RemoteApiMappingStore(MappingStore):
    """Client for a remote mapping API."""

    name = "api"

    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None):
        self.base_url = settings.remote_api.base_url.rstrip("/") if settings.remote_api.base_url else None
        headers = {"Accept": "application/json"}
        if settings.remote_api.token:
            headers["Authorization"] = f"Bearer {settings.remote_api.token}"

        # HTTP client with connection pooling
        self.client = client or httpx.AsyncClient(
            timeout=settings.remote_api.timeout_seconds,
            headers=headers,
            limits=httpx.Limits(max_keepalive_connections=20, max_connections=100),
        )

    async def close(self) -> None:
        await self.client.aclose()

    async def _request(self, method: str, endpoint: str, **kwargs: Any) -> httpx.Response:
        if not self.base_url:
            raise UnreachableError("Remote mapping API base URL not configured", backend=self.name)

        url = f"{self.base_url}{endpoint}"
        try:
            response = await self.client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            logger.warning("remote_api_timeout", extra={"endpoint": endpoint, "error": str(e)})
            raise UnreachableError(f"Remote mapping API timed out: {endpoint}", backend=self.name) from e
        except httpx.TransportError as e:
            logger.warning("remote_api_transport_error", extra={"endpoint": endpoint, "error": str(e)})
            raise UnreachableError(f"Remote mapping API unreachable: {e}", backend=self.name) from e

        if response.status_code in (401, 403):
            raise AuthRequiredError(f"Remote mapping API requires credentials ({response.status_code})", backend=self.name)
        if response.status_code in GATEWAY_STATUSES:
            raise UnreachableError(f"Remote mapping API unavailable ({response.status_code})", backend=self.name)
        if response.status_code in (400, 422):
            detail = self._error_details(response)
            raise ValidationError(detail.get("field", "request"), detail.get("reason", response.text[:200]))
        return response

    @staticmethod
    def _error_details(response: httpx.Response) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {}
        return body.get("details") or {}

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if response.is_error:
            logger.error("remote_api_http_error", extra={"status_code": response.status_code, "response": response.text[:500]})
            raise MappingServiceError(f"Remote mapping API error ({response.status_code})")

    async def find(self, descriptor: QueryDescriptor) -> ResultPage:
        params: Dict[str, Any] = {"q": descriptor.text, "page": descriptor.page, "limit": descriptor.limit}
        if descriptor.category is not None:
            params["category"] = descriptor.category
        if descriptor.chapter_name is not None:
            params["chapter"] = descriptor.chapter_name
        if descriptor.min_confidence is not None:
            params["minConfidence"] = descriptor.min_confidence
        if descriptor.max_confidence is not None:
            params["maxConfidence"] = descriptor.max_confidence

        response = await self._request("GET", "/mappings/search", params=params)
        self._raise_for_status(response)
        body = response.json()
        return ResultPage(
            records=[MappingRecord.model_validate(m) for m in body.get("mappings", [])],
            total=int(body.get("total", 0)),
            page=descriptor.page,
            limit=descriptor.limit,
        )

    async def get_by_code(self, code: str) -> Optional[MappingRecord]:
        response = await self._request("GET", f"/mappings/{quote(code, safe='')}")
        if response.status_code == 404:
            return None
        self._raise_for_status(response)
        return MappingRecord.model_validate(response.json())

    async def insert_many(self, records: Sequence[MappingCreate]) -> InsertReport:
        payload = [r.model_dump(mode="json", exclude={"created_at", "updated_at"}) for r in records]
        response = await self._request("POST", "/mappings", json=payload)
        self._raise_for_status(response)
        body = response.json()
        return InsertReport(
            inserted=list(body.get("insertedIds", [])),
            rejected=[RejectedRecord(code=r["code"], reason=r.get("reason", "")) for r in body.get("rejected", [])],
        )

    async def clear(self) -> int:
        response = await self._request("DELETE", "/mappings")
        self._raise_for_status(response)
        return int(response.json().get("deletedCount", 0))

    async def stats(self) -> MappingStats:
        response = await self._request("GET", "/mappings/stats/summary")
        self._raise_for_status(response)
        body = response.json()
        category_counts = body.get("categoryCounts") or {}
        chapter_counts = body.get("chapterCounts") or {}
        return MappingStats(
            total_records=int(body.get("totalMappings", 0)),
            avg_confidence=float(body.get("avgConfidenceScore", 0.0)),
            categories=set(category_counts),
            chapters=set(chapter_counts),
            category_counts=category_counts,
            chapter_counts=chapter_counts,
        )
