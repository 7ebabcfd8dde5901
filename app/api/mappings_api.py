"""
Mappings API

FastAPI router for terminology mapping endpoints:
- GET /mappings: List mappings with category/chapter filters
- GET /mappings/search: Ranked, filtered, paginated search
- GET /mappings/stats/summary: Dashboard statistics
- GET /mappings/metadata/categories, /mappings/metadata/chapters: Facet values
- GET /mappings/{code}: Single mapping lookup
- POST /mappings: Bulk insert with per-record duplicate reporting
- DELETE /mappings: Administrative clear
"""
from __future__ import annotations

import logging
from typing import List, Optional, Union

from fastapi import APIRouter, Body, Depends, Header, Query, Request

from ..models.api_models import (
    DeleteResponse,
    InsertResponse,
    RejectedMapping,
    SearchResponse,
    StatsSummaryResponse,
)
from ..models.mapping import MappingCreate, MappingRecord
from ..models.query import ResultPage
from ..services.factory import Services

router = APIRouter(prefix="/mappings")
logger = logging.getLogger(__name__)


def get_services(request: Request) -> Services:
    """Dependency to get the service bundle from app state."""
    return request.app.state.services


def get_actor_id(x_user_id: Optional[str] = Header(None)) -> Optional[str]:
    return x_user_id


def _to_response(result: ResultPage) -> SearchResponse:
    return SearchResponse(
        mappings=result.records,
        total=result.total,
        page=result.page,
        limit=result.limit,
        total_pages=result.total_pages,
    )


@router.get("", response_model=SearchResponse)
async def list_mappings(
    category: Optional[str] = Query(None),
    chapter: Optional[str] = Query(None),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    services: Services = Depends(get_services),
    actor_id: Optional[str] = Depends(get_actor_id),
) -> SearchResponse:
    """List mappings in rank order, optionally filtered by category and chapter."""
    result = await services.search_engine.search(
        "", {"category": category, "chapter": chapter}, page, limit, actor_id=actor_id
    )
    return _to_response(result)


@router.get("/search", response_model=SearchResponse)
async def search_mappings(
    q: Optional[str] = Query(None, description="Free-text query; every word must match"),
    category: Optional[str] = Query(None),
    chapter: Optional[str] = Query(None),
    min_confidence: Optional[str] = Query(None, alias="minConfidence"),
    max_confidence: Optional[str] = Query(None, alias="maxConfidence"),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    services: Services = Depends(get_services),
    actor_id: Optional[str] = Depends(get_actor_id),
) -> SearchResponse:
    """Search mappings.

    Results are ordered by confidence (highest first) then by NAMASTE code.
    Pages past the end return an empty list with the full total.
    """
    filters = {
        "category": category,
        "chapter": chapter,
        "minConfidence": min_confidence,
        "maxConfidence": max_confidence,
    }
    result = await services.search_engine.search(q, filters, page, limit, actor_id=actor_id)
    return _to_response(result)


@router.get("/stats/summary", response_model=StatsSummaryResponse)
async def stats_summary(
    services: Services = Depends(get_services),
    actor_id: Optional[str] = Depends(get_actor_id),
) -> StatsSummaryResponse:
    stats = await services.stats.get_stats(actor_id=actor_id)
    return StatsSummaryResponse(
        total_mappings=stats.total_records,
        avg_confidence_score=stats.avg_confidence,
        categories_count=len(stats.categories),
        chapters_count=len(stats.chapters),
        category_counts=stats.category_counts,
        chapter_counts=stats.chapter_counts,
    )


@router.get("/metadata/categories", response_model=List[str])
async def list_categories(services: Services = Depends(get_services)) -> List[str]:
    return await services.stats.get_categories()


@router.get("/metadata/chapters", response_model=List[str])
async def list_chapters(services: Services = Depends(get_services)) -> List[str]:
    return await services.stats.get_chapters()


@router.get("/{code}", response_model=MappingRecord)
async def get_mapping(code: str, services: Services = Depends(get_services)) -> MappingRecord:
    return await services.mappings.get_by_code(code)


@router.post("", response_model=InsertResponse)
async def insert_mappings(
    payload: Union[List[MappingCreate], MappingCreate] = Body(...),
    services: Services = Depends(get_services),
    actor_id: Optional[str] = Depends(get_actor_id),
) -> InsertResponse:
    """Insert one mapping or an array of mappings.

    Records whose code already exists are reported under ``rejected``; the
    rest of the batch is still inserted.
    """
    records = payload if isinstance(payload, list) else [payload]
    report = await services.mappings.insert_many(records, actor_id=actor_id)
    return InsertResponse(
        inserted_count=report.inserted_count,
        inserted_ids=report.inserted,
        rejected=[RejectedMapping(code=r.code, reason=r.reason) for r in report.rejected],
    )


@router.delete("", response_model=DeleteResponse)
async def clear_mappings(services: Services = Depends(get_services)) -> DeleteResponse:
    deleted = await services.mappings.clear()
    return DeleteResponse(deleted_count=deleted)
