"""
API Models

Pydantic models for API requests and responses:
- SearchResponse: Paginated mapping search results
- InsertResponse / DeleteResponse: Bulk load and clear outcomes
- StatsSummaryResponse: Dashboard statistics
- StatusResponse: For monitoring endpoint
- ErrorResponse: For error handling
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .mapping import MappingRecord


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class SearchResponse(_CamelModel):
    """Response model for mapping search and listing."""

    mappings: List[MappingRecord] = Field(..., description="Ranked page of mappings")
    total: int = Field(..., description="Matches before pagination")
    page: int = Field(..., description="Requested page")
    limit: int = Field(..., description="Requested page size")
    total_pages: int = Field(..., alias="totalPages", description="Number of pages for this limit")


class RejectedMapping(BaseModel):
    code: str
    reason: str


class InsertResponse(_CamelModel):
    """Response model for bulk insert. Duplicates are reported, not fatal."""

    success: bool = True
    inserted_count: int = Field(..., alias="insertedCount")
    inserted_ids: List[str] = Field(..., alias="insertedIds", description="Codes that were inserted")
    rejected: List[RejectedMapping] = Field(default_factory=list, description="Codes that were rejected and why")


class DeleteResponse(_CamelModel):
    success: bool = True
    deleted_count: int = Field(..., alias="deletedCount")


class StatsSummaryResponse(_CamelModel):
    """Response model for the dashboard summary."""

    total_mappings: int = Field(..., alias="totalMappings")
    avg_confidence_score: float = Field(..., alias="avgConfidenceScore")
    categories_count: int = Field(..., alias="categoriesCount")
    chapters_count: int = Field(..., alias="chaptersCount")
    category_counts: Dict[str, int] = Field(default_factory=dict, alias="categoryCounts")
    chapter_counts: Dict[str, int] = Field(default_factory=dict, alias="chapterCounts")


class StatusResponse(BaseModel):
    """Response model for status/monitoring endpoint."""

    service: str = Field(..., description="Service name")
    version: str = Field(..., description="Service version")
    environment: str = Field(..., description="Deployment environment")
    uptime_seconds: float = Field(..., description="Service uptime in seconds")
    backend_state: str = Field(..., description="Fallback tier currently serving requests")
    active_backend: str = Field(..., description="Name of the active mapping store")


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str = Field(..., description="Error type or code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")
    request_id: Optional[str] = Field(None, description="Request ID for tracing")
    timestamp: datetime = Field(default_factory=_utcnow, description="Error timestamp")


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str = Field(..., description="Health status")
    timestamp: datetime = Field(default_factory=_utcnow, description="Health check timestamp")
    version: Optional[str] = Field(None, description="Service version")
