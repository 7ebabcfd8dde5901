"""
Query and result types exchanged between the services and the stores.

These are plain dataclasses: they are built per call and never persisted.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from .mapping import MappingRecord


@dataclass(frozen=True)
class QueryDescriptor:
    """Canonical, validated search request. An empty ``tokens`` matches all records."""

    tokens: Tuple[str, ...] = ()
    category: Optional[str] = None
    chapter_name: Optional[str] = None
    min_confidence: Optional[float] = None
    max_confidence: Optional[float] = None
    page: int = 1
    limit: int = 20

    @property
    def text(self) -> str:
        return " ".join(self.tokens)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class ResultPage:
    records: List[MappingRecord]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


@dataclass
class RejectedRecord:
    code: str
    reason: str


@dataclass
class InsertReport:
    inserted: List[str] = field(default_factory=list)
    rejected: List[RejectedRecord] = field(default_factory=list)

    @property
    def inserted_count(self) -> int:
        return len(self.inserted)

    @property
    def rejected_codes(self) -> List[str]:
        return [r.code for r in self.rejected]


@dataclass
class MappingStats:
    total_records: int = 0
    avg_confidence: float = 0.0
    categories: Set[str] = field(default_factory=set)
    chapters: Set[str] = field(default_factory=set)
    category_counts: Dict[str, int] = field(default_factory=dict)
    chapter_counts: Dict[str, int] = field(default_factory=dict)
