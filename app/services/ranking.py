"""
In-process matching, ranking and pagination.

Used by every store that evaluates queries itself (local file and embedded).
The MongoDB store expresses the same rules as a server-side query; both must
agree on:

- filters: category, chapter and inclusive confidence range must all hold
- text: every token must occur (case-insensitive substring) in at least one
  searchable field
- order: confidence_score descending, then namaste_code ascending
- pages: records[(page - 1) * limit : page * limit], total counted before slicing
"""
from __future__ import annotations

from collections import Counter
from typing import Iterable, List, Sequence

from ..models.mapping import MappingRecord
from ..models.query import MappingStats, QueryDescriptor, ResultPage


def matches_filters(record: MappingRecord, descriptor: QueryDescriptor) -> bool:
    if descriptor.category is not None and record.category != descriptor.category:
        return False
    if descriptor.chapter_name is not None and record.chapter_name != descriptor.chapter_name:
        return False
    if descriptor.min_confidence is not None and record.confidence_score < descriptor.min_confidence:
        return False
    if descriptor.max_confidence is not None and record.confidence_score > descriptor.max_confidence:
        return False
    return True


def matches_tokens(record: MappingRecord, tokens: Sequence[str]) -> bool:
    fields = record.searchable_text()
    return all(any(token in value for value in fields) for token in tokens)


def rank_key(record: MappingRecord) -> tuple[float, str]:
    return (-record.confidence_score, record.namaste_code)


def paginate(ranked: Sequence[MappingRecord], page: int, limit: int) -> List[MappingRecord]:
    start = (page - 1) * limit
    return list(ranked[start:start + limit])


def execute(records: Iterable[MappingRecord], descriptor: QueryDescriptor) -> ResultPage:
    """Filter, rank and paginate ``records`` according to ``descriptor``."""
    matched = [
        r for r in records
        if matches_filters(r, descriptor) and matches_tokens(r, descriptor.tokens)
    ]
    matched.sort(key=rank_key)
    return ResultPage(
        records=paginate(matched, descriptor.page, descriptor.limit),
        total=len(matched),
        page=descriptor.page,
        limit=descriptor.limit,
    )


def summarize(records: Iterable[MappingRecord]) -> MappingStats:
    records = list(records)
    if not records:
        return MappingStats()
    category_counts = Counter(r.category for r in records)
    chapter_counts = Counter(r.chapter_name for r in records if r.chapter_name)
    return MappingStats(
        total_records=len(records),
        avg_confidence=sum(r.confidence_score for r in records) / len(records),
        categories=set(category_counts),
        chapters=set(chapter_counts),
        category_counts=dict(category_counts),
        chapter_counts=dict(chapter_counts),
    )
