"""
Query Normalizer

Turns a raw free-text query, filter mapping and pagination values (typically
straight from query-string parameters) into a validated QueryDescriptor.
Pure function: no I/O and no side effects.
"""
from __future__ import annotations

import math
from typing import Any, Mapping, Optional

from ..core.errors import ValidationError
from ..models.mapping import Category
from ..models.query import QueryDescriptor

DEFAULT_LIMIT = 20
MAX_LIMIT = 100

_CATEGORIES = {c.value for c in Category}
_CHAPTER_KEYS = ("chapter", "chapterName", "chapter_name")


def _absent(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _parse_positive_int(field: str, value: Any, default: int) -> int:
    if _absent(value):
        return default
    if isinstance(value, bool):
        raise ValidationError(field, "must be a positive integer")
    try:
        parsed = int(value.strip()) if isinstance(value, str) else int(value)
    except (TypeError, ValueError):
        raise ValidationError(field, "must be a positive integer") from None
    if isinstance(value, float) and value != parsed:
        raise ValidationError(field, "must be a positive integer")
    if parsed < 1:
        raise ValidationError(field, "must be >= 1")
    return parsed


def _parse_confidence(field: str, value: Any) -> Optional[float]:
    if _absent(value):
        return None
    if isinstance(value, bool):
        raise ValidationError(field, "must be a number between 0 and 1")
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        raise ValidationError(field, "must be a number between 0 and 1") from None
    if math.isnan(parsed) or not 0.0 <= parsed <= 1.0:
        raise ValidationError(field, "must be a number between 0 and 1")
    return parsed


def tokenize(raw_query: Optional[str]) -> tuple[str, ...]:
    """Split on whitespace and lower-case; an empty result matches everything."""
    if not raw_query:
        return ()
    return tuple(token.lower() for token in raw_query.split() if token)


def normalize(
    raw_query: Optional[str],
    raw_filters: Optional[Mapping[str, Any]] = None,
    raw_page: Any = None,
    raw_limit: Any = None,
    *,
    default_limit: int = DEFAULT_LIMIT,
    max_limit: int = MAX_LIMIT,
) -> QueryDescriptor:
    """Build a QueryDescriptor, raising ValidationError naming the offending field."""
    filters = raw_filters or {}

    category = filters.get("category")
    if _absent(category):
        category = None
    else:
        category = str(category).strip()
        if category not in _CATEGORIES:
            raise ValidationError("category", f"must be one of {', '.join(sorted(_CATEGORIES))}")

    chapter = next((filters[k] for k in _CHAPTER_KEYS if not _absent(filters.get(k))), None)
    if chapter is not None:
        chapter = str(chapter).strip()

    min_confidence = _parse_confidence("minConfidence", filters.get("minConfidence"))
    max_confidence = _parse_confidence("maxConfidence", filters.get("maxConfidence"))
    if min_confidence is not None and max_confidence is not None and min_confidence > max_confidence:
        raise ValidationError("minConfidence", "must not be greater than maxConfidence")

    page = _parse_positive_int("page", raw_page, 1)
    limit = _parse_positive_int("limit", raw_limit, default_limit)
    if limit > max_limit:
        raise ValidationError("limit", f"must be <= {max_limit}")

    return QueryDescriptor(
        tokens=tokenize(raw_query),
        category=category,
        chapter_name=chapter,
        min_confidence=min_confidence,
        max_confidence=max_confidence,
        page=page,
        limit=limit,
    )
