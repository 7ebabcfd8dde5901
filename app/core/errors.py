"""
Error taxonomy for the mapping service.

Every error carries a stable ``kind`` string that API clients can branch on
and the HTTP status the API layer renders it with. Only ``AuthRequiredError``
and ``UnreachableError`` cause the fallback coordinator to demote the active
store; every other kind is a legitimate per-call outcome.
"""
from __future__ import annotations

from typing import Any, Dict, Optional


class MappingServiceError(Exception):
    """Base class for all classified service errors."""

    kind = "store_error"
    http_status = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(MappingServiceError):
    """Malformed query, filter or pagination input."""

    kind = "validation_error"
    http_status = 400

    def __init__(self, field: str, reason: str):
        super().__init__(f"Invalid {field}: {reason}", {"field": field, "reason": reason})
        self.field = field
        self.reason = reason


class NotFoundError(MappingServiceError):
    kind = "not_found"
    http_status = 404

    def __init__(self, code: str):
        super().__init__(f"Mapping not found: {code}", {"code": code})
        self.code = code


class DuplicateKeyError(MappingServiceError):
    """A single record whose namaste_code already exists in the store."""

    kind = "duplicate_key"
    http_status = 409

    def __init__(self, code: str):
        super().__init__(f"Mapping already exists: {code}", {"code": code})
        self.code = code


class StoreFailure(MappingServiceError):
    """Failure classes that move the coordinator to the next store."""

    http_status = 503

    def __init__(self, message: str, backend: Optional[str] = None):
        super().__init__(message, {"backend": backend} if backend else None)
        self.backend = backend


class AuthRequiredError(StoreFailure):
    kind = "auth_required"


class UnreachableError(StoreFailure):
    kind = "unreachable"
