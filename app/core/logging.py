"""
Logging utilities: JSON structured logging with contextual fields.

- Configures a root logger emitting JSON using python-json-logger.
- Provides a helper to bind contextual fields such as request_id or backend.
- Provides privacy-aware hashing for identifiers (e.g., actor id) with a salt.
"""
from __future__ import annotations

import hashlib
import logging
import sys
from contextlib import contextmanager
from typing import Any, Iterator

from pythonjsonlogger import jsonlogger


def configure_logging(level: str = "INFO") -> None:
    handler = logging.StreamHandler(sys.stdout)
    formatter = jsonlogger.JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


@contextmanager
def bind_context(logger: logging.Logger, **kwargs: Any) -> Iterator[logging.LoggerAdapter]:
    """Yield an adapter that adds contextual fields to every record it emits.

    Usage:
        with bind_context(logger, request_id=...) as log:
            log.info("message")
    """
    yield logging.LoggerAdapter(logger, extra=kwargs)


def hash_identifier(value: str, salt: str) -> str:
    """Hash an identifier with a salt to avoid logging PII directly.

    Returns hex digest string.
    """
    h = hashlib.sha256()
    h.update(salt.encode("utf-8"))
    h.update(b"::")
    h.update(value.encode("utf-8"))
    return h.hexdigest()
