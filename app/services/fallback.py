"""
Fallback Coordinator

Holds the active store for the life of the process and demotes to the next
tier (primary -> secondary -> tertiary) when a call fails with
AuthRequiredError or UnreachableError. The failed call is replayed against
the next tier before returning, so callers see a single call. There is no
promotion back to a higher tier.

Each call snapshots the active tier when it starts. Demotion is a
compare-and-set on the tier index with no await between the check and the
assignment, so concurrent callers on the event loop never observe a torn
state and only one of them logs the transition.
"""
from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Sequence, TypeVar

from ..core.errors import StoreFailure, UnreachableError
from ..stores.base import MappingStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BackendState(str, Enum):
    USING_PRIMARY = "USING_PRIMARY"
    USING_SECONDARY = "USING_SECONDARY"
    USING_TERTIARY = "USING_TERTIARY"


_STATES = list(BackendState)


class FallbackCoordinator:
    def __init__(self, stores: Sequence[MappingStore], timeout_seconds: float = 5.0):
        if not 1 <= len(stores) <= len(_STATES):
            raise ValueError(f"Expected between 1 and {len(_STATES)} stores, got {len(stores)}")
        self._stores = tuple(stores)
        self._index = 0
        self.timeout_seconds = timeout_seconds

    @property
    def state(self) -> BackendState:
        return _STATES[self._index]

    @property
    def active_store(self) -> MappingStore:
        return self._stores[self._index]

    @property
    def stores(self) -> tuple[MappingStore, ...]:
        return self._stores

    async def run(self, operation: Callable[[MappingStore], Awaitable[T]], *, name: str = "operation") -> T:
        """Run ``operation`` against the active store, falling back on classified failures."""
        index = self._index
        while True:
            store = self._stores[index]
            try:
                return await asyncio.wait_for(operation(store), timeout=self.timeout_seconds)
            except asyncio.TimeoutError as e:
                failure: StoreFailure = UnreachableError(
                    f"{store.name} did not answer {name} within {self.timeout_seconds}s", backend=store.name
                )
                failure.__cause__ = e
            except StoreFailure as e:
                failure = e

            if index + 1 >= len(self._stores):
                logger.error(
                    "fallback_exhausted",
                    extra={"operation": name, "backend": store.name, "kind": failure.kind},
                )
                raise failure
            index = self._demote(index, failure, name)

    def _demote(self, from_index: int, failure: StoreFailure, operation: str) -> int:
        next_index = from_index + 1
        if self._index == from_index:
            self._index = next_index
            logger.warning(
                "backend_demoted",
                extra={
                    "operation": operation,
                    "from_backend": self._stores[from_index].name,
                    "to_backend": self._stores[next_index].name,
                    "state": _STATES[next_index].value,
                    "kind": failure.kind,
                    "error": failure.message,
                },
            )
        # Another call may already have moved further down
        return max(self._index, next_index)

    async def close(self) -> None:
        for store in self._stores:
            await store.close()
