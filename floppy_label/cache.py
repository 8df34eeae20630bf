"""Bounded in-memory memoization for gradient and scale results."""
from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Deque, Dict, Generic, Hashable, Tuple, TypeVar

from pydantic import BaseModel

logger = logging.getLogger(__name__)

V = TypeVar("V")


class CacheStats(BaseModel):
    """Counters exposed for inspection."""

    name: str
    entries: int
    max_entries: int
    hits: int
    misses: int


class MemoCache(Generic[V]):
    """A bounded first-in-first-out cache keyed on the semantic inputs of a computation."""

    def __init__(self, name: str, max_entries: int) -> None:
        self._name = name
        self._max_entries = max(1, max_entries)
        self._entries: Dict[Hashable, V] = {}
        self._order: Deque[Hashable] = deque()
        self._hits = 0
        self._misses = 0

    def get_or_compute(self, key: Hashable, factory: Callable[[], V]) -> V:
        """Return the cached value for ``key``, computing and storing it on a miss."""

        if key in self._entries:
            self._hits += 1
            return self._entries[key]

        self._misses += 1
        value = factory()
        if len(self._order) >= self._max_entries:
            evicted = self._order.popleft()
            del self._entries[evicted]
            logger.debug("%s cache evicted %r", self._name, evicted)
        self._entries[key] = value
        self._order.append(key)
        return value

    def clear(self) -> None:
        self._entries.clear()
        self._order.clear()

    def stats(self) -> CacheStats:
        return CacheStats(
            name=self._name,
            entries=len(self._entries),
            max_entries=self._max_entries,
            hits=self._hits,
            misses=self._misses,
        )

    def snapshot(self) -> Tuple[Tuple[Hashable, V], ...]:
        """Return a copy of stored entries in insertion order for inspection/testing."""

        return tuple((key, self._entries[key]) for key in self._order)


__all__ = ["CacheStats", "MemoCache"]
