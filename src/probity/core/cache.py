# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Metadata cache for rule discovery.

Entries are keyed by ``CacheKey(subject_type, visibility, skip_static)`` and
hold up to three items: ``rules``, ``members`` and ``type_hints``. Different
option combinations for the same type are always cached separately.

The cache never evicts. Population is "check, compute, store-if-absent":
two threads racing on the same key compute equal values and the first
stored one wins, so no locking is needed.
"""

from __future__ import annotations

import logging
from typing import Any, NamedTuple

logger = logging.getLogger(__name__)

__all__ = (
    "CACHE_ITEMS",
    "CacheKey",
    "MetadataCache",
    "get_default_cache",
    "reset_default_cache",
)

CACHE_ITEMS = frozenset({"rules", "members", "type_hints"})


class CacheKey(NamedTuple):
    """Identity of one discovery result."""

    subject_type: type
    visibility: int
    skip_static: bool

    @classmethod
    def for_subject(cls, subject: object, visibility: int, skip_static: bool) -> CacheKey:
        return cls(type(subject), int(visibility), bool(skip_static))

    def __str__(self) -> str:
        t = self.subject_type
        return f"{t.__module__}.{t.__qualname__}_{self.visibility}_{int(self.skip_static)}"


class MetadataCache:
    """Keyed store of discovery results with an injectable lifetime.

    Example:
        >>> cache = MetadataCache()
        >>> key = CacheKey.for_subject(post, Visibility.ALL, False)
        >>> cache.put(key, "rules", rule_set)
        >>> cache.get(key, "rules") is rule_set
        True
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._entries: dict[CacheKey, dict[str, Any]] = {}

    def has(self, key: CacheKey | None, item: str) -> bool:
        """Check item presence. Items holding empty values count as present."""
        _check_item(item)
        if key is None or not self.enabled:
            return False
        return item in self._entries.get(key, ())

    def get(self, key: CacheKey | None, item: str, default: Any = None) -> Any:
        _check_item(item)
        if key is None or not self.enabled:
            return default
        entry = self._entries.get(key)
        if entry is None or item not in entry:
            logger.debug(f"Cache miss: {key}/{item}")
            return default
        logger.debug(f"Cache hit: {key}/{item}")
        return entry[item]

    def put(self, key: CacheKey | None, item: str, value: Any) -> Any:
        """Store value unless already present. Returns the stored value."""
        _check_item(item)
        if key is None or not self.enabled:
            return value
        entry = self._entries.setdefault(key, {})
        return entry.setdefault(item, value)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: CacheKey) -> bool:
        return key in self._entries

    def __repr__(self) -> str:
        return f"MetadataCache(enabled={self.enabled}, entries={len(self)})"


def _check_item(item: str) -> None:
    if item not in CACHE_ITEMS:
        raise ValueError(f"Unknown cache item '{item}'. Expected one of: {sorted(CACHE_ITEMS)}")


_default_cache: MetadataCache | None = None


def get_default_cache() -> MetadataCache:
    """Process-wide cache used when none is injected."""
    global _default_cache
    if _default_cache is None:
        _default_cache = MetadataCache()
    return _default_cache


def reset_default_cache() -> None:
    """Drop the process-wide cache. Mainly for tests."""
    global _default_cache
    _default_cache = None
