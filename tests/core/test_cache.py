# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for probity.core.cache - MetadataCache and CacheKey."""

from __future__ import annotations

import pytest

from probity.core.cache import (
    CacheKey,
    MetadataCache,
    get_default_cache,
    reset_default_cache,
)
from probity.core.members import Visibility


class Subject:
    pass


class OtherSubject:
    pass


# =============================================================================
# Tests: CacheKey
# =============================================================================


class TestCacheKey:
    """Tests for CacheKey identity."""

    def test_for_subject_uses_type(self):
        """Instances of one type share a key."""
        a = CacheKey.for_subject(Subject(), Visibility.ALL, False)
        b = CacheKey.for_subject(Subject(), Visibility.ALL, False)
        assert a == b
        assert a.subject_type is Subject

    def test_visibility_discriminates(self):
        """Different visibility masks give different keys."""
        public = CacheKey.for_subject(Subject(), Visibility.PUBLIC, False)
        everything = CacheKey.for_subject(Subject(), Visibility.ALL, False)
        assert public != everything

    def test_skip_static_discriminates(self):
        a = CacheKey.for_subject(Subject(), Visibility.ALL, False)
        b = CacheKey.for_subject(Subject(), Visibility.ALL, True)
        assert a != b

    def test_type_discriminates(self):
        a = CacheKey.for_subject(Subject(), Visibility.ALL, False)
        b = CacheKey.for_subject(OtherSubject(), Visibility.ALL, False)
        assert a != b

    def test_str(self):
        """String form names the type and the options."""
        key = CacheKey.for_subject(Subject(), Visibility.PUBLIC, True)
        assert str(key).endswith("Subject_1_1")


# =============================================================================
# Tests: MetadataCache
# =============================================================================


class TestMetadataCache:
    """Tests for MetadataCache operations."""

    @pytest.fixture
    def key(self) -> CacheKey:
        return CacheKey.for_subject(Subject(), Visibility.ALL, False)

    def test_put_then_get(self, cache, key):
        value = {"a": 1}
        cache.put(key, "rules", value)
        assert cache.has(key, "rules")
        assert cache.get(key, "rules") is value

    def test_get_missing_returns_default(self, cache, key):
        assert cache.get(key, "rules") is None
        assert cache.get(key, "rules", default=[]) == []
        assert not cache.has(key, "rules")

    def test_items_are_independent(self, cache, key):
        """Storing one item does not make the others present."""
        cache.put(key, "members", {})
        assert cache.has(key, "members")
        assert not cache.has(key, "rules")
        assert not cache.has(key, "type_hints")

    def test_empty_value_counts_as_present(self, cache, key):
        cache.put(key, "rules", [])
        assert cache.has(key, "rules")

    def test_put_keeps_first_value(self, cache, key):
        """Store-if-absent: the first stored value wins and is returned."""
        first, second = ["first"], ["second"]
        assert cache.put(key, "rules", first) is first
        assert cache.put(key, "rules", second) is first
        assert cache.get(key, "rules") is first

    def test_none_key_is_noop(self, cache):
        value = ["x"]
        assert cache.put(None, "rules", value) is value
        assert not cache.has(None, "rules")
        assert cache.get(None, "rules", "default") == "default"
        assert len(cache) == 0

    def test_disabled_cache_is_noop(self, key):
        cache = MetadataCache(enabled=False)
        cache.put(key, "rules", ["x"])
        assert not cache.has(key, "rules")
        assert cache.get(key, "rules") is None
        assert len(cache) == 0

    def test_unknown_item_rejected(self, cache, key):
        with pytest.raises(ValueError, match="Unknown cache item"):
            cache.put(key, "bogus", 1)
        with pytest.raises(ValueError, match="Unknown cache item"):
            cache.has(key, "bogus")

    def test_clear_and_contains(self, cache, key):
        cache.put(key, "rules", [])
        assert key in cache
        assert len(cache) == 1
        cache.clear()
        assert key not in cache
        assert len(cache) == 0


# =============================================================================
# Tests: default cache
# =============================================================================


class TestDefaultCache:
    """Tests for the process-wide cache accessors."""

    def test_same_instance_until_reset(self):
        cache = get_default_cache()
        assert get_default_cache() is cache
        reset_default_cache()
        assert get_default_cache() is not cache
