# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Shared fixtures."""

from __future__ import annotations

import pytest

from probity.core.cache import MetadataCache, reset_default_cache


@pytest.fixture(autouse=True)
def _fresh_default_cache():
    """Every test starts and ends with an empty process-wide cache."""
    reset_default_cache()
    yield
    reset_default_cache()


@pytest.fixture
def cache() -> MetadataCache:
    return MetadataCache()
