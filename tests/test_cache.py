"""Tests for the caller-owned permission cache."""

from __future__ import annotations

import pytest

from rampart.config import Config
from rampart.core.cache import CacheKey, PermissionCache
from rampart.core.resolver import get_effective_permissions
from rampart.models.permission import EffectivePermissions


class _Counter:
    def __init__(self, result: EffectivePermissions) -> None:
        self.calls = 0
        self.result = result

    def __call__(self) -> EffectivePermissions:
        self.calls += 1
        return self.result


class TestLookup:
    """Test hits, misses and version keys."""

    def test_hit_after_miss(self) -> None:
        cache = PermissionCache()
        compute = _Counter(EffectivePermissions(read_messages=True))
        key = CacheKey("u1", "general", 1, 1)

        first = cache.get_or_compute(key, compute)
        second = cache.get_or_compute(key, compute)

        assert first is second
        assert compute.calls == 1
        assert (cache.hits, cache.misses) == (1, 1)

    def test_version_bump_misses(self) -> None:
        cache = PermissionCache()
        compute = _Counter(EffectivePermissions.none())
        cache.get_or_compute(CacheKey("u1", "general", 1, 1), compute)
        cache.get_or_compute(CacheKey("u1", "general", 2, 1), compute)
        cache.get_or_compute(CacheKey("u1", "general", 2, 2), compute)
        assert compute.calls == 3

    def test_caches_resolver_output(self, make_role, make_override) -> None:
        cache = PermissionCache()
        roles = [make_role("member", 1, send_messages=True)]
        overrides = [make_override(role_id="member", deny=["sendMessages"])]
        key = CacheKey("u1", "general", 1, 1)

        perms = cache.get_or_compute(key, lambda: get_effective_permissions(roles, overrides, user_id="u1"))
        assert perms.send_messages is False
        assert cache.get(key) == perms


class TestCapacity:
    """Test eviction, invalidation and sizing."""

    def test_evicts_oldest(self) -> None:
        cache = PermissionCache(max_entries=2)
        keys = [CacheKey(f"u{i}", "general", 1, 1) for i in range(3)]
        for key in keys:
            cache.get_or_compute(key, EffectivePermissions.none)
        assert len(cache) == 2
        assert cache.get(keys[0]) is None
        assert cache.get(keys[2]) is not None

    def test_invalidate_user(self) -> None:
        cache = PermissionCache()
        cache.get_or_compute(CacheKey("u1", "a", 1, 1), EffectivePermissions.none)
        cache.get_or_compute(CacheKey("u1", "b", 1, 1), EffectivePermissions.none)
        cache.get_or_compute(CacheKey("u2", "a", 1, 1), EffectivePermissions.none)

        assert cache.invalidate("u1") == 2
        assert len(cache) == 1
        assert cache.invalidate() == 1
        assert len(cache) == 0

    def test_clear_resets_counters(self) -> None:
        cache = PermissionCache()
        cache.get_or_compute(CacheKey("u1", "a", 1, 1), EffectivePermissions.none)
        cache.clear()
        assert len(cache) == 0
        assert (cache.hits, cache.misses) == (0, 0)

    def test_rejects_zero_capacity(self) -> None:
        with pytest.raises(ValueError):
            PermissionCache(max_entries=0)

    def test_from_config(self, config: Config) -> None:
        config.cache_max_entries = 1
        cache = PermissionCache.from_config(config)
        cache.get_or_compute(CacheKey("u1", "a", 1, 1), EffectivePermissions.none)
        cache.get_or_compute(CacheKey("u2", "a", 1, 1), EffectivePermissions.none)
        assert len(cache) == 1
