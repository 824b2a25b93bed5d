"""Caller-owned memoization of resolved permissions."""

from __future__ import annotations

import logging
from collections import OrderedDict
from collections.abc import Callable
from typing import TYPE_CHECKING, NamedTuple

from rampart.models.permission import EffectivePermissions

if TYPE_CHECKING:
    from rampart.config import Config

logger = logging.getLogger(__name__)


class CacheKey(NamedTuple):
    """Identifies one resolution; bump a version whenever its source data changes."""

    user_id: str
    channel_id: str
    role_version: int
    override_version: int


class PermissionCache:
    """Bounded cache of EffectivePermissions, oldest entries evicted first.

    The resolver never consults this on its own. Callers that want
    memoization create one, key it with data versions they maintain, and
    guard it themselves if it is shared between threads.
    """

    def __init__(self, max_entries: int = 1024) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._max_entries = max_entries
        self._entries: OrderedDict[CacheKey, EffectivePermissions] = OrderedDict()
        self.hits = 0
        self.misses = 0

    @classmethod
    def from_config(cls, config: Config) -> PermissionCache:
        return cls(max_entries=config.cache_max_entries)

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: CacheKey) -> EffectivePermissions | None:
        return self._entries.get(key)

    def get_or_compute(
        self, key: CacheKey, compute: Callable[[], EffectivePermissions]
    ) -> EffectivePermissions:
        cached = self._entries.get(key)
        if cached is not None:
            self.hits += 1
            return cached

        self.misses += 1
        value = compute()
        self._entries[key] = value
        while len(self._entries) > self._max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Evicted cached permissions for %s", evicted)
        return value

    def invalidate(self, user_id: str | None = None) -> int:
        """Drop entries for one user, or every entry when user_id is None."""
        if user_id is None:
            dropped = len(self._entries)
            self._entries.clear()
            return dropped
        stale = [key for key in self._entries if key.user_id == user_id]
        for key in stale:
            del self._entries[key]
        return len(stale)

    def clear(self) -> None:
        self.invalidate()
        self.hits = 0
        self.misses = 0
