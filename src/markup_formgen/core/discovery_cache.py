"""
Discovery cache for resolved input classes.

Maps a semantic type to the input class the mapping resolver found for it.
Two scopes exist:

- SharedDiscoveryCache: one process-wide table, reused by every form
- InstanceDiscoveryCache: one table per field renderer

Entries are write-once. Resolution is a pure function of the semantic type,
so two renderers racing to store the same key store the same class and the
first write simply wins.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional, Type

logger = logging.getLogger(__name__)


class DiscoveryCache(ABC):
    """ABC for semantic type -> input class memoization."""

    @abstractmethod
    def get(self, input_type: str) -> Optional[Type]:
        """Return the cached input class, or None on a miss."""
        pass

    @abstractmethod
    def store(self, input_type: str, input_class: Type) -> Type:
        """
        Store an input class unless the key is already present.

        Returns:
            The class held by the cache after the call (the first one written)
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Drop every entry. Only meant for configuration reloads and tests."""
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass

    def __contains__(self, input_type: str) -> bool:
        return self.get(input_type) is not None


class _DictDiscoveryCache(DiscoveryCache):
    """Dict-backed cache; dict.setdefault keeps first-write-wins atomic."""

    def __init__(self):
        self._entries: Dict[str, Type] = {}

    def get(self, input_type: str) -> Optional[Type]:
        return self._entries.get(input_type)

    def store(self, input_type: str, input_class: Type) -> Type:
        stored = self._entries.setdefault(input_type, input_class)
        logger.debug(f"{type(self).__name__}: '{input_type}' -> {stored.__name__}")
        return stored

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class SharedDiscoveryCache(_DictDiscoveryCache):
    """Process-wide cache shared by every field renderer."""


class InstanceDiscoveryCache(_DictDiscoveryCache):
    """Cache owned by a single field renderer."""


# Global cache instance
_shared_discovery_cache: Optional[SharedDiscoveryCache] = None


def get_shared_discovery_cache() -> SharedDiscoveryCache:
    """Get global discovery cache instance."""
    global _shared_discovery_cache
    if _shared_discovery_cache is None:
        _shared_discovery_cache = SharedDiscoveryCache()
    return _shared_discovery_cache


def create_discovery_cache(cache_discovery: bool) -> DiscoveryCache:
    """
    Select the cache for a new field renderer.

    Args:
        cache_discovery: True to reuse the process-wide cache

    Returns:
        The shared cache, or a fresh instance cache
    """
    if cache_discovery:
        return get_shared_discovery_cache()
    return InstanceDiscoveryCache()
