"""
Core utilities.

Framework-agnostic building blocks with no knowledge of inputs or wrappers:
fragments, option merging and the discovery cache.
"""

from .fragments import Fragment, class_list
from .options import deep_merge, without
from .discovery_cache import (
    DiscoveryCache,
    SharedDiscoveryCache,
    InstanceDiscoveryCache,
    get_shared_discovery_cache,
    create_discovery_cache,
)

__all__ = [
    "Fragment",
    "class_list",
    "deep_merge",
    "without",
    "DiscoveryCache",
    "SharedDiscoveryCache",
    "InstanceDiscoveryCache",
    "get_shared_discovery_cache",
    "create_discovery_cache",
]
