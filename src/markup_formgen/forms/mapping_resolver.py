"""
Input class resolution with override namespaces and a discovery cache.

Resolution rules for a semantic type:

1. A cached class is returned as is.
2. If the mapping table has an entry and it is a built-in input, custom
   namespaces (then the global namespace, when discovery is enabled) may
   override it with a class of the same name. Otherwise the entry is used.
3. Without an entry, the conventional class name (``"color"`` ->
   ``"ColorInput"``) is searched in custom namespaces, the global namespace
   (when discovery is enabled) and finally the built-in namespace.

Each namespace is wrapped in a NamespaceLookup; the lookups form an ordered
strategy list evaluated first-match.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Sequence, Type

import inflection

from markup_formgen.core.discovery_cache import DiscoveryCache, InstanceDiscoveryCache
from markup_formgen.exceptions import InputNotFoundError
from markup_formgen.forms.form_constants import CONSTANTS
from markup_formgen.forms.input_registry import (
    DEFAULT_INPUTS, GLOBAL_INPUTS, InputMappings, find_in_namespace, namespace_label, resolve_namespace,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NamespaceLookup:
    """One step of the lookup chain."""
    namespace: Any
    label: str

    def find(self, class_name: str) -> Optional[Type]:
        return find_in_namespace(self.namespace, class_name)


class MappingResolver:
    """
    Resolves a semantic type to an input class.

    Example:
        resolver = MappingResolver(INPUT_MAPPINGS, custom_namespaces=["myapp.inputs"])
        resolver.resolve("email")   # StringInput, or myapp.inputs.StringInput if defined
        resolver.resolve("color")   # ColorInput from myapp.inputs / global / defaults
    """

    def __init__(
        self,
        registry: InputMappings,
        custom_namespaces: Iterable[Any] = (),
        inputs_discovery: bool = True,
        cache: Optional[DiscoveryCache] = None,
    ):
        self.registry = registry
        self.inputs_discovery = inputs_discovery
        self.cache = cache if cache is not None else InstanceDiscoveryCache()
        self._custom_namespaces: Sequence[Any] = tuple(custom_namespaces)
        self._custom_lookups: Optional[List[NamespaceLookup]] = None

    def resolve(self, input_type: str) -> Type:
        """
        Resolve a semantic type to an input class.

        Args:
            input_type: Semantic type name

        Returns:
            Input class

        Raises:
            InputNotFoundError: If no namespace provides an input
        """
        cached = self.cache.get(input_type)
        if cached is not None:
            return cached

        input_class = self.discover(input_type)
        return self.cache.store(input_type, input_class)

    def discover(self, input_type: str) -> Type:
        """Run the lookup chain without consulting the cache."""
        mapping = self.registry.get(input_type)
        if mapping is not None:
            override = self.mapping_override(mapping)
            if override is not None:
                logger.debug(f"'{input_type}': {mapping.__name__} overridden by {override.__module__}.{override.__name__}")
                return override
            return mapping

        class_name = f"{inflection.camelize(str(input_type))}{CONSTANTS.INPUT_CLASS_SUFFIX}"
        lookups = self.discovery_lookups()
        for lookup in lookups:
            found = lookup.find(class_name)
            if found is not None:
                logger.debug(f"'{input_type}': found {class_name} in {lookup.label}")
                return found

        raise InputNotFoundError(input_type, [lookup.label for lookup in lookups])

    def mapping_override(self, mapping: Type) -> Optional[Type]:
        """Return a same-named replacement for a built-in mapping, if any."""
        if not DEFAULT_INPUTS.contains(mapping):
            return None
        for lookup in self.override_lookups():
            found = lookup.find(mapping.__name__)
            if found is not None and found is not mapping:
                return found
        return None

    def override_lookups(self) -> List[NamespaceLookup]:
        """Custom namespaces, then the global namespace when discovery is enabled."""
        lookups = list(self.custom_lookups())
        if self.inputs_discovery:
            lookups.append(NamespaceLookup(GLOBAL_INPUTS, GLOBAL_INPUTS.name))
        return lookups

    def discovery_lookups(self) -> List[NamespaceLookup]:
        """Override lookups followed by the built-in namespace."""
        return self.override_lookups() + [NamespaceLookup(DEFAULT_INPUTS, DEFAULT_INPUTS.name)]

    def custom_lookups(self) -> List[NamespaceLookup]:
        if self._custom_lookups is None:
            lookups = []
            for reference in self._custom_namespaces:
                namespace = resolve_namespace(reference)
                lookups.append(NamespaceLookup(namespace, namespace_label(namespace)))
            self._custom_lookups = lookups
        return self._custom_lookups
