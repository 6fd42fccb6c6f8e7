"""
Input registry with metaclass auto-registration.

Mirrors the widget registry pattern - inputs auto-register in a namespace when
their classes are defined, and a separate mapping table ties semantic types to
the built-in inputs.

Design:
- InputMeta metaclass handles auto-registration
- InputNamespace: named table of input classes, searched by class name
- DEFAULT_INPUTS: the inputs shipped with markup_formgen
- GLOBAL_INPUTS: the unscoped namespace every application input lands in
- InputMappings / INPUT_MAPPINGS: semantic type -> input class table
- Fail-loud on unknown namespaces and on mapping non-input classes
"""

import importlib
import logging
from abc import ABCMeta
from typing import Any, Dict, Iterator, Optional, Type, Union

from markup_formgen.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_PACKAGE_PREFIX = "markup_formgen."


class InputNamespace:
    """
    Named table of input classes, keyed by unqualified class name.

    Example:
        ADMIN_INPUTS = InputNamespace("admin_inputs")

        class StringInput(markup_formgen.inputs.StringInput):
            input_namespace = ADMIN_INPUTS

        ADMIN_INPUTS.get("StringInput")  # the admin override
    """

    def __init__(self, name: str):
        self.name = name
        self._inputs: Dict[str, Type] = {}

    def register(self, input_class: Type) -> Type:
        """Register an input class under its class name. Returns the class (decorator-friendly)."""
        class_name = input_class.__name__
        existing = self._inputs.get(class_name)
        if existing is not None and existing is not input_class:
            logger.warning(
                f"Input '{class_name}' already registered in namespace '{self.name}' "
                f"from {existing.__module__}. Overwriting with {input_class.__module__}."
            )
        self._inputs[class_name] = input_class
        logger.debug(f"Registered {class_name} in input namespace '{self.name}'")
        return input_class

    def get(self, class_name: str) -> Optional[Type]:
        """Return the input class registered under a name, or None."""
        return self._inputs.get(class_name)

    def contains(self, input_class: Type) -> bool:
        """Return True if this exact class is registered here."""
        return self._inputs.get(input_class.__name__) is input_class

    def clear(self) -> None:
        self._inputs.clear()

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._inputs))

    def __len__(self) -> int:
        return len(self._inputs)

    def __repr__(self) -> str:
        return f"InputNamespace({self.name!r}, {sorted(self._inputs)})"


DEFAULT_INPUTS = InputNamespace("markup_formgen.inputs")
GLOBAL_INPUTS = InputNamespace("<global>")


class InputMeta(ABCMeta):
    """
    Metaclass for automatic input registration.

    1. Only registers concrete implementations (no abstract methods)
    2. Skips classes declaring ``_skip_registration = True``
    3. Picks the namespace: the class's own ``input_namespace`` if it declares
       one, DEFAULT_INPUTS for classes of this package, GLOBAL_INPUTS otherwise

    Example:
        class CurrencyInput(NumericInput):
            def input(self, wrapper_options=None): ...

    CurrencyInput auto-registers in GLOBAL_INPUTS, so ``as="currency"``
    finds it without touching the mapping table.
    """

    def __new__(mcs, name, bases, attrs):
        new_class = super().__new__(mcs, name, bases, attrs)

        abstract_methods = getattr(new_class, "__abstractmethods__", None)
        if abstract_methods:
            logger.debug(f"Skipping registration for {name} - abstract methods remaining: {set(abstract_methods)}")
            return new_class

        if attrs.get("_skip_registration"):
            logger.debug(f"Skipping registration for {name} - registration disabled")
            return new_class

        namespace = attrs.get("input_namespace")
        if namespace is None:
            module = attrs.get("__module__", "")
            namespace = DEFAULT_INPUTS if module.startswith(_PACKAGE_PREFIX) else GLOBAL_INPUTS

        namespace.register(new_class)
        return new_class


def resolve_namespace(reference: Union[str, InputNamespace, Any]) -> Union[InputNamespace, Any]:
    """
    Turn a configured custom namespace into something searchable.

    Args:
        reference: InputNamespace, imported module, or dotted module path

    Returns:
        The InputNamespace or module object

    Raises:
        ConfigurationError: If a dotted path cannot be imported
    """
    if isinstance(reference, str):
        try:
            return importlib.import_module(reference)
        except ImportError as e:
            raise ConfigurationError(f"Custom inputs namespace '{reference}' cannot be imported: {e}") from e
    return reference


def namespace_label(reference: Any) -> str:
    """Display name of a namespace for logs and error messages."""
    if isinstance(reference, InputNamespace):
        return reference.name
    return getattr(reference, "__name__", str(reference))


def find_in_namespace(reference: Any, class_name: str) -> Optional[Type]:
    """
    Look up an input class by name in an InputNamespace or module.

    Module attributes that are not input classes are ignored.
    """
    if isinstance(reference, InputNamespace):
        return reference.get(class_name)

    candidate = getattr(reference, class_name, None)
    if isinstance(candidate, InputMeta) and not getattr(candidate, "__abstractmethods__", None):
        return candidate
    return None


class InputMappings:
    """
    Semantic type -> input class table.

    Populated at import time and read-only while rendering. Entries can be
    added or overridden, never removed.
    """

    def __init__(self):
        self._mappings: Dict[str, Type] = {}

    def map_type(self, *input_types: str, to: Type) -> None:
        """
        Map one or more semantic types to an input class.

        Raises:
            TypeError: If ``to`` is not an input class
        """
        if not isinstance(to, InputMeta):
            raise TypeError(f"Cannot map {input_types} to {to!r}: not an input class (use InputMeta)")
        for input_type in input_types:
            if input_type in self._mappings and self._mappings[input_type] is not to:
                logger.warning(
                    f"Overriding mapping for '{input_type}': "
                    f"{self._mappings[input_type].__name__} -> {to.__name__}"
                )
            self._mappings[input_type] = to

    def get(self, input_type: str) -> Optional[Type]:
        return self._mappings.get(input_type)

    def __contains__(self, input_type: str) -> bool:
        return input_type in self._mappings

    def types_for(self, input_class: Type) -> list:
        """Semantic types mapped to an input class."""
        return [input_type for input_type, mapped in self._mappings.items() if mapped is input_class]


# Global mapping table, populated by markup_formgen.inputs
INPUT_MAPPINGS = InputMappings()
