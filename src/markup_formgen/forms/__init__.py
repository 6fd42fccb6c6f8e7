"""
Field resolution and rendering.

Type inference, input discovery, wrappers and the FieldRenderer that ties
them together.
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .field_renderer import FieldRenderer
    from .type_resolver import TypeResolver
    from .mapping_resolver import MappingResolver, NamespaceLookup
    from .wrapper_resolver import WrapperResolver
    from .wrappers import (
        WrapperDefinition,
        ComponentSpec,
        define_wrapper,
        register_wrapper,
        get_wrapper,
        unregister_wrapper,
    )
    from .input_registry import (
        InputMeta,
        InputMappings,
        InputNamespace,
        INPUT_MAPPINGS,
        DEFAULT_INPUTS,
        GLOBAL_INPUTS,
    )
    from .association import (
        AssociationAttribute,
        AssociationAttributeResolver,
        AssociationCollectionResolver,
        AssociationReference,
        Cardinality,
    )

_EXPORTS = {
    "FieldRenderer": ("markup_formgen.forms.field_renderer", "FieldRenderer"),
    "TypeResolver": ("markup_formgen.forms.type_resolver", "TypeResolver"),
    "MappingResolver": ("markup_formgen.forms.mapping_resolver", "MappingResolver"),
    "NamespaceLookup": ("markup_formgen.forms.mapping_resolver", "NamespaceLookup"),
    "WrapperResolver": ("markup_formgen.forms.wrapper_resolver", "WrapperResolver"),
    "WrapperDefinition": ("markup_formgen.forms.wrappers", "WrapperDefinition"),
    "ComponentSpec": ("markup_formgen.forms.wrappers", "ComponentSpec"),
    "define_wrapper": ("markup_formgen.forms.wrappers", "define_wrapper"),
    "register_wrapper": ("markup_formgen.forms.wrappers", "register_wrapper"),
    "get_wrapper": ("markup_formgen.forms.wrappers", "get_wrapper"),
    "unregister_wrapper": ("markup_formgen.forms.wrappers", "unregister_wrapper"),
    "InputMeta": ("markup_formgen.forms.input_registry", "InputMeta"),
    "InputMappings": ("markup_formgen.forms.input_registry", "InputMappings"),
    "InputNamespace": ("markup_formgen.forms.input_registry", "InputNamespace"),
    "INPUT_MAPPINGS": ("markup_formgen.forms.input_registry", "INPUT_MAPPINGS"),
    "DEFAULT_INPUTS": ("markup_formgen.forms.input_registry", "DEFAULT_INPUTS"),
    "GLOBAL_INPUTS": ("markup_formgen.forms.input_registry", "GLOBAL_INPUTS"),
    "AssociationAttribute": ("markup_formgen.forms.association", "AssociationAttribute"),
    "AssociationAttributeResolver": ("markup_formgen.forms.association", "AssociationAttributeResolver"),
    "AssociationCollectionResolver": ("markup_formgen.forms.association", "AssociationCollectionResolver"),
    "AssociationReference": ("markup_formgen.forms.association", "AssociationReference"),
    "Cardinality": ("markup_formgen.forms.association", "Cardinality"),
}


def __getattr__(name: str):
    if name in _EXPORTS:
        module_name, attr = _EXPORTS[name]
        module = importlib.import_module(module_name)
        value = getattr(module, attr)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = list(_EXPORTS.keys())
