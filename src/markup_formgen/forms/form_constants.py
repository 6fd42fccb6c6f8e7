"""
Form constants for eliminating magic strings throughout the field renderer.

Ordering of NAME_HEURISTICS and FILE_PROBES is observable behavior: an
attribute matching several entries resolves to the first one.
"""

from dataclasses import dataclass
from typing import FrozenSet, Mapping, Tuple
from types import MappingProxyType


@dataclass(frozen=True)
class FormConstants:
    """
    Centralized constants for type inference and rendering.

    Categories:
    - Type inference (heuristic order, probes, normalization)
    - Control-only rendering (decorator components, reserved options)
    - Lookup helpers (action aliases)
    """

    # Ordered (name fragment, semantic type) pairs tried against string-like attributes
    NAME_HEURISTICS: Tuple[Tuple[str, str], ...] = (
        ("password", "password"),
        ("time_zone", "time_zone"),
        ("country", "country"),
        ("email", "email"),
        ("phone", "tel"),
        ("url", "url"),
    )

    # Boundary around a heuristic fragment: word boundary, non-word char or underscore
    NAME_BOUNDARY: str = r"(?:\b|\W|_)"

    # Capability probes that mark an attribute as a file upload, in priority order
    FILE_PROBES: Tuple[str, ...] = (
        "{name}_attachment",
        "{name}_attachments",
        "remote_{name}_url",
        "{name}_attacher",
        "{name}_file_name",
    )

    # Storage types that get name heuristics applied (None = unknown)
    STRING_LIKE_TYPES: FrozenSet[object] = frozenset({"string", "citext", None})

    TIMESTAMP_TYPE: str = "timestamp"
    DATETIME_TYPE: str = "datetime"
    STRING_TYPE: str = "string"
    SELECT_TYPE: str = "select"
    FILE_TYPE: str = "file"

    # Components that only add attributes to the control
    ATTRIBUTE_COMPONENTS: Tuple[str, ...] = (
        "html5", "min_max", "maxlength", "minlength", "placeholder", "pattern", "readonly",
    )

    # Options never folded into the control's attributes by control-only rendering
    INPUT_FIELD_RESERVED_OPTIONS: Tuple[str, ...] = (
        "as", "boolean_style", "collection", "disabled", "label_method", "value_method", "prompt",
    )

    # Options that do not belong on standalone label/hint/error fragments
    LABEL_RESERVED_OPTIONS: Tuple[str, ...] = ("label", "label_text", "required", "as")
    HINT_RESERVED_OPTIONS: Tuple[str, ...] = ("hint_tag", "hint")
    ERROR_RESERVED_OPTIONS: Tuple[str, ...] = ("error_tag", "error_prefix", "error_method")

    CONTROL_COMPONENT: str = "input"
    COLLECTION_SELECT_TYPES: FrozenSet[str] = frozenset({"select", "grouped_select"})

    # Suffix of conventional input class names: "color" -> "ColorInput"
    INPUT_CLASS_SUFFIX: str = "Input"

    NESTED_ATTRIBUTES_SUFFIX: str = "_attributes"


CONSTANTS = FormConstants()

# When action is create or update, lookups still use new and edit
ACTIONS: Mapping[str, str] = MappingProxyType({
    "create": "new",
    "update": "edit",
})
