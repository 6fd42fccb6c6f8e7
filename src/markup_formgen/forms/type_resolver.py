"""
Semantic type inference.

Given an attribute name, call-site options and the bound model's column
metadata, decide which kind of field to render ("string", "password",
"select", ...). Resolution is a pure function of its arguments; the only
state is the custom pattern table fixed at construction.

Precedence (first match wins):
1. explicit ``as`` option
2. custom name patterns from configuration
3. ``collection`` option -> select
4. column type (timestamp -> datetime, encrypted -> string)
5. name heuristics for string-like columns
6. file capability probes
7. column type, or string
"""

import logging
import re
from typing import Any, FrozenSet, Iterable, List, Mapping, Optional, Pattern, Tuple, Union

from markup_formgen.forms.form_constants import CONSTANTS
from markup_formgen.protocols.bound_model import AttributeMetadata

logger = logging.getLogger(__name__)


def _heuristic_pattern(fragment: str) -> Pattern:
    boundary = CONSTANTS.NAME_BOUNDARY
    return re.compile(f"{boundary}{re.escape(fragment)}{boundary}", re.IGNORECASE)


_NAME_HEURISTICS: Tuple[Tuple[Pattern, str], ...] = tuple(
    (_heuristic_pattern(fragment), input_type) for fragment, input_type in CONSTANTS.NAME_HEURISTICS
)


class TypeResolver:
    """
    Infers the semantic type of a field.

    Example:
        resolver = TypeResolver([(r"_html$", "text")])
        resolver.resolve("user_email", {}, AttributeMetadata("string"))   # "email"
        resolver.resolve("body_html", {}, AttributeMetadata("string"))    # "text"
        resolver.resolve("user_email", {"as": "password"}, None)           # "password"
    """

    def __init__(self, input_mappings: Iterable[Tuple[Union[str, Pattern], str]] = ()):
        self._input_mappings: List[Tuple[Pattern, str]] = [
            (re.compile(pattern) if isinstance(pattern, str) else pattern, str(input_type))
            for pattern, input_type in input_mappings
        ]

    def resolve(
        self,
        attribute_name: str,
        options: Mapping[str, Any],
        column: Optional[AttributeMetadata],
        capabilities: FrozenSet[str] = frozenset(),
    ) -> str:
        """
        Resolve the semantic type for an attribute.

        Args:
            attribute_name: Attribute being rendered
            options: Call-site options (``as`` and ``collection`` are consulted)
            column: Column metadata from the bound model, if any
            capabilities: Capability probes answered by the bound model

        Returns:
            Semantic type name
        """
        name = str(attribute_name)

        explicit = options.get("as")
        if explicit:
            return str(explicit)

        custom_type = self.find_custom_type(name)
        if custom_type:
            return custom_type

        if options.get("collection") is not None:
            return CONSTANTS.SELECT_TYPE

        base_type = self.column_type(column)
        if base_type == CONSTANTS.TIMESTAMP_TYPE:
            return CONSTANTS.DATETIME_TYPE

        if base_type in CONSTANTS.STRING_LIKE_TYPES:
            for pattern, input_type in _NAME_HEURISTICS:
                if pattern.search(name):
                    logger.debug(f"Attribute '{name}' matched name heuristic -> {input_type}")
                    return input_type

            if self.is_file_attribute(name, capabilities):
                logger.debug(f"Attribute '{name}' answers a file probe -> {CONSTANTS.FILE_TYPE}")
                return CONSTANTS.FILE_TYPE

            return base_type or CONSTANTS.STRING_TYPE

        return base_type

    def find_custom_type(self, attribute_name: str) -> Optional[str]:
        """Return the type of the first custom pattern matching the name."""
        for pattern, input_type in self._input_mappings:
            if pattern.search(attribute_name):
                logger.debug(f"Attribute '{attribute_name}' matched custom mapping {pattern.pattern!r} -> {input_type}")
                return input_type
        return None

    @staticmethod
    def column_type(column: Optional[AttributeMetadata]) -> Optional[str]:
        """Storage type of a column, with encrypted attributes treated as strings."""
        if column is None:
            return None
        if column.encrypted:
            return CONSTANTS.STRING_TYPE
        return column.type

    @staticmethod
    def is_file_attribute(attribute_name: str, capabilities: FrozenSet[str]) -> bool:
        """Return True if any file probe for the attribute is in the capability set."""
        return any(probe.format(name=attribute_name) in capabilities for probe in CONSTANTS.FILE_PROBES)
