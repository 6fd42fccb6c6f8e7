"""Wrapper selection for a field."""

import logging
from typing import Any, Mapping, Optional, Union

from markup_formgen.forms.wrappers import WrapperDefinition, get_wrapper

logger = logging.getLogger(__name__)

WrapperRef = Union[str, WrapperDefinition]


class WrapperResolver:
    """
    Picks the wrapper for a semantic type.

    Precedence: explicit option > per-form mapping > global mapping > default.
    Evaluated on every call; there is nothing worth caching.
    """

    def resolve(
        self,
        input_type: str,
        explicit_wrapper: Optional[Any],
        per_form_mappings: Optional[Mapping[str, WrapperRef]],
        global_mappings: Optional[Mapping[str, WrapperRef]],
        default_wrapper: WrapperRef,
    ) -> WrapperDefinition:
        """
        Resolve the wrapper for a field.

        Args:
            input_type: Semantic type of the field
            explicit_wrapper: ``wrapper`` call-site option (definition or name); False/None mean unset
            per_form_mappings: Wrapper mappings given to the form
            global_mappings: Wrapper mappings from configuration
            default_wrapper: The form's default wrapper

        Returns:
            WrapperDefinition

        Raises:
            ConfigurationError: If a wrapper name is not registered
        """
        if explicit_wrapper:
            return self.resolve_reference(explicit_wrapper)

        if per_form_mappings and per_form_mappings.get(input_type):
            logger.debug(f"'{input_type}': using per-form wrapper mapping")
            return self.resolve_reference(per_form_mappings[input_type])

        if global_mappings and global_mappings.get(input_type):
            logger.debug(f"'{input_type}': using global wrapper mapping")
            return self.resolve_reference(global_mappings[input_type])

        return self.resolve_reference(default_wrapper)

    @staticmethod
    def resolve_reference(reference: WrapperRef) -> WrapperDefinition:
        """Return a definition as is, or look a name up in the wrapper registry."""
        if isinstance(reference, WrapperDefinition):
            return reference
        return get_wrapper(reference)
