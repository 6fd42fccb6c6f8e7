"""Base configuration class for form field resolution.

Provides hooks for applications to customize type inference, input discovery,
wrappers and the CSS class names injected by the field renderer.
"""

from typing import Any, Dict, List, Optional, Pattern, Sequence, Tuple, Union
from dataclasses import dataclass, field


@dataclass
class FormGenConfig:
    """Base configuration for form field resolution and rendering.

    Applications can subclass this or build one with ``dataclasses.replace``.

    Attributes:
        input_mappings: Ordered (name pattern, semantic type) pairs consulted
            before any heuristic. First matching pattern wins.
        custom_inputs_namespaces: Ordered input namespaces (InputNamespace
            objects or dotted module paths) searched before the defaults.
        cache_discovery: Share the discovery cache across every form in the
            process instead of keeping one per form.
        inputs_discovery: Allow lookups in the unscoped global input namespace.
        wrapper_mappings: Semantic type -> wrapper name or definition.
        default_wrapper: Name of the wrapper used when nothing else applies.
        button_class: CSS class prepended to every button.
        input_field_valid_class: Class added to control-only fields that passed validation.
        input_field_error_class: Class added to control-only fields with errors.
    """

    input_mappings: List[Tuple[Union[str, Pattern], str]] = field(default_factory=list)
    custom_inputs_namespaces: List[Any] = field(default_factory=list)
    cache_discovery: bool = False
    inputs_discovery: bool = True
    wrapper_mappings: Dict[str, Any] = field(default_factory=dict)
    default_wrapper: str = "default"
    button_class: str = "button"
    input_field_valid_class: Optional[str] = None
    input_field_error_class: Optional[str] = None
    required_by_default: bool = True
    boolean_style: str = "inline"
    html5: bool = True
    browser_validations: bool = True
    country_priority: Optional[Sequence[Any]] = None
    time_zone_priority: Optional[Sequence[Any]] = None
    collection_label_methods: Tuple[str, ...] = ("to_label", "name", "title")
    collection_value_methods: Tuple[str, ...] = ("id", "value")
    error_method: str = "first"
    required_marker: str = "*"
    error_notification_tag: str = "p"
    error_notification_class: str = "error_notification"
    error_notification_message: str = "Please review the problems below:"


# Global config instance (set by application)
_form_config: Optional[FormGenConfig] = None


def set_form_config(config: FormGenConfig) -> None:
    """Set the global form configuration.

    Args:
        config: FormGenConfig instance
    """
    global _form_config
    _form_config = config


def get_form_config() -> FormGenConfig:
    """Get the current form configuration.

    The default instance is created on first use and kept, so mutations made
    through the returned object are visible to later callers.

    Returns:
        Current FormGenConfig
    """
    global _form_config
    if _form_config is None:
        _form_config = FormGenConfig()
    return _form_config


def reset_form_config() -> None:
    """Drop the global configuration so the next access builds a fresh default."""
    global _form_config
    _form_config = None
