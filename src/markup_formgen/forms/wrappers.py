"""
Wrapper definitions and the named wrapper registry.

A wrapper is an ordered list of components (label, input, hint, error and the
attribute decorators) plus options for the element that surrounds them.
Component order is render order. Decorator components run before the control
and only contribute attributes to it.

Example:
    define_wrapper(
        "vertical",
        "html5", "placeholder", "label", "input",
        ("hint", {"tag": "small"}), "error",
        tag="div", **{"class": "form-group"},
    )
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from markup_formgen.core.fragments import Fragment, class_list
from markup_formgen.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_WRAPPER_OPTIONS: Mapping[str, Any] = {
    "tag": "div",
    "class": ("input",),
    "error_class": "field_with_errors",
    "valid_class": None,
}


@dataclass(frozen=True)
class ComponentSpec:
    """One component of a wrapper and the options passed to it when rendering."""
    name: str
    render_options: Dict[str, Any] = field(default_factory=dict)


ComponentLike = Union[str, ComponentSpec, Tuple[str, Mapping[str, Any]]]


def as_component_spec(component: ComponentLike) -> ComponentSpec:
    if isinstance(component, ComponentSpec):
        return component
    if isinstance(component, str):
        return ComponentSpec(component)
    name, render_options = component
    return ComponentSpec(name, dict(render_options))


@dataclass(frozen=True)
class WrapperDefinition:
    """
    Ordered composition template surrounding a control.

    Attributes:
        name: Registry name
        components: Components in render order
        options: Wrapper element options (tag, class, error_class, valid_class);
            ``wrapper: False`` renders the components without a surrounding element
    """
    name: str
    components: Tuple[ComponentSpec, ...]
    options: Dict[str, Any] = field(default_factory=lambda: dict(DEFAULT_WRAPPER_OPTIONS))

    @property
    def component_names(self) -> Tuple[str, ...]:
        return tuple(component.name for component in self.components)

    def find(self, name: str) -> Optional[ComponentSpec]:
        """Return the component with this name, or None."""
        return next((component for component in self.components if component.name == name), None)

    def render_components(self, input: Any) -> Tuple[Fragment, ...]:
        """
        Render each component in declared order.

        Components whose option is explicitly False are skipped; components
        returning None (decorators, empty hints) contribute nothing. Neither
        affects the position of the others.
        """
        fragments = []
        for component in self.components:
            if input.options.get(component.name) is False:
                logger.debug(f"Wrapper '{self.name}': component '{component.name}' disabled for {input.attribute_name}")
                continue
            fragment = input.render_component(component.name, component.render_options)
            if fragment is not None:
                fragments.append(fragment)
        return tuple(fragments)

    def render(self, input: Any) -> Fragment:
        """
        Render an input through this wrapper.

        Returns:
            A "wrapper" fragment with the component fragments as children, or
            an untagged "field" group when wrapping is disabled
        """
        fragments = self.render_components(input)

        tag = self.options.get("tag")
        if not tag or self.options.get("wrapper") is False or input.options.get("wrapper") is False:
            return Fragment.group(fragments, component="field")

        attributes = dict(input.options.get("wrapper_html") or {})
        attributes["class"] = class_list(
            self.options.get("class"),
            input.wrapper_classes(self.options),
            attributes.get("class"),
        )
        return Fragment(component="wrapper", tag=tag, attributes=attributes, children=fragments)


# Registry of named wrappers
_WRAPPERS: Dict[str, WrapperDefinition] = {}


def register_wrapper(definition: WrapperDefinition) -> WrapperDefinition:
    """Register a wrapper under its name, replacing any previous one."""
    if definition.name in _WRAPPERS:
        logger.debug(f"Replacing wrapper '{definition.name}'")
    _WRAPPERS[definition.name] = definition
    return definition


def define_wrapper(name: str, *components: ComponentLike, **options: Any) -> WrapperDefinition:
    """
    Build and register a wrapper.

    Args:
        name: Registry name
        *components: Component names, (name, render_options) pairs or ComponentSpecs
        **options: Wrapper options merged over DEFAULT_WRAPPER_OPTIONS

    Returns:
        The registered WrapperDefinition
    """
    definition = WrapperDefinition(
        name=name,
        components=tuple(as_component_spec(component) for component in components),
        options={**DEFAULT_WRAPPER_OPTIONS, **options},
    )
    return register_wrapper(definition)


def get_wrapper(name: str) -> WrapperDefinition:
    """
    Get a registered wrapper by name.

    Raises:
        ConfigurationError: If no wrapper is registered with that name
    """
    try:
        return _WRAPPERS[str(name)]
    except KeyError:
        raise ConfigurationError(
            f"Couldn't find wrapper with name '{name}'. Available wrappers: {sorted(_WRAPPERS)}"
        ) from None


def unregister_wrapper(name: str) -> None:
    _WRAPPERS.pop(name, None)


define_wrapper(
    "default",
    "html5",
    "placeholder",
    "maxlength",
    "minlength",
    "pattern",
    "min_max",
    "readonly",
    "label",
    "input",
    "hint",
    "error",
)
