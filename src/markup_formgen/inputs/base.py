"""
Base class for all inputs (renderer implementations).

An input is bound to one field: the field renderer that created it and a
FieldDescriptor. Wrappers ask it for components by name:

- label / input / hint / error / full_error return Fragments (or None)
- html5 / min_max / maxlength / minlength / placeholder / pattern / readonly
  are decorators: they add attributes to the control and return None, so they
  must run before ``input`` in a wrapper

Subclasses implement ``input()``; everything else has a working default.
Asking for a component the input does not provide fails loud with TypeError.
"""

import copy
import logging
from abc import abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, List, Mapping, Optional, Tuple

from markup_formgen.core.fragments import Fragment, class_list
from markup_formgen.forms.input_registry import InputMeta
from markup_formgen.protocols.bound_model import AttributeMetadata

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldDescriptor:
    """Everything an input knows about its field. Rebuilt for every render call."""
    name: str
    semantic_type: str
    bound_metadata: Optional[AttributeMetadata] = None
    options: Mapping[str, Any] = field(default_factory=dict)


def _explicit_value(value: Any) -> Optional[Any]:
    """Return value if it is a usable int/str option (booleans only toggle components)."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float, str)):
        return value
    return None


class InputBase(metaclass=InputMeta):
    """
    ABC for inputs.

    Attributes:
        builder: The FieldRenderer rendering this field
        descriptor: Field descriptor
        options: Call-site options (copy; ``reflection`` removed)
        input_html_options: Attributes for the control, filled by decorators
        input_html_classes: Class list for the control
    """

    # Components this input never renders (returns None for them)
    disabled_components: FrozenSet[str] = frozenset()

    # Namespace the class registers in; None picks the default for its module
    input_namespace = None

    def __init__(self, builder: Any, descriptor: FieldDescriptor):
        self.builder = builder
        self.descriptor = descriptor
        self.config = builder.config
        self.attribute_name = descriptor.name
        self.column = descriptor.bound_metadata
        self.input_type = descriptor.semantic_type
        self.options: Dict[str, Any] = dict(descriptor.options)
        self.reflection = self.options.pop("reflection", None)

        self.input_html_options: Dict[str, Any] = copy.deepcopy(dict(self.options.get("input_html") or {}))
        self.input_html_classes: List[str] = list(
            class_list(self.additional_classes(), self.input_html_options.pop("class", None))
        )
        if self.disabled:
            self.input_html_options["disabled"] = True
        if self.options.get("autofocus"):
            self.input_html_options["autofocus"] = True

    # ==================== COMPONENT DISPATCH ====================

    def component_handlers(self) -> Dict[str, Callable[[Dict[str, Any]], Optional[Fragment]]]:
        """Component name -> handler. Subclasses may extend this to add components."""
        return {
            "label": self.label,
            "input": self.input,
            "hint": self.hint,
            "error": self.error,
            "full_error": self.full_error,
            "html5": self.html5,
            "min_max": self.min_max,
            "maxlength": self.maxlength,
            "minlength": self.minlength,
            "placeholder": self.placeholder,
            "pattern": self.pattern,
            "readonly": self.readonly,
        }

    def render_component(self, name: str, wrapper_options: Optional[Mapping[str, Any]] = None) -> Optional[Fragment]:
        """
        Render one component by name.

        Raises:
            TypeError: If this input does not provide the component
        """
        handler = self.component_handlers().get(name)
        if handler is None:
            raise TypeError(
                f"Input {type(self).__name__} does not provide component '{name}'. "
                f"Available components: {sorted(self.component_handlers())}"
            )
        if name in self.disabled_components:
            logger.debug(f"Component '{name}' disabled for {self.attribute_name}")
            return None
        return handler(dict(wrapper_options or {}))

    # ==================== FIELD STATE ====================

    @property
    def required(self) -> bool:
        explicit = self.options.get("required")
        if explicit is not None:
            return bool(explicit)
        model_required = self.builder.is_required(self.attribute_name)
        if model_required is None:
            return self.config.required_by_default
        return model_required

    @property
    def disabled(self) -> bool:
        return self.options.get("disabled") is True

    @property
    def errors(self) -> List[str]:
        return self.builder.errors_for(self.attribute_name, self.reflection)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def valid(self) -> bool:
        return self.builder.validated and not self.has_errors

    @property
    def multiple(self) -> bool:
        return bool(self.input_html_options.get("multiple"))

    @property
    def field_id(self) -> str:
        return self.input_html_options.get("id") or self.builder.field_id(self.attribute_name)

    @property
    def field_name(self) -> str:
        return self.builder.field_name(self.attribute_name, multiple=self.multiple)

    @property
    def value(self) -> Any:
        return self.builder.read_attribute(self.attribute_name)

    def additional_classes(self) -> Tuple[str, ...]:
        """Classes shared by the control, the label and the wrapper."""
        return class_list(
            self.input_type,
            "required" if self.required else "optional",
            "disabled" if self.disabled else None,
        )

    def wrapper_classes(self, wrapper_options: Mapping[str, Any]) -> Tuple[str, ...]:
        """Classes the wrapper element gets from this input."""
        state_class = None
        if self.has_errors:
            state_class = wrapper_options.get("error_class")
        elif self.valid:
            state_class = wrapper_options.get("valid_class")
        return class_list(self.additional_classes(), state_class)

    def validation_class(self, wrapper_options: Mapping[str, Any]) -> Optional[str]:
        """Validation-state class requested by the component options, if it applies."""
        if self.has_errors:
            return wrapper_options.get("error_class")
        if self.builder.validated:
            return wrapper_options.get("valid_class")
        return None

    def control_attributes(self, wrapper_options: Mapping[str, Any], **defaults: Any) -> Dict[str, Any]:
        """
        Attributes for the control element.

        Defaults (id, name and the given ones) are overridden by input_html
        options and decorator output.
        """
        attributes: Dict[str, Any] = {"id": self.field_id, "name": self.field_name}
        attributes.update(defaults)
        attributes.update(self.input_html_options)
        attributes["class"] = class_list(
            self.input_html_classes,
            self.validation_class(wrapper_options),
            wrapper_options.get("class"),
        )
        return attributes

    # ==================== CONTENT COMPONENTS ====================

    @abstractmethod
    def input(self, wrapper_options: Optional[Dict[str, Any]] = None) -> Fragment:
        """Render the control."""
        pass

    @property
    def human_name(self) -> str:
        name = self.reflection.name if self.reflection is not None else self.attribute_name
        return self.builder.human_attribute_name(name)

    def label_text(self) -> str:
        explicit = self.options.get("label")
        if isinstance(explicit, str):
            return explicit
        return self.human_name

    def label(self, wrapper_options: Optional[Dict[str, Any]] = None) -> Fragment:
        wrapper_options = wrapper_options or {}
        label_html = dict(self.options.get("label_html") or {})
        attributes = {"for": self.field_id, **label_html}
        attributes["class"] = class_list(self.additional_classes(), label_html.get("class"), wrapper_options.get("class"))

        children: Tuple[Fragment, ...] = ()
        if self.required:
            children = (Fragment(
                component="required_marker",
                tag="abbr",
                content=self.config.required_marker,
                attributes={"title": "required"},
            ),)
        return Fragment(component="label", tag="label", content=self.label_text(), attributes=attributes, children=children)

    def hint(self, wrapper_options: Optional[Dict[str, Any]] = None) -> Optional[Fragment]:
        wrapper_options = wrapper_options or {}
        text = self.options.get("hint")
        if not isinstance(text, str) or not text:
            return None
        hint_html = dict(self.options.get("hint_html") or {})
        hint_html["class"] = class_list("hint", hint_html.get("class"), wrapper_options.get("class"))
        tag = self.options.get("hint_tag") or wrapper_options.get("tag") or "span"
        return Fragment(component="hint", tag=tag, content=text, attributes=hint_html)

    def error_text(self) -> str:
        errors = self.errors
        method = self.options.get("error_method") or self.config.error_method
        if method == "to_sentence":
            text = to_sentence(errors)
        else:
            text = errors[0]
        prefix = self.options.get("error_prefix")
        return f"{prefix} {text}" if prefix else text

    def error(self, wrapper_options: Optional[Dict[str, Any]] = None) -> Optional[Fragment]:
        wrapper_options = wrapper_options or {}
        if not self.has_errors:
            return None
        error_html = dict(self.options.get("error_html") or {})
        error_html["class"] = class_list("error", error_html.get("class"), wrapper_options.get("class"))
        tag = self.options.get("error_tag") or wrapper_options.get("tag") or "span"
        return Fragment(component="error", tag=tag, content=self.error_text(), attributes=error_html)

    def full_error(self, wrapper_options: Optional[Dict[str, Any]] = None) -> Optional[Fragment]:
        wrapper_options = wrapper_options or {}
        if not self.has_errors:
            return None
        error_html = dict(self.options.get("error_html") or {})
        error_html["class"] = class_list("error", error_html.get("class"), wrapper_options.get("class"))
        tag = self.options.get("error_tag") or wrapper_options.get("tag") or "span"
        return Fragment(
            component="full_error",
            tag=tag,
            content=f"{self.human_name} {self.errors[0]}",
            attributes=error_html,
        )

    # ==================== ATTRIBUTE DECORATORS ====================

    def html5(self, wrapper_options: Optional[Dict[str, Any]] = None) -> None:
        if not self.config.html5:
            return None
        if self.required:
            if self.config.browser_validations:
                self.input_html_options.setdefault("required", True)
            self.input_html_options.setdefault("aria-required", True)
        if self.has_errors:
            self.input_html_options.setdefault("aria-invalid", True)
        return None

    def min_max(self, wrapper_options: Optional[Dict[str, Any]] = None) -> None:
        if self.column is None:
            return None
        if self.column.minimum is not None:
            self.input_html_options.setdefault("min", self.column.minimum)
        if self.column.maximum is not None:
            self.input_html_options.setdefault("max", self.column.maximum)
        return None

    def maxlength(self, wrapper_options: Optional[Dict[str, Any]] = None) -> None:
        length = _explicit_value(self.options.get("maxlength"))
        if length is None and self.column is not None:
            length = self.column.limit
        if length is not None:
            self.input_html_options.setdefault("maxlength", length)
        return None

    def minlength(self, wrapper_options: Optional[Dict[str, Any]] = None) -> None:
        length = _explicit_value(self.options.get("minlength"))
        if length is not None:
            self.input_html_options.setdefault("minlength", length)
        return None

    def placeholder(self, wrapper_options: Optional[Dict[str, Any]] = None) -> None:
        text = self.options.get("placeholder")
        if isinstance(text, str) and text:
            self.input_html_options.setdefault("placeholder", text)
        return None

    def pattern(self, wrapper_options: Optional[Dict[str, Any]] = None) -> None:
        source = self.options.get("pattern")
        if hasattr(source, "pattern"):
            source = source.pattern
        if isinstance(source, str) and source:
            self.input_html_options.setdefault("pattern", source)
        return None

    def readonly(self, wrapper_options: Optional[Dict[str, Any]] = None) -> None:
        if not self.options.get("readonly"):
            return None
        self.input_html_options.setdefault("readonly", True)
        if "readonly" not in self.input_html_classes:
            self.input_html_classes.append("readonly")
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.attribute_name!r}, input_type={self.input_type!r})"


class ComponentsOnlyInput(InputBase):
    """Input without a control, used by the standalone label / hint / error helpers."""

    _skip_registration = True
    disabled_components: FrozenSet[str] = frozenset({"input"})

    def input(self, wrapper_options: Optional[Dict[str, Any]] = None) -> None:
        return None


def humanize_value(value: Any) -> str:
    """Display text for a scalar collection item."""
    if isinstance(value, str):
        return value
    if value is True:
        return "Yes"
    if value is False:
        return "No"
    return str(value)


def to_sentence(words: List[str]) -> str:
    """
    Join words the way error messages are listed.

    Example:
        >>> to_sentence(["is short", "is invalid", "is taken"])
        'is short, is invalid, and is taken'
    """
    if len(words) <= 1:
        return "".join(words)
    if len(words) == 2:
        return f"{words[0]} and {words[1]}"
    return f"{', '.join(words[:-1])}, and {words[-1]}"
