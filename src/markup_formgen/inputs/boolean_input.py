"""Boolean check box input."""

from typing import Any, Dict, Optional

from markup_formgen.core.fragments import Fragment, class_list
from markup_formgen.inputs.base import InputBase


class BooleanInput(InputBase):
    """
    Check box preceded by a hidden unchecked value.

    Styles (``boolean_style`` option, else ``FormGenConfig.boolean_style``):

    - ``inline``: hidden field and check box side by side; the wrapper label
      renders as usual
    - ``nested``: the check box is nested inside a label carrying the inline
      label text
    """

    checked_value = "1"
    unchecked_value = "0"

    @property
    def boolean_style(self) -> str:
        return self.options.get("boolean_style") or self.config.boolean_style

    @property
    def nested_style(self) -> bool:
        return self.boolean_style == "nested"

    def is_checked(self) -> bool:
        value = self.value
        if isinstance(value, str):
            return value in (self.checked_value, "true", "on")
        return bool(value)

    def hidden_field(self) -> Optional[Fragment]:
        if self.options.get("include_hidden") is False:
            return None
        return Fragment(
            component="hidden",
            tag="input",
            attributes={"type": "hidden", "name": self.field_name, "value": self.unchecked_value},
        )

    def check_box(self, wrapper_options: Dict[str, Any]) -> Fragment:
        attributes = self.control_attributes(wrapper_options, type="checkbox", value=self.checked_value)
        if self.is_checked():
            attributes["checked"] = True
        return Fragment(component="check_box", tag="input", attributes=attributes)

    def inline_label(self) -> Optional[str]:
        inline = self.options.get("inline_label")
        if inline is True:
            return self.label_text()
        if isinstance(inline, str):
            return inline
        return None

    def input(self, wrapper_options: Optional[Dict[str, Any]] = None) -> Fragment:
        wrapper_options = wrapper_options or {}
        check_box = self.check_box(wrapper_options)
        if self.nested_style:
            check_box = Fragment(
                component="boolean_label",
                tag="label",
                content=self.inline_label(),
                attributes={"for": self.field_id, "class": class_list("checkbox")},
                children=(check_box,),
            )
        parts = [fragment for fragment in (self.hidden_field(), check_box) if fragment is not None]
        return Fragment.group(parts, component="input")

    def label(self, wrapper_options: Optional[Dict[str, Any]] = None) -> Optional[Fragment]:
        if self.nested_style and self.inline_label() is not None:
            return None
        return super().label(wrapper_options)

    @property
    def required(self) -> bool:
        # Not required by default; an unchecked box is a valid answer
        explicit = self.options.get("required")
        if explicit is not None:
            return bool(explicit)
        return bool(self.builder.is_required(self.attribute_name))
