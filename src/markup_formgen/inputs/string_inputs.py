"""Text-like inputs: single-line strings, passwords, text areas, hidden and file fields."""

from typing import Any, Dict, FrozenSet, Mapping, Optional

from markup_formgen.core.fragments import Fragment
from markup_formgen.inputs.base import InputBase


class StringInput(InputBase):
    """Single-line text control; the semantic type picks the control type (email, url, tel...)."""

    HTML_TYPES: Mapping[str, str] = {
        "string": "text",
        "citext": "text",
        "uuid": "text",
        "email": "email",
        "url": "url",
        "tel": "tel",
        "search": "search",
        "password": "password",
    }

    def html_type(self) -> str:
        return self.HTML_TYPES.get(self.input_type, "text")

    def control_value(self) -> Any:
        return self.value

    def input(self, wrapper_options: Optional[Dict[str, Any]] = None) -> Fragment:
        wrapper_options = wrapper_options or {}
        attributes = self.control_attributes(wrapper_options, type=self.html_type(), value=self.control_value())
        return Fragment(component="input", tag="input", attributes=attributes)


class PasswordInput(StringInput):
    """Password control. The stored value is never echoed back."""

    def html_type(self) -> str:
        return "password"

    def control_value(self) -> Any:
        return None


class TextInput(InputBase):
    """Multi-line text area; the value is the element content."""

    def input(self, wrapper_options: Optional[Dict[str, Any]] = None) -> Fragment:
        wrapper_options = wrapper_options or {}
        return Fragment(
            component="input",
            tag="textarea",
            content=self.value,
            attributes=self.control_attributes(wrapper_options),
        )


class RichTextAreaInput(InputBase):
    """Rich text editor area."""

    def input(self, wrapper_options: Optional[Dict[str, Any]] = None) -> Fragment:
        wrapper_options = wrapper_options or {}
        return Fragment(
            component="input",
            tag="rich_text_area",
            content=self.value,
            attributes=self.control_attributes(wrapper_options),
        )


class FileInput(InputBase):
    """File upload control."""

    def input(self, wrapper_options: Optional[Dict[str, Any]] = None) -> Fragment:
        wrapper_options = wrapper_options or {}
        return Fragment(component="input", tag="input", attributes=self.control_attributes(wrapper_options, type="file"))


class HiddenInput(InputBase):
    """Hidden control. Renders no label, hint or error and is never required."""

    disabled_components: FrozenSet[str] = frozenset({"label", "hint", "error", "full_error"})

    @property
    def required(self) -> bool:
        return False

    def additional_classes(self):
        return (self.input_type,)

    def input(self, wrapper_options: Optional[Dict[str, Any]] = None) -> Fragment:
        wrapper_options = wrapper_options or {}
        attributes = self.control_attributes(wrapper_options, type="hidden", value=self.value)
        return Fragment(component="input", tag="input", attributes=attributes)
