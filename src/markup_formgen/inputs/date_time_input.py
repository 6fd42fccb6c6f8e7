"""Date, time and datetime inputs."""

import datetime
from typing import Any, Dict, Mapping, Optional

from markup_formgen.core.fragments import Fragment
from markup_formgen.inputs.base import InputBase


class DateTimeInput(InputBase):
    """
    Date/time control.

    With ``html5: True`` a single native control is rendered; otherwise the
    control is a ``{type}_select`` group the template expands into selects.
    """

    HTML5_TYPES: Mapping[str, str] = {
        "date": "date",
        "time": "time",
        "datetime": "datetime-local",
    }

    @property
    def html5_control(self) -> bool:
        return bool(self.options.get("html5"))

    def formatted_value(self) -> Any:
        value = self.value
        if isinstance(value, (datetime.date, datetime.time)):
            return value.isoformat()
        return value

    def label_target(self) -> str:
        """Id the label points at; select groups point at their first part."""
        if self.html5_control:
            return self.field_id
        first_part = "1i" if self.input_type in ("date", "datetime") else "4i"
        return f"{self.field_id}_{first_part}"

    def label(self, wrapper_options: Optional[Dict[str, Any]] = None) -> Fragment:
        fragment = super().label(wrapper_options)
        attributes = {**fragment.attributes, "for": self.label_target()}
        return Fragment(
            component=fragment.component,
            tag=fragment.tag,
            content=fragment.content,
            attributes=attributes,
            children=fragment.children,
        )

    def input(self, wrapper_options: Optional[Dict[str, Any]] = None) -> Fragment:
        wrapper_options = wrapper_options or {}
        if self.html5_control:
            html_type = self.HTML5_TYPES.get(self.input_type, "datetime-local")
            attributes = self.control_attributes(wrapper_options, type=html_type, value=self.formatted_value())
            return Fragment(component="input", tag="input", attributes=attributes)

        attributes = self.control_attributes(wrapper_options, value=self.value)
        for key in ("include_blank", "prompt", "start_year", "end_year", "minute_step", "order"):
            if key in self.options:
                attributes[key] = self.options[key]
        return Fragment(component="input", tag=f"{self.input_type}_select", attributes=attributes)
