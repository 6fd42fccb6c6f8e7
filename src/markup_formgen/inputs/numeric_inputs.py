"""Numeric inputs."""

from typing import Any, Dict, Optional

from markup_formgen.core.fragments import Fragment
from markup_formgen.inputs.base import InputBase


class NumericInput(InputBase):
    """Number control for integer, decimal and float attributes."""

    html_type = "number"

    @property
    def integer(self) -> bool:
        return self.input_type == "integer" or (self.column is not None and self.column.type == "integer")

    def input(self, wrapper_options: Optional[Dict[str, Any]] = None) -> Fragment:
        wrapper_options = wrapper_options or {}
        defaults = {"type": self.html_type, "value": self.value}
        if self.config.html5:
            defaults["step"] = 1 if self.integer else "any"
        return Fragment(component="input", tag="input", attributes=self.control_attributes(wrapper_options, **defaults))


class RangeInput(NumericInput):
    """Slider control."""

    html_type = "range"

    @property
    def integer(self) -> bool:
        # Sliders step by whole units unless told otherwise
        return True
