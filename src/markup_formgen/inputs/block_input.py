"""Input whose control is caller-supplied content."""

from typing import Any, Callable, Dict, Optional

from markup_formgen.core.fragments import Fragment
from markup_formgen.inputs.base import FieldDescriptor, InputBase


class BlockInput(InputBase):
    """
    Wraps a block in the regular label / hint / error components.

    The block is called once per control render; its return value becomes the
    control content.
    """

    _skip_registration = True

    def __init__(self, builder: Any, descriptor: FieldDescriptor, block: Callable[[], Any]):
        self.block = block
        super().__init__(builder, descriptor)

    def input(self, wrapper_options: Optional[Dict[str, Any]] = None) -> Fragment:
        return Fragment(component="input", content=self.block())
