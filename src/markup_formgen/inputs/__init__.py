"""
Built-in inputs.

Importing this package registers every built-in input in DEFAULT_INPUTS (via
InputMeta) and fills the default type mapping table, INPUT_MAPPINGS.
"""

from markup_formgen.forms.input_registry import INPUT_MAPPINGS

from .base import ComponentsOnlyInput, FieldDescriptor, InputBase
from .block_input import BlockInput
from .boolean_input import BooleanInput
from .collection_inputs import (
    CollectionCheckBoxesInput,
    CollectionInput,
    CollectionRadioButtonsInput,
    CollectionSelectInput,
    GroupedCollectionSelectInput,
    PriorityInput,
)
from .date_time_input import DateTimeInput
from .numeric_inputs import NumericInput, RangeInput
from .string_inputs import FileInput, HiddenInput, PasswordInput, RichTextAreaInput, StringInput, TextInput

INPUT_MAPPINGS.map_type("text", "hstore", "json", "jsonb", to=TextInput)
INPUT_MAPPINGS.map_type("file", to=FileInput)
INPUT_MAPPINGS.map_type("string", "email", "search", "tel", "url", "uuid", "citext", to=StringInput)
INPUT_MAPPINGS.map_type("password", to=PasswordInput)
INPUT_MAPPINGS.map_type("integer", "decimal", "float", to=NumericInput)
INPUT_MAPPINGS.map_type("range", to=RangeInput)
INPUT_MAPPINGS.map_type("check_boxes", to=CollectionCheckBoxesInput)
INPUT_MAPPINGS.map_type("radio_buttons", to=CollectionRadioButtonsInput)
INPUT_MAPPINGS.map_type("rich_text_area", to=RichTextAreaInput)
INPUT_MAPPINGS.map_type("select", to=CollectionSelectInput)
INPUT_MAPPINGS.map_type("grouped_select", to=GroupedCollectionSelectInput)
INPUT_MAPPINGS.map_type("date", "time", "datetime", to=DateTimeInput)
INPUT_MAPPINGS.map_type("country", "time_zone", to=PriorityInput)
INPUT_MAPPINGS.map_type("boolean", to=BooleanInput)
INPUT_MAPPINGS.map_type("hidden", to=HiddenInput)

__all__ = [
    "InputBase",
    "FieldDescriptor",
    "ComponentsOnlyInput",
    "BlockInput",
    "BooleanInput",
    "CollectionInput",
    "CollectionSelectInput",
    "GroupedCollectionSelectInput",
    "CollectionRadioButtonsInput",
    "CollectionCheckBoxesInput",
    "PriorityInput",
    "DateTimeInput",
    "NumericInput",
    "RangeInput",
    "StringInput",
    "PasswordInput",
    "TextInput",
    "RichTextAreaInput",
    "FileInput",
    "HiddenInput",
]
