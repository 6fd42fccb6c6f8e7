"""
markup-formgen: form field resolution for bound models.

Turns a model attribute into an abstract, wrapped form field: the semantic
type is inferred, an input class is discovered for it, and a wrapper composes
label, control, hint and error fragments for a template layer to emit.

Architecture:
- Tier 1 (Core): Fragments, option merging, discovery cache
- Tier 2 (Protocols): Bound model ABCs, dataclass adapter, configuration
- Tier 3 (Forms): Type/mapping/wrapper resolution, associations, FieldRenderer
- Tier 4 (Inputs): Built-in inputs, auto-registered by metaclass

Key Features:
- Name heuristics and column metadata drive type inference
- Inputs overridable per type through custom namespaces
- Ordered, suppressible wrapper components
- Control-only rendering that keeps attribute decorators
"""

__version__ = "0.1.0"

from markup_formgen.exceptions import ConfigurationError, FormGenError, InputNotFoundError
from markup_formgen.core.fragments import Fragment
from markup_formgen.protocols.form_config import FormGenConfig, get_form_config, reset_form_config, set_form_config
from markup_formgen.protocols.model_adapters import AttributeHints, DataclassModel
from markup_formgen.forms.field_renderer import FieldRenderer
from markup_formgen.forms.wrappers import define_wrapper

__all__ = [
    "__version__",
    "FieldRenderer",
    "Fragment",
    "DataclassModel",
    "AttributeHints",
    "FormGenConfig",
    "get_form_config",
    "set_form_config",
    "reset_form_config",
    "define_wrapper",
    "FormGenError",
    "InputNotFoundError",
    "ConfigurationError",
]
