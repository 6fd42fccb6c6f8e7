"""
Collaborator contracts and configuration.

ABC-based contracts for the bound model, the dataclass adapter and the
global form configuration.
"""

from .bound_model import (
    AttributeMetadata,
    AssociationMacro,
    AssociationTarget,
    QueryableRelation,
    AssociationReflection,
    BoundModel,
)
from .model_adapters import AttributeHints, DataclassModel
from .form_config import FormGenConfig, set_form_config, get_form_config, reset_form_config

__all__ = [
    "AttributeMetadata",
    "AssociationMacro",
    "AssociationTarget",
    "QueryableRelation",
    "AssociationReflection",
    "BoundModel",
    "AttributeHints",
    "DataclassModel",
    "FormGenConfig",
    "set_form_config",
    "get_form_config",
    "reset_form_config",
]
