"""
Association helpers.

Translate an association declared on the bound model into the attribute the
field renders (``company`` -> ``company_id``, ``tags`` -> ``tag_ids``) and the
collection of records offered as choices.
"""

import inspect
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

import inflection

from markup_formgen.exceptions import ConfigurationError
from markup_formgen.forms.form_constants import CONSTANTS
from markup_formgen.protocols.bound_model import (
    AssociationMacro, AssociationReflection, BoundModel, QueryableRelation,
)

logger = logging.getLogger(__name__)


class Cardinality(Enum):
    """How many records an association attribute holds."""
    SINGLE = "single"
    MULTIPLE = "multiple"


@dataclass(frozen=True)
class AssociationReference:
    """The parts of an association the attribute resolver needs."""
    macro: AssociationMacro
    target_name: str
    foreign_key: Optional[str] = None

    @classmethod
    def from_reflection(cls, reflection: AssociationReflection) -> "AssociationReference":
        return cls(
            macro=reflection.macro,
            target_name=reflection.name,
            foreign_key=reflection.options.get("foreign_key"),
        )


@dataclass(frozen=True)
class AssociationAttribute:
    """Attribute that stores an association, and its cardinality."""
    attribute_name: str
    cardinality: Cardinality


class AssociationAttributeResolver:
    """
    Maps an association reference to the attribute holding it.

    - belongs_to: the foreign key, or ``{target}_id``; single
    - has_one: not supported, use a nested form
    - has_many / has_and_belongs_to_many: ``{singular target}_ids``; multiple
    """

    def resolve(
        self,
        reference: AssociationReference,
        options: Dict[str, Any],
        bound_model: Optional[BoundModel] = None,
    ) -> AssociationAttribute:
        """
        Resolve the attribute for an association.

        For multiple associations rendered as a select, ``options`` is updated
        in place so the control allows multiple selection.

        Args:
            reference: Association to resolve
            options: Call-site options (mutated for multiple selects)
            bound_model: Model whose loaded association is preloaded unless
                ``preload`` is False

        Returns:
            AssociationAttribute

        Raises:
            ConfigurationError: For has_one associations
        """
        macro = reference.macro

        if macro is AssociationMacro.BELONGS_TO:
            attribute_name = reference.foreign_key or f"{reference.target_name}_id"
            return AssociationAttribute(attribute_name, Cardinality.SINGLE)

        if macro is AssociationMacro.HAS_ONE:
            raise ConfigurationError(
                f"has_one associations are not supported (association '{reference.target_name}'). "
                f"Render the associated record with a nested form instead."
            )

        if macro in (AssociationMacro.HAS_MANY, AssociationMacro.HABTM):
            if options.get("as") in CONSTANTS.COLLECTION_SELECT_TYPES:
                input_html = dict(options.get("input_html") or {})
                input_html.setdefault("multiple", True)
                options["input_html"] = input_html

            if options.get("preload") is not False and bound_model is not None:
                self.preload(reference.target_name, bound_model)

            attribute_name = f"{inflection.singularize(reference.target_name)}_ids"
            return AssociationAttribute(attribute_name, Cardinality.MULTIPLE)

        raise ConfigurationError(f"Unknown association macro {macro!r} for '{reference.target_name}'")

    @staticmethod
    def preload(name: str, bound_model: BoundModel) -> None:
        """Realize a loaded association into a list and hand it back to the model."""
        target = bound_model.association_target(name)
        if target is None:
            return
        records = list(target)
        logger.debug(f"Preloaded {len(records)} records for association '{name}'")
        bound_model.preload_association(name, records)


class AssociationCollectionResolver:
    """
    Computes the choices for an association field.

    Precedence: explicit collection > reflection scope > declared
    ``order`` / ``conditions`` > every record of the target.
    """

    def fetch(
        self,
        reflection: AssociationReflection,
        explicit_collection: Any,
        bound_model: Optional[BoundModel],
    ) -> Any:
        if explicit_collection is not None:
            return explicit_collection

        target = reflection.klass
        record = bound_model.record if bound_model is not None else None
        if reflection.scope is not None:
            return self.apply_scope(reflection.scope, target, record)

        relation = target.all()
        conditions = reflection.options.get("conditions")
        if callable(conditions):
            conditions = conditions(record)
        order = reflection.options.get("order")

        if isinstance(relation, QueryableRelation):
            if conditions:
                relation = relation.where(conditions)
            if order is not None:
                relation = relation.order(order)
        return relation

    @staticmethod
    def apply_scope(scope: Any, target: Any, record: Any) -> Any:
        """
        Call a reflection scope.

        One parameter: ``scope(target)``. Two or more: ``scope(target, record)``, where
        record is the object behind the bound model.
        """
        parameters = inspect.signature(scope).parameters
        if len(parameters) >= 2:
            return scope(target, record)
        if len(parameters) == 1:
            return scope(target)
        return scope()
