"""
Bound-model ABC contracts.

The field renderer never inspects model objects directly. Everything it needs
(column metadata, capability probes, errors, association reflections) comes
through these contracts, which ORM integrations implement.

Design Philosophy:
- Explicit inheritance over duck typing
- Capability probes are data (a set of names), not reflective method checks
- Optional metadata degrades to defaults instead of raising
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Optional

import inflection


@dataclass(frozen=True)
class AttributeMetadata:
    """Column information for one attribute of a bound model.

    Attributes:
        type: Storage type name ("string", "integer", "timestamp", ...)
        encrypted: Whether the attribute is wrapped in an encrypted type
        limit: Maximum length declared by the storage layer
        minimum: Lower numeric bound declared by validations
        maximum: Upper numeric bound declared by validations
    """
    type: Optional[str]
    encrypted: bool = False
    limit: Optional[int] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None


class AssociationMacro(Enum):
    """Kind of association declared on a model."""
    BELONGS_TO = "belongs_to"
    HAS_ONE = "has_one"
    HAS_MANY = "has_many"
    HABTM = "has_and_belongs_to_many"


class AssociationTarget(ABC):
    """ABC for the target class of an association (the record source)."""

    @abstractmethod
    def all(self) -> Iterable[Any]:
        """
        Return every record of the target, unscoped.

        The result may be a plain iterable or a QueryableRelation.
        """
        pass


class QueryableRelation(ABC):
    """ABC for relations that support filtering and ordering."""

    @abstractmethod
    def where(self, conditions: Any) -> Any:
        """Return a relation restricted by conditions."""
        pass

    @abstractmethod
    def order(self, order: Any) -> Any:
        """Return a relation sorted by order."""
        pass


@dataclass(frozen=True)
class AssociationReflection:
    """
    Association metadata reported by the bound model.

    Attributes:
        name: Association name ("company", "tags")
        macro: Association kind
        klass: Target record source
        scope: Optional scope function; receives the target and, when it
            declares a second parameter, the bound object
        options: Declared association options (foreign_key, order, conditions)
    """
    name: str
    macro: AssociationMacro
    klass: AssociationTarget
    scope: Optional[Callable[..., Any]] = None
    options: Dict[str, Any] = field(default_factory=dict)


class BoundModel(ABC):
    """
    ABC for the object a form is bound to.

    Only attribute presence and type lookup are mandatory. Every other hook
    has a neutral default so simple models stay small.
    """

    @property
    def record(self) -> Any:
        """The bound object handed to association scopes and conditions."""
        return self

    @abstractmethod
    def has_attribute(self, name: str) -> bool:
        """Return True if the model stores an attribute with this name."""
        pass

    @abstractmethod
    def type_for_attribute(self, name: str) -> Optional[AttributeMetadata]:
        """Return column metadata for an attribute, or None if unknown."""
        pass

    def read_attribute(self, name: str) -> Any:
        """Return the current value of an attribute."""
        return None

    @property
    def capabilities(self) -> FrozenSet[str]:
        """Named capability probes (e.g. "avatar_attachment") the model answers to."""
        return frozenset()

    def errors_on(self, name: str) -> List[str]:
        """Return validation messages recorded for an attribute."""
        return []

    @property
    def has_errors(self) -> bool:
        """Return True if any attribute has validation errors."""
        return False

    @property
    def validated(self) -> bool:
        """Return True once the model has been through validation."""
        return False

    def is_required(self, name: str) -> Optional[bool]:
        """Return whether an attribute is required, or None to use the configured default."""
        return None

    def human_attribute_name(self, name: str) -> str:
        """Return the human-readable name of an attribute."""
        return inflection.humanize(name)

    @property
    def model_name(self) -> str:
        """Return the human-readable model name used in button captions."""
        return inflection.humanize(inflection.underscore(type(self).__name__))

    @property
    def persisted(self) -> bool:
        """Return True if the model has already been saved."""
        return False

    def reflect_on_association(self, name: str) -> Optional[AssociationReflection]:
        """Return reflection metadata for an association, or None if not declared."""
        return None

    def association_target(self, name: str) -> Optional[Iterable[Any]]:
        """Return the association records if already materialized on the model."""
        return None

    def preload_association(self, name: str, records: List[Any]) -> None:
        """Receive the realized records of an association before rendering."""
        pass
