"""
BoundModel adapters.

DataclassModel binds a form to a plain dataclass instance. Column metadata is
derived from the field annotations, so type inference works the same way it
does for ORM-backed models.

Example:
    @dataclass
    class User:
        name: Annotated[str, AttributeHints(limit=100)]
        age: Optional[int] = None
        password_digest: str = ""

    model = DataclassModel(User(name="Carlos"), errors={"name": ["can't be blank"]})
"""

import dataclasses
import datetime
import logging
import uuid
from dataclasses import dataclass
from decimal import Decimal
from typing import (
    Annotated, Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Type, Union,
    get_args, get_origin, get_type_hints,
)

import inflection

from .bound_model import AssociationReflection, AttributeMetadata, BoundModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttributeHints:
    """Extra column metadata attached to a field with ``Annotated``."""
    type: Optional[str] = None
    encrypted: bool = False
    limit: Optional[int] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None


# Python type -> storage type name. bool must precede int (bool subclasses int).
PYTHON_TYPE_NAMES: Dict[Type, str] = {
    bool: "boolean",
    int: "integer",
    float: "float",
    Decimal: "decimal",
    str: "string",
    datetime.datetime: "datetime",
    datetime.date: "date",
    datetime.time: "time",
    uuid.UUID: "uuid",
}


def resolve_optional(param_type: Any) -> Any:
    """Resolve Optional[T] to T."""
    if get_origin(param_type) is Union:
        args = get_args(param_type)
        if len(args) == 2 and type(None) in args:
            return next(arg for arg in args if arg is not type(None))
    return param_type


def metadata_for_annotation(annotation: Any) -> AttributeMetadata:
    """
    Build column metadata from a field annotation.

    Args:
        annotation: The field's type hint, possibly Annotated and/or Optional

    Returns:
        AttributeMetadata; ``type`` is None when the annotation has no known mapping
    """
    hints = AttributeHints()
    if get_origin(annotation) is Annotated:
        base, *extras = get_args(annotation)
        hints = next((extra for extra in extras if isinstance(extra, AttributeHints)), hints)
        annotation = base

    annotation = resolve_optional(annotation)
    type_name = hints.type
    if type_name is None and isinstance(annotation, type):
        type_name = next(
            (name for python_type, name in PYTHON_TYPE_NAMES.items() if issubclass(annotation, python_type)),
            None,
        )

    return AttributeMetadata(
        type=type_name,
        encrypted=hints.encrypted,
        limit=hints.limit,
        minimum=hints.minimum,
        maximum=hints.maximum,
    )


class DataclassModel(BoundModel):
    """BoundModel over a dataclass instance."""

    def __init__(
        self,
        instance: Any,
        *,
        errors: Optional[Mapping[str, List[str]]] = None,
        validated: bool = False,
        persisted: bool = False,
        required: Optional[Iterable[str]] = None,
        capabilities: Iterable[str] = (),
        reflections: Optional[Mapping[str, AssociationReflection]] = None,
        model_name: Optional[str] = None,
    ):
        if not dataclasses.is_dataclass(instance) or isinstance(instance, type):
            raise TypeError(f"DataclassModel expects a dataclass instance, got {type(instance).__name__}")

        self.instance = instance
        self.errors: Dict[str, List[str]] = {key: list(value) for key, value in (errors or {}).items()}
        self._validated = validated or bool(self.errors)
        self._persisted = persisted
        self._required = frozenset(required) if required is not None else None
        self._reflections = dict(reflections or {})
        self._model_name = model_name

        hints = get_type_hints(type(instance), include_extras=True)
        self._metadata: Dict[str, AttributeMetadata] = {
            f.name: metadata_for_annotation(hints.get(f.name, f.type))
            for f in dataclasses.fields(instance)
        }
        self._capabilities = frozenset(self._metadata) | frozenset(capabilities)
        logger.debug(f"Bound {type(instance).__name__} with attributes {list(self._metadata)}")

    @property
    def record(self) -> Any:
        return self.instance

    def has_attribute(self, name: str) -> bool:
        return name in self._metadata

    def type_for_attribute(self, name: str) -> Optional[AttributeMetadata]:
        return self._metadata.get(name)

    def read_attribute(self, name: str) -> Any:
        return getattr(self.instance, name, None)

    @property
    def capabilities(self) -> FrozenSet[str]:
        return self._capabilities

    def errors_on(self, name: str) -> List[str]:
        return list(self.errors.get(name, []))

    @property
    def has_errors(self) -> bool:
        return any(self.errors.values())

    @property
    def validated(self) -> bool:
        return self._validated

    def is_required(self, name: str) -> Optional[bool]:
        if self._required is None:
            return None
        return name in self._required

    @property
    def model_name(self) -> str:
        if self._model_name:
            return self._model_name
        return inflection.humanize(inflection.underscore(type(self.instance).__name__))

    @property
    def persisted(self) -> bool:
        return self._persisted

    def reflect_on_association(self, name: str) -> Optional[AssociationReflection]:
        return self._reflections.get(name)

    def association_target(self, name: str) -> Optional[Iterable[Any]]:
        if name not in self._reflections:
            return None
        return getattr(self.instance, name, None)

    def preload_association(self, name: str, records: List[Any]) -> None:
        if type(self.instance).__dataclass_params__.frozen:
            return
        setattr(self.instance, name, records)
