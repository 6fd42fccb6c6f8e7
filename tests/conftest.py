"""pytest configuration and fixtures for markup-formgen tests."""

import datetime
from dataclasses import dataclass, field
from typing import Annotated, List, Optional

import pytest

from markup_formgen.core.discovery_cache import get_shared_discovery_cache
from markup_formgen.forms.input_registry import GLOBAL_INPUTS
from markup_formgen.protocols import (
    AssociationMacro,
    AssociationReflection,
    AssociationTarget,
    AttributeHints,
    DataclassModel,
    reset_form_config,
)


@pytest.fixture(autouse=True)
def clean_registries():
    """Fresh config, empty global input namespace and shared cache for every test."""
    reset_form_config()
    GLOBAL_INPUTS.clear()
    get_shared_discovery_cache().clear()
    yield
    reset_form_config()
    GLOBAL_INPUTS.clear()
    get_shared_discovery_cache().clear()


@dataclass
class User:
    name: Annotated[str, AttributeHints(limit=100)] = ""
    email: str = ""
    password: str = ""
    age: Optional[int] = None
    score: float = 0.0
    active: bool = False
    born_on: Optional[datetime.date] = None
    company_id: Optional[int] = None
    tag_ids: List[int] = field(default_factory=list)


@dataclass(frozen=True)
class Company:
    id: int
    name: str


@dataclass(frozen=True)
class Tag:
    id: int
    name: str


class RecordSource(AssociationTarget):
    """In-memory association target."""

    def __init__(self, records):
        self.records = list(records)
        self.all_calls = 0

    def all(self):
        self.all_calls += 1
        return list(self.records)


@pytest.fixture
def companies():
    return RecordSource([Company(1, "Acme"), Company(2, "Globex")])


@pytest.fixture
def tags():
    return RecordSource([Tag(1, "red"), Tag(2, "blue")])


@pytest.fixture
def user():
    return User(name="Carlos", email="carlos@example.com", age=30)


@pytest.fixture
def user_model(user, companies, tags):
    """DataclassModel over a User with company (belongs_to) and tags (has_many) associations."""
    reflections = {
        "company": AssociationReflection("company", AssociationMacro.BELONGS_TO, companies),
        "tags": AssociationReflection("tags", AssociationMacro.HAS_MANY, tags),
        "profile": AssociationReflection("profile", AssociationMacro.HAS_ONE, companies),
    }
    return DataclassModel(user, reflections=reflections, model_name="User")
