"""Tests for semantic type inference."""

import re

import pytest

from markup_formgen.forms.type_resolver import TypeResolver
from markup_formgen.protocols import AttributeMetadata

STRING = AttributeMetadata("string")


def test_resolution_is_deterministic():
    """Same inputs always give the same type."""
    resolver = TypeResolver([(r"_html$", "text")])
    results = {resolver.resolve("user_email", {}, STRING) for _ in range(5)}
    assert results == {"email"}


def test_explicit_as_wins_over_everything():
    resolver = TypeResolver([(r"email", "text")])
    options = {"as": "password", "collection": ["a", "b"]}
    assert resolver.resolve("user_email", options, STRING) == "password"


def test_custom_mapping_precedes_collection():
    resolver = TypeResolver([(r"_html$", "text"), (re.compile("^body"), "string")])
    assert resolver.resolve("body_html", {"collection": [1, 2]}, None) == "text"


def test_custom_mappings_are_tried_in_order():
    resolver = TypeResolver([("^body", "string"), (r"_html$", "text")])
    assert resolver.resolve("body_html", {}, None) == "string"


def test_collection_selects_select():
    resolver = TypeResolver()
    assert resolver.resolve("role", {"collection": ["admin"]}, AttributeMetadata("integer")) == "select"


@pytest.mark.parametrize("name, expected", [
    ("password", "password"),
    ("password_email", "password"),
    ("time_zone", "time_zone"),
    ("birth_country", "country"),
    ("email_url", "email"),
    ("user_email", "email"),
    ("Contact-Email", "email"),
    ("phone_number", "tel"),
    ("homepage_url", "url"),
    ("emailer", "string"),
    ("title", "string"),
])
def test_name_heuristics(name, expected):
    """Heuristics run in order: password, time_zone, country, email, phone, url."""
    assert TypeResolver().resolve(name, {}, STRING) == expected


def test_heuristics_apply_without_metadata():
    assert TypeResolver().resolve("user_email", {}, None) == "email"


def test_heuristics_apply_to_citext_columns():
    resolver = TypeResolver()
    assert resolver.resolve("login_email", {}, AttributeMetadata("citext")) == "email"
    assert resolver.resolve("nickname", {}, AttributeMetadata("citext")) == "citext"


def test_non_string_columns_skip_heuristics():
    assert TypeResolver().resolve("email_count", {}, AttributeMetadata("integer")) == "integer"


def test_timestamp_becomes_datetime():
    assert TypeResolver().resolve("created_at", {}, AttributeMetadata("timestamp")) == "datetime"


def test_encrypted_columns_are_strings():
    resolver = TypeResolver()
    assert resolver.resolve("token", {}, AttributeMetadata("binary", encrypted=True)) == "string"
    assert resolver.resolve("backup_email", {}, AttributeMetadata("binary", encrypted=True)) == "email"


@pytest.mark.parametrize("capability", [
    "avatar_attachment",
    "avatar_attachments",
    "remote_avatar_url",
    "avatar_attacher",
    "avatar_file_name",
])
def test_file_probes(capability):
    assert TypeResolver().resolve("avatar", {}, None, frozenset({capability})) == "file"


def test_heuristics_precede_file_probes():
    capabilities = frozenset({"password_attachment"})
    assert TypeResolver().resolve("password", {}, None, capabilities) == "password"


def test_file_probes_ignore_other_attributes():
    capabilities = frozenset({"photo_attachment"})
    assert TypeResolver().resolve("avatar", {}, None, capabilities) == "string"
