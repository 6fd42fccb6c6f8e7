"""Tests for input registration, lookup and the discovery cache."""

import pytest

from markup_formgen import inputs
from markup_formgen.core.discovery_cache import (
    InstanceDiscoveryCache, SharedDiscoveryCache, create_discovery_cache, get_shared_discovery_cache,
)
from markup_formgen.exceptions import ConfigurationError, InputNotFoundError
from markup_formgen.forms.input_registry import (
    DEFAULT_INPUTS, GLOBAL_INPUTS, INPUT_MAPPINGS, InputMappings, InputNamespace,
)
from markup_formgen.forms.mapping_resolver import MappingResolver


class CountingResolver(MappingResolver):
    """Records every uncached lookup."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.discovered = []

    def discover(self, input_type):
        self.discovered.append(input_type)
        return super().discover(input_type)


def test_builtin_inputs_register_in_default_namespace():
    assert DEFAULT_INPUTS.get("StringInput") is inputs.StringInput
    assert DEFAULT_INPUTS.contains(inputs.CollectionSelectInput)


def test_abstract_and_opted_out_inputs_are_not_registered():
    names = list(DEFAULT_INPUTS)
    assert "InputBase" not in names
    assert "CollectionInput" not in names
    assert "BlockInput" not in names
    assert "ComponentsOnlyInput" not in names


def test_application_inputs_register_globally():
    class ColorInput(inputs.StringInput):
        pass

    assert GLOBAL_INPUTS.get("ColorInput") is ColorInput
    assert DEFAULT_INPUTS.get("ColorInput") is None


def test_map_type_rejects_non_inputs():
    mappings = InputMappings()
    with pytest.raises(TypeError):
        mappings.map_type("color", to=str)


def test_default_mapping_table():
    assert INPUT_MAPPINGS.get("email") is inputs.StringInput
    assert INPUT_MAPPINGS.get("jsonb") is inputs.TextInput
    assert INPUT_MAPPINGS.get("time_zone") is inputs.PriorityInput
    assert set(INPUT_MAPPINGS.types_for(inputs.NumericInput)) == {"integer", "decimal", "float"}


def test_resolves_mapped_type():
    resolver = MappingResolver(INPUT_MAPPINGS)
    assert resolver.resolve("email") is inputs.StringInput
    assert resolver.resolve("boolean") is inputs.BooleanInput


def test_custom_namespace_overrides_builtin_mapping():
    custom = InputNamespace("admin_inputs")

    class StringInput(inputs.StringInput):
        input_namespace = custom

    resolver = MappingResolver(INPUT_MAPPINGS, custom_namespaces=[custom])
    assert resolver.resolve("email") is StringInput
    assert resolver.resolve("integer") is inputs.NumericInput


def test_global_override_requires_discovery():
    class StringInput(inputs.StringInput):
        pass

    assert MappingResolver(INPUT_MAPPINGS).resolve("url") is StringInput
    assert MappingResolver(INPUT_MAPPINGS, inputs_discovery=False).resolve("url") is inputs.StringInput


def test_custom_namespace_precedes_global_namespace():
    custom = InputNamespace("custom")

    class ColorInput(inputs.StringInput):
        input_namespace = custom

    custom_color = ColorInput

    class ColorInput(inputs.StringInput):
        pass

    assert GLOBAL_INPUTS.get("ColorInput") is ColorInput
    resolver = MappingResolver(INPUT_MAPPINGS, custom_namespaces=[custom])
    assert resolver.resolve("color") is custom_color


def test_unmapped_type_discovered_by_convention():
    class CurrencyAmountInput(inputs.NumericInput):
        pass

    assert MappingResolver(INPUT_MAPPINGS).resolve("currency_amount") is CurrencyAmountInput


def test_module_namespace_without_override_keeps_mapping():
    resolver = MappingResolver(INPUT_MAPPINGS, custom_namespaces=["markup_formgen.inputs.string_inputs"])
    assert resolver.resolve("string") is inputs.StringInput


def test_unimportable_namespace_is_a_configuration_error():
    resolver = MappingResolver(INPUT_MAPPINGS, custom_namespaces=["no_such_package.inputs"])
    with pytest.raises(ConfigurationError):
        resolver.resolve("string")


def test_missing_input_names_type_and_namespaces():
    custom = InputNamespace("custom")
    resolver = MappingResolver(INPUT_MAPPINGS, custom_namespaces=[custom], inputs_discovery=False)

    with pytest.raises(InputNotFoundError) as exc_info:
        resolver.resolve("color")

    error = exc_info.value
    assert isinstance(error, LookupError)
    assert error.input_type == "color"
    assert error.namespaces == ("custom", "markup_formgen.inputs")
    assert "color" in str(error)


def test_discovery_runs_once_per_type():
    resolver = CountingResolver(INPUT_MAPPINGS)
    first = resolver.resolve("email")
    second = resolver.resolve("email")

    assert first is second
    assert resolver.discovered == ["email"]


def test_cached_class_survives_later_registrations():
    """A cache entry never changes once written."""
    resolver = MappingResolver(INPUT_MAPPINGS)
    assert resolver.resolve("email") is inputs.StringInput

    class StringInput(inputs.StringInput):
        pass

    assert resolver.resolve("email") is inputs.StringInput
    assert MappingResolver(INPUT_MAPPINGS).resolve("email") is StringInput


def test_shared_cache_is_shared_between_resolvers():
    cache = get_shared_discovery_cache()
    first = CountingResolver(INPUT_MAPPINGS, cache=cache)
    second = CountingResolver(INPUT_MAPPINGS, cache=cache)

    first.resolve("password")
    second.resolve("password")

    assert first.discovered == ["password"]
    assert second.discovered == []


def test_instance_caches_are_independent():
    first = CountingResolver(INPUT_MAPPINGS)
    second = CountingResolver(INPUT_MAPPINGS)

    first.resolve("text")
    second.resolve("text")

    assert first.discovered == ["text"]
    assert second.discovered == ["text"]


def test_cache_store_keeps_first_value():
    cache = InstanceDiscoveryCache()
    assert cache.store("string", inputs.StringInput) is inputs.StringInput
    assert cache.store("string", inputs.TextInput) is inputs.StringInput
    assert cache.get("string") is inputs.StringInput
    assert "string" in cache
    assert len(cache) == 1


def test_create_discovery_cache():
    assert isinstance(create_discovery_cache(True), SharedDiscoveryCache)
    assert create_discovery_cache(True) is get_shared_discovery_cache()
    assert isinstance(create_discovery_cache(False), InstanceDiscoveryCache)
    assert create_discovery_cache(False) is not create_discovery_cache(False)
