"""Option dictionary helpers shared by the field renderer and inputs."""

import copy
from typing import Any, Dict, Iterable, Mapping, Optional


def deep_merge(base: Optional[Mapping[str, Any]], overrides: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Merge overrides on top of a deep copy of base.

    Nested dicts are merged recursively into new dicts; any other value in
    overrides replaces the base value and is used as is (collections, records
    and callables are not copied). Neither argument is modified.

    Example:
        >>> deep_merge({"input_html": {"class": "a", "size": 3}}, {"input_html": {"class": "b"}})
        {'input_html': {'class': 'b', 'size': 3}}
    """
    result = copy.deepcopy(dict(base or {}))

    def _merge(target: Dict[str, Any], source: Mapping[str, Any]) -> None:
        for key, value in source.items():
            if isinstance(value, Mapping):
                if not isinstance(target.get(key), dict):
                    target[key] = {}
                _merge(target[key], value)
            else:
                target[key] = value

    _merge(result, overrides or {})
    return result


def without(options: Mapping[str, Any], keys: Iterable[str]) -> Dict[str, Any]:
    """Return a copy of options without the given keys."""
    excluded = set(keys)
    return {key: value for key, value in options.items() if key not in excluded}
