"""Form generation exceptions."""

from typing import Sequence


class FormGenError(Exception):
    """Base class for all markup-formgen errors."""


class InputNotFoundError(FormGenError, LookupError):
    """Raised when no input class can be found for a semantic type."""

    def __init__(self, input_type: str, namespaces: Sequence[str]):
        self.input_type = input_type
        self.namespaces = tuple(namespaces)
        super().__init__(
            f"No input found for '{input_type}'. "
            f"Searched namespaces: {list(self.namespaces)}"
        )


class ConfigurationError(FormGenError):
    """Raised when the form, its bound model or its configuration cannot support a request."""
