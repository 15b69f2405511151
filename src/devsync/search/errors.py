"""Errors raised while validating a search request.

Every error here is a client error. Store failures are not wrapped and reach
the caller as the SQLAlchemy exception that caused them.
"""

from typing import Iterable, Optional


class SearchError(ValueError):
    """Base class for search validation failures."""


class UnknownEntityTypeError(SearchError):
    """The entity type has no field registry."""

    def __init__(self, entity_type: str):
        self.entity_type = entity_type
        super().__init__(f"Unknown entity type: '{entity_type}'")


class UnknownFieldError(SearchError):
    """A search or sort field is not in the entity's whitelist."""

    def __init__(self, entity_type: str, field: str, reason: Optional[str] = None):
        self.entity_type = entity_type
        self.field = field
        message = f"Invalid search field provided: '{field}'"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class InvalidValueError(SearchError):
    """A value cannot be coerced for its field."""

    def __init__(self, field: str, value: str, expected: Optional[str] = None):
        self.field = field
        self.value = value
        message = f"Invalid value for field '{field}': '{value}'"
        if expected:
            message = f"{message}. Expected {expected}."
        super().__init__(message)


def format_choices(choices: Iterable[str]) -> str:
    """Render accepted symbols for an error message, e.g. one of 'A', 'B'."""
    return "one of " + ", ".join(f"'{choice}'" for choice in choices)
