"""Entity search engine: term parsing, field whitelists and predicate building."""

from devsync.search.errors import (
    InvalidValueError,
    SearchError,
    UnknownEntityTypeError,
    UnknownFieldError,
)
from devsync.search.fields import EntityRegistry, FieldDescriptor, FieldKind
from devsync.search.predicates import build_predicate, combine
from devsync.search.terms import Term, parse_terms

__all__ = [
    "SearchError",
    "UnknownEntityTypeError",
    "UnknownFieldError",
    "InvalidValueError",
    "EntityRegistry",
    "FieldDescriptor",
    "FieldKind",
    "Term",
    "parse_terms",
    "build_predicate",
    "combine",
]
