"""Predicate builder and query combinator.

Each term becomes one SQLAlchemy boolean clause, chosen by the kind of its
field descriptor. All six kinds are handled in :func:`build_predicate`.
Clauses are then OR-ed together by :func:`combine`: a row matches when ANY
term matches it, across different fields too.
"""

import re
from typing import Any, Sequence, Type

from sqlalchemy import ColumnElement, or_, true
from sqlalchemy.orm import InstrumentedAttribute

from devsync.models.base import Base
from devsync.search.errors import InvalidValueError, format_choices
from devsync.search.fields import FieldDescriptor, FieldKind
from devsync.search.terms import Term

BOOLEAN_LITERALS = {"true": True, "false": False}

# ASCII digits only; int() would also take "0_5" and non-ASCII digits
INTEGER_PATTERN = re.compile(r"-?[0-9]+")
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def build_predicate(term: Term, descriptor: FieldDescriptor, model: Type[Base]) -> ColumnElement[bool]:
    """Build the clause for one term.

    Args:
        term: The parsed term
        descriptor: The descriptor the term's field resolved to
        model: The ORM model being searched

    Returns:
        A boolean clause usable in ``WHERE``

    Raises:
        InvalidValueError: If the value cannot be coerced for the field kind
    """
    value = term.value

    match descriptor.kind:
        case FieldKind.TEXT_PARTIAL:
            column = _column(model, descriptor)
            return column.icontains(value, autoescape=True)

        case FieldKind.EXACT:
            column = _column(model, descriptor)
            return column == _coerce(term, column)

        case FieldKind.ENUM:
            column = _column(model, descriptor)
            return column == _enum_member(term, descriptor)

        case FieldKind.BOOLEAN:
            column = _column(model, descriptor)
            flag = BOOLEAN_LITERALS.get(value.lower())
            if flag is None:
                raise InvalidValueError(term.field, value, "'true' or 'false'")
            return column.is_(flag)

        case FieldKind.RELATION_ID | FieldKind.RELATION_NAME:
            relation: InstrumentedAttribute = getattr(model, descriptor.relation)
            related = relation.property.mapper.class_
            target: InstrumentedAttribute = getattr(related, descriptor.target)

            if descriptor.kind == FieldKind.RELATION_NAME and descriptor.partial:
                condition = target.icontains(value, autoescape=True)
            else:
                condition = target == _coerce(term, target)

            # EXISTS keeps one row per root entity, even across to-many relations
            if relation.property.uselist:
                return relation.any(condition)
            return relation.has(condition)

    raise ValueError(f"Unsupported field kind: {descriptor.kind}")  # pragma: no cover


def combine(predicates: Sequence[ColumnElement[bool]]) -> ColumnElement[bool]:
    """OR all term clauses together; no clauses matches every row."""
    if not predicates:
        return true()
    return or_(*predicates)


def _column(model: Type[Base], descriptor: FieldDescriptor) -> InstrumentedAttribute:
    return getattr(model, descriptor.attribute)


def _coerce(term: Term, column: InstrumentedAttribute) -> Any:
    """Convert the raw value to the column's Python type where it is not a string."""
    try:
        python_type = column.type.python_type
    except NotImplementedError:  # pragma: no cover
        return term.value

    if python_type is int:
        if not INTEGER_PATTERN.fullmatch(term.value):
            raise InvalidValueError(term.field, term.value, "an integer")
        number = int(term.value)
        if not INT64_MIN <= number <= INT64_MAX:
            raise InvalidValueError(term.field, term.value, "a 64-bit integer")
        return number

    return term.value


def _enum_member(term: Term, descriptor: FieldDescriptor) -> Any:
    assert descriptor.enum is not None
    wanted = term.value.lower()
    for member in descriptor.enum:
        if member.name.lower() == wanted:
            return member
    raise InvalidValueError(
        term.field, term.value, format_choices(member.name for member in descriptor.enum)
    )
