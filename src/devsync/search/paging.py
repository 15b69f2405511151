"""Pagination and sort application for search queries."""

from typing import List

from sqlalchemy import Select, UnaryExpression

from devsync.schemas.search import SearchRequest, SortDirection
from devsync.search.fields import EntityRegistry


def resolve_order(registry: EntityRegistry, request: SearchRequest) -> List[UnaryExpression]:
    """Resolve the ORDER BY clauses for a request.

    The sort field defaults to the entity identifier. Any other sort field is
    followed by the identifier ascending, so rows that tie on the sort value
    keep a stable order across pages.

    Raises:
        UnknownFieldError: If the sort field is not a sortable field of the entity
    """
    sort_name = request.sort_field or registry.id_field
    descriptor = registry.lookup_sort(sort_name)
    column = registry.column(descriptor)

    order = [column.desc() if request.sort_direction == SortDirection.DESC else column.asc()]
    if descriptor.name != registry.id_field:
        order.append(registry.id_column.asc())
    return order


def apply_paging(statement: Select, registry: EntityRegistry, request: SearchRequest) -> Select:
    """Apply ordering, offset and limit to a select."""
    return (
        statement.order_by(*resolve_order(registry, request))
        .offset(request.offset)
        .limit(request.page_size)
    )
