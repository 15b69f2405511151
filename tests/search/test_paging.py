"""Tests for sort resolution and paging."""

import pytest
from sqlalchemy import select

from devsync.models import Tag
from devsync.schemas.search import SearchRequest, SortDirection
from devsync.search.errors import UnknownFieldError
from devsync.search.paging import apply_paging, resolve_order
from devsync.search.registry import get_registry


def order_sql(request: SearchRequest, entity_type: str = "tag") -> list[str]:
    return [str(clause) for clause in resolve_order(get_registry(entity_type), request)]


def test_default_sort_is_identifier_only():
    assert order_sql(SearchRequest()) == ["tag.id ASC"]


def test_identifier_sort_desc_has_no_tie_breaker():
    request = SearchRequest(sort_field="id", sort_direction=SortDirection.DESC)
    assert order_sql(request) == ["tag.id DESC"]


def test_other_sort_field_gets_identifier_tie_breaker():
    request = SearchRequest(sort_field="color", sort_direction="desc")
    assert order_sql(request) == ["tag.color DESC", "tag.id ASC"]


def test_wire_name_maps_to_column():
    assert order_sql(SearchRequest(sort_field="amountUsed")) == ["tag.amount_used ASC", "tag.id ASC"]


def test_unknown_sort_field():
    with pytest.raises(UnknownFieldError, match="nickname"):
        resolve_order(get_registry("tag"), SearchRequest(sort_field="nickname"))


def test_relation_sort_field():
    with pytest.raises(UnknownFieldError, match="not sortable"):
        resolve_order(get_registry("question"), SearchRequest(sort_field="tagsName"))


def test_apply_paging_sets_offset_and_limit():
    request = SearchRequest(page=2, page_size=5)
    statement = apply_paging(select(Tag), get_registry("tag"), request)
    compiled = statement.compile()
    assert "LIMIT" in str(compiled)
    assert "OFFSET" in str(compiled)
    assert 10 in compiled.params.values()
    assert 5 in compiled.params.values()
