"""Search schemas for devsync.

A search names an entity type, a raw term string and a page request::

    GET /search/question?terms=status=open#tagsName=python&page=0&page_size=20

The term string is parsed by :mod:`devsync.search.terms`. Terms are combined
with OR, so the example returns open questions AND questions tagged python.
"""

from enum import Enum
from typing import Any, Callable, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field, computed_field, field_validator

from devsync.search.errors import InvalidValueError, format_choices

T = TypeVar("T")
R = TypeVar("R")

MAX_OFFSET = 2**63 - 1


class EntityType(str, Enum):
    """Searchable entity types."""

    USER = "user"
    WORKSPACE = "workspace"
    PROJECT = "project"
    QUESTION = "question"
    ANSWER = "answer"
    NOTE = "note"
    TAG = "tag"
    COMMENT = "comment"


class SortDirection(str, Enum):
    """Sort order for a search page."""

    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: Optional[str]) -> "SortDirection":
        """Parse a direction case-insensitively; blank means ascending."""
        if value is None or not value.strip():
            return cls.ASC
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise InvalidValueError(
                "direction", value, format_choices(d.value for d in cls)
            ) from None


class SearchRequest(BaseModel):
    """Paging, sorting and raw terms for one search call."""

    page: int = Field(default=0, ge=0)
    page_size: int = Field(default=10, gt=0)
    sort_field: Optional[str] = None
    sort_direction: SortDirection = SortDirection.ASC
    raw_terms: Optional[str] = None

    @field_validator("sort_field")
    @classmethod
    def blank_sort_field_is_default(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("sort_direction", mode="before")
    @classmethod
    def parse_direction(cls, v: Any) -> Any:
        if v is None or isinstance(v, str):
            return SortDirection.parse(v)
        return v

    @property
    def offset(self) -> int:
        return self.page * self.page_size

    @classmethod
    def from_params(
        cls,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
        sort_field: Optional[str] = None,
        sort_direction: Optional[str] = None,
        raw_terms: Optional[str] = None,
        *,
        default_page_size: int = 10,
        max_page_size: Optional[int] = None,
    ) -> "SearchRequest":
        """Build a request from transport parameters.

        Missing values fall back to the defaults. Out-of-range values raise
        InvalidValueError rather than a pydantic ValidationError, so callers
        handle every bad search input the same way.
        """
        page = 0 if page is None else page
        if page < 0:
            raise InvalidValueError("page", str(page), "a non-negative integer")

        page_size = default_page_size if page_size is None else page_size
        if page_size <= 0 or (max_page_size is not None and page_size > max_page_size):
            upper = f" and at most {max_page_size}" if max_page_size is not None else ""
            raise InvalidValueError("page_size", str(page_size), f"an integer of at least 1{upper}")

        # offset and limit are bound as signed 64-bit integers by the drivers
        if page_size > MAX_OFFSET:
            raise InvalidValueError("page_size", str(page_size), f"at most {MAX_OFFSET}")
        if page * page_size > MAX_OFFSET:
            raise InvalidValueError(
                "page", str(page), f"at most {MAX_OFFSET // page_size} for page size {page_size}"
            )

        return cls(
            page=page,
            page_size=page_size,
            sort_field=sort_field,
            sort_direction=SortDirection.parse(sort_direction),
            raw_terms=raw_terms,
        )


class ResultPage(BaseModel, Generic[T]):
    """One page of search results plus the total match count."""

    page_number: int
    page_size: int
    total_count: int
    items: List[T]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_more(self) -> bool:
        return (self.page_number + 1) * self.page_size < self.total_count

    def map(self, mapper: Callable[[T], R]) -> "ResultPage[R]":
        """Return a page with every item transformed by mapper."""
        return ResultPage[Any](
            page_number=self.page_number,
            page_size=self.page_size,
            total_count=self.total_count,
            items=[mapper(item) for item in self.items],
        )
