"""Service for entity search operations."""

from typing import List, Optional, Union

from loguru import logger
from sqlalchemy import ColumnElement
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from devsync.config import DevSyncConfig
from devsync.repository.search_repository import SearchRepository
from devsync.schemas.search import EntityType, ResultPage, SearchRequest
from devsync.search.fields import EntityRegistry
from devsync.search.predicates import build_predicate, combine
from devsync.search.registry import get_registry
from devsync.search.terms import Term, parse_terms


class SearchService:
    """Service for searching any registered entity type.

    A search runs in these steps:
    1. Parse the raw term string
    2. Resolve every term's field descriptor (first unknown field fails)
    3. Build every term's predicate (first invalid value fails)
    4. OR the predicates together
    5. Apply sort and paging
    6. Count and fetch against the same filter
    7. Map rows to response schemas and wrap them in a ResultPage

    Validation is fail-fast: the first violation is raised and nothing is
    read from the store.
    """

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        app_config: Optional[DevSyncConfig] = None,
    ):
        self.session_maker = session_maker
        self.app_config = app_config or DevSyncConfig()

    def build_filter(self, registry: EntityRegistry, terms: List[Term]) -> ColumnElement[bool]:
        """Validate terms against the registry and combine their predicates."""
        descriptors = [registry.lookup_filter(term.field) for term in terms]
        predicates = [
            build_predicate(term, descriptor, registry.model)
            for term, descriptor in zip(terms, descriptors)
        ]
        return combine(predicates)

    async def search(
        self,
        entity_type: Union[EntityType, str],
        raw_terms: Optional[str],
        request: Optional[SearchRequest] = None,
    ) -> ResultPage:
        """Search one entity type.

        Args:
            entity_type: The entity type, or its string value
            raw_terms: ``field=value#field=value`` string; None or blank matches all
            request: Paging and sort parameters; defaults to the first page

        Returns:
            The requested page, mapped to the entity's response schema

        Raises:
            UnknownEntityTypeError: If the entity type is not registered
            UnknownFieldError: If a term or the sort field is not whitelisted
            InvalidValueError: If a term value cannot be coerced for its field
        """
        registry = get_registry(entity_type)
        if request is None:
            request = SearchRequest(page_size=self.app_config.search_default_page_size)

        terms = parse_terms(raw_terms)
        logger.debug(
            f"Searching {registry.entity_type} with {len(terms)} term(s): "
            f"{[str(term) for term in terms]}"
        )

        where = self.build_filter(registry, terms)
        repository = SearchRepository(self.session_maker, registry)
        total, rows = await repository.search(where, request)

        return ResultPage(
            page_number=request.page,
            page_size=request.page_size,
            total_count=total,
            items=[registry.schema.model_validate(row) for row in rows],
        )

    async def search_params(
        self,
        entity_type: Union[EntityType, str],
        raw_terms: Optional[str] = None,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
        sort_field: Optional[str] = None,
        sort_direction: Optional[str] = None,
    ) -> ResultPage:
        """Search from raw transport parameters, applying configured defaults."""
        request = SearchRequest.from_params(
            page=page,
            page_size=page_size,
            sort_field=sort_field,
            sort_direction=sort_direction,
            raw_terms=raw_terms,
            default_page_size=self.app_config.search_default_page_size,
            max_page_size=self.app_config.search_max_page_size,
        )
        return await self.search(entity_type, request.raw_terms, request)
