"""Search router for devsync API.

Every entity type is searched through the same endpoint::

    GET /search/question?terms=status%3Dopen%23tagsName%3Dpython&page=0&page_size=20

The ``#`` separating terms must be percent-encoded in a query string.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, HTTPException, Query
from loguru import logger

from devsync.deps import SearchServiceDep
from devsync.schemas.search import EntityType, ResultPage
from devsync.search.errors import SearchError

router = APIRouter(prefix="/search", tags=["search"])


@router.get("/{entity_type}", response_model=ResultPage)
async def search(
    entity_type: EntityType,
    search_service: SearchServiceDep,
    terms: Annotated[
        Optional[str], Query(description="Search terms, e.g. name=alice#role=admin")
    ] = None,
    page: Annotated[Optional[int], Query(description="Zero-based page number")] = None,
    page_size: Annotated[Optional[int], Query(description="Results per page")] = None,
    sort: Annotated[Optional[str], Query(description="Field to sort by")] = None,
    direction: Annotated[Optional[str], Query(description="asc or desc")] = None,
) -> ResultPage:
    """Search one entity type. Terms are combined with OR."""
    logger.info(
        f"API request: search {entity_type.value} terms={terms!r} page={page} "
        f"page_size={page_size} sort={sort} direction={direction}"
    )
    try:
        return await search_service.search_params(
            entity_type,
            raw_terms=terms,
            page=page,
            page_size=page_size,
            sort_field=sort,
            sort_direction=direction,
        )
    except SearchError as e:
        logger.warning(f"Rejected search on {entity_type.value}: {e}")
        raise HTTPException(status_code=400, detail=str(e))
