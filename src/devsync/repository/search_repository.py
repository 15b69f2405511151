"""Repository that runs entity searches against the store."""

from typing import Sequence, Tuple

from loguru import logger
from sqlalchemy import ColumnElement, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from devsync import db
from devsync.models.base import Base
from devsync.repository.repository import Repository
from devsync.schemas.search import SearchRequest
from devsync.search.fields import EntityRegistry
from devsync.search.paging import apply_paging


class SearchRepository(Repository[Base]):
    """Count and fetch one page of an entity type under a combined filter.

    Both queries run in one session. Store errors are not caught here; they
    abort the search and reach the caller unchanged.
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession], registry: EntityRegistry):
        super().__init__(session_maker, registry.model)
        self.registry = registry

    async def search(
        self, where: ColumnElement[bool], request: SearchRequest
    ) -> Tuple[int, Sequence[Base]]:
        """Run the count and page queries for a filter.

        Args:
            where: Combined filter clause
            request: Paging and sort parameters

        Returns:
            The total match count and the rows of the requested page

        Raises:
            UnknownFieldError: If the sort field is not sortable, before any query runs
        """
        # Built first so an invalid sort field fails before any store round-trip
        page_query = apply_paging(
            self.select().where(where).options(*self.registry.load_options),
            self.registry,
            request,
        )
        count_query = select(func.count()).select_from(self.Model).where(where)

        async with db.scoped_session(self.session_maker) as session:
            total = (await session.execute(count_query)).scalar_one()
            rows = (await session.execute(page_query)).scalars().all()

        logger.debug(
            f"{self.registry.entity_type} search: total={total} "
            f"page={request.page} page_size={request.page_size} returned={len(rows)}"
        )
        return total, rows
