"""Base repository implementation."""

from typing import Any, Generic, List, Optional, Type, TypeVar

from loguru import logger
from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from devsync import db
from devsync.models.base import Base

T = TypeVar("T", bound=Base)


class Repository(Generic[T]):
    """Base repository for a single ORM model."""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession], Model: Type[T]):
        self.session_maker = session_maker
        self.Model = Model

    def select(self, *entities: Any) -> Select:
        """Create a select for the model, or for the given entities."""
        if not entities:
            entities = (self.Model,)
        return select(*entities)

    async def find_by_id(self, entity_id: Any) -> Optional[T]:
        """Fetch an entity by its primary key."""
        logger.debug(f"Finding {self.Model.__name__} by ID: {entity_id}")
        async with db.scoped_session(self.session_maker) as session:
            return await session.get(self.Model, entity_id)

    async def create(self, data: dict) -> T:
        """Create a new record from a dict of column values."""
        logger.debug(f"Creating {self.Model.__name__} from data: {data}")
        async with db.scoped_session(self.session_maker) as session:
            model = self.Model(**data)
            session.add(model)
            await session.flush()
            return model

    async def create_all(self, data_list: List[dict]) -> List[T]:
        """Create multiple records in a single transaction."""
        logger.debug(f"Bulk creating {len(data_list)} {self.Model.__name__} instances")
        async with db.scoped_session(self.session_maker) as session:
            models = [self.Model(**data) for data in data_list]
            session.add_all(models)
            await session.flush()
            return models
