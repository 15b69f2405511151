"""Service dependency injection for devsync."""

from typing import Annotated

from fastapi import Depends

from devsync.deps.config import AppConfigDep
from devsync.deps.db import SessionMakerDep
from devsync.services.search_service import SearchService

# --- Search Service ---


async def get_search_service(
    session_maker: SessionMakerDep, app_config: AppConfigDep
) -> SearchService:
    return SearchService(session_maker, app_config)


SearchServiceDep = Annotated[SearchService, Depends(get_search_service)]
