"""Dependency injection for the devsync API.

- config: application configuration
- db: engine and session maker
- services: SearchService
"""

from devsync.deps.config import AppConfigDep, get_app_config
from devsync.deps.db import (
    EngineFactoryDep,
    SessionMakerDep,
    get_engine_factory,
    get_session_maker,
)
from devsync.deps.services import SearchServiceDep, get_search_service

__all__ = [
    "AppConfigDep",
    "EngineFactoryDep",
    "SearchServiceDep",
    "SessionMakerDep",
    "get_app_config",
    "get_engine_factory",
    "get_search_service",
    "get_session_maker",
]
