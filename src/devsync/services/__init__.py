"""Services package."""

from devsync.services.search_service import SearchService

__all__ = ["SearchService"]
