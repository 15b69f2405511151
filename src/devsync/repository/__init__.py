from devsync.repository.repository import Repository
from devsync.repository.search_repository import SearchRepository

__all__ = [
    "Repository",
    "SearchRepository",
]
