"""Schema exports.

Rather than importing from individual schema files, you can
import everything from devsync.schemas.
"""

from devsync.schemas.response import (
    AnswerResponse,
    CommentResponse,
    NoteResponse,
    ProjectResponse,
    QuestionResponse,
    SQLAlchemyModel,
    TagResponse,
    UserResponse,
    WorkspaceResponse,
)
from devsync.schemas.search import (
    EntityType,
    ResultPage,
    SearchRequest,
    SortDirection,
)

__all__ = [
    "SQLAlchemyModel",
    "UserResponse",
    "WorkspaceResponse",
    "ProjectResponse",
    "QuestionResponse",
    "AnswerResponse",
    "NoteResponse",
    "TagResponse",
    "CommentResponse",
    "EntityType",
    "ResultPage",
    "SearchRequest",
    "SortDirection",
]
