"""Models package for devsync."""

from devsync.models.base import Base
from devsync.models.enums import QuestionStatus, TargetType, UserRole
from devsync.models.knowledge import Answer, Comment, Note, Question, Tag
from devsync.models.workspace import Project, User, Workspace

__all__ = [
    "Base",
    "User",
    "Workspace",
    "Project",
    "Question",
    "Answer",
    "Note",
    "Tag",
    "Comment",
    "UserRole",
    "QuestionStatus",
    "TargetType",
]
