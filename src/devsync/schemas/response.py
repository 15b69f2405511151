"""Response schemas for searchable entities.

Search results are mapped from ORM rows into these models, one per entity
type. Passwords and other private columns never appear here.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from devsync.models.enums import QuestionStatus, TargetType, UserRole


class SQLAlchemyModel(BaseModel):
    """Base class for models that read from SQLAlchemy attributes."""

    model_config = ConfigDict(from_attributes=True)


class UserResponse(SQLAlchemyModel):
    id: str
    name: str
    email: str
    profile_picture_url: Optional[str] = None
    role: UserRole
    created_at: datetime
    updated_at: datetime


class WorkspaceResponse(SQLAlchemyModel):
    """Workspace with its owner and member ids."""

    id: str
    name: str
    description: Optional[str] = None
    is_private: bool
    owner_id: str
    member_ids: List[str] = []
    created_at: datetime
    updated_at: datetime


class ProjectResponse(SQLAlchemyModel):
    id: str
    name: str
    description: Optional[str] = None
    workspace_id: str
    created_at: datetime
    updated_at: datetime


class QuestionResponse(SQLAlchemyModel):
    id: str
    title: str
    description: str
    status: QuestionStatus
    project_id: str
    author_id: str
    tag_ids: List[str] = []
    created_at: datetime
    updated_at: datetime


class AnswerResponse(SQLAlchemyModel):
    id: str
    content: str
    is_accepted: bool
    question_id: str
    author_id: str
    created_at: datetime
    updated_at: datetime


class NoteResponse(SQLAlchemyModel):
    id: str
    title: str
    content: str
    version: int
    project_id: str
    author_id: str
    tag_ids: List[str] = []
    created_at: datetime
    updated_at: datetime


class TagResponse(SQLAlchemyModel):
    id: str
    name: str
    color: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    amount_used: int


class CommentResponse(SQLAlchemyModel):
    id: str
    content: str
    target_type: TargetType
    target_id: str
    author_id: str
    created_at: datetime
    updated_at: datetime
