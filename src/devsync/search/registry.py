"""Field tables for every searchable entity.

Built once at import and exposed read-only through :data:`REGISTRIES`.
Wire field names are camelCase and match the names clients already send.
"""

from types import MappingProxyType
from typing import Mapping, Union

from sqlalchemy.orm import selectinload

from devsync.models import (
    Answer,
    Comment,
    Note,
    Project,
    Question,
    QuestionStatus,
    Tag,
    TargetType,
    User,
    UserRole,
    Workspace,
)
from devsync.schemas.response import (
    AnswerResponse,
    CommentResponse,
    NoteResponse,
    ProjectResponse,
    QuestionResponse,
    TagResponse,
    UserResponse,
    WorkspaceResponse,
)
from devsync.schemas.search import EntityType
from devsync.search.errors import UnknownEntityTypeError
from devsync.search.fields import (
    EntityRegistry,
    FieldDescriptor,
    boolean,
    enum_field,
    exact,
    relation_id,
    relation_name,
    sort_only,
    text,
)


def _timestamps() -> tuple[FieldDescriptor, ...]:
    return (sort_only("createdAt", "created_at"), sort_only("updatedAt", "updated_at"))


USER_REGISTRY = EntityRegistry.build(
    EntityType.USER.value,
    User,
    UserResponse,
    [
        exact("id"),
        text("name"),
        text("email"),
        enum_field("role", UserRole),
        *_timestamps(),
    ],
)

WORKSPACE_REGISTRY = EntityRegistry.build(
    EntityType.WORKSPACE.value,
    Workspace,
    WorkspaceResponse,
    [
        exact("id"),
        text("name"),
        text("description"),
        boolean("isPrivate", "is_private"),
        relation_id("ownerId", "owner"),
        relation_name("ownerName", "owner"),
        relation_id("memberId", "members"),
        relation_name("memberName", "members"),
        *_timestamps(),
    ],
    load_options=(selectinload(Workspace.members),),
)

PROJECT_REGISTRY = EntityRegistry.build(
    EntityType.PROJECT.value,
    Project,
    ProjectResponse,
    [
        exact("id"),
        text("name"),
        text("description"),
        relation_id("workspaceId", "workspace"),
        *_timestamps(),
    ],
)

QUESTION_REGISTRY = EntityRegistry.build(
    EntityType.QUESTION.value,
    Question,
    QuestionResponse,
    [
        exact("id"),
        text("title"),
        text("description"),
        enum_field("status", QuestionStatus),
        relation_id("projectId", "project"),
        relation_id("authorId", "author"),
        relation_id("tagsId", "tags"),
        relation_name("tagsName", "tags", partial=False),
        *_timestamps(),
    ],
    load_options=(selectinload(Question.tags),),
)

ANSWER_REGISTRY = EntityRegistry.build(
    EntityType.ANSWER.value,
    Answer,
    AnswerResponse,
    [
        exact("id"),
        text("content"),
        boolean("isAccepted", "is_accepted"),
        relation_id("authorId", "author"),
        relation_name("authorName", "author"),
        relation_id("questionId", "question"),
        *_timestamps(),
    ],
)

NOTE_REGISTRY = EntityRegistry.build(
    EntityType.NOTE.value,
    Note,
    NoteResponse,
    [
        exact("id"),
        text("title"),
        text("content"),
        exact("version"),
        relation_id("authorId", "author"),
        relation_id("projectId", "project"),
        relation_id("tagsId", "tags"),
        relation_name("tagsName", "tags", partial=False),
        *_timestamps(),
    ],
    load_options=(selectinload(Note.tags),),
)

TAG_REGISTRY = EntityRegistry.build(
    EntityType.TAG.value,
    Tag,
    TagResponse,
    [
        exact("id"),
        text("name"),
        text("color"),
        text("description"),
        text("category"),
        exact("amountUsed", "amount_used"),
    ],
)

COMMENT_REGISTRY = EntityRegistry.build(
    EntityType.COMMENT.value,
    Comment,
    CommentResponse,
    [
        exact("id"),
        enum_field("targetType", TargetType, "target_type"),
        exact("targetId", "target_id"),
        text("content"),
        relation_id("authorId", "author"),
        *_timestamps(),
    ],
)

REGISTRIES: Mapping[EntityType, EntityRegistry] = MappingProxyType(
    {
        EntityType.USER: USER_REGISTRY,
        EntityType.WORKSPACE: WORKSPACE_REGISTRY,
        EntityType.PROJECT: PROJECT_REGISTRY,
        EntityType.QUESTION: QUESTION_REGISTRY,
        EntityType.ANSWER: ANSWER_REGISTRY,
        EntityType.NOTE: NOTE_REGISTRY,
        EntityType.TAG: TAG_REGISTRY,
        EntityType.COMMENT: COMMENT_REGISTRY,
    }
)


def get_registry(entity_type: Union[EntityType, str]) -> EntityRegistry:
    """Get the field registry for an entity type or its string value."""
    if isinstance(entity_type, EntityType):
        return REGISTRIES[entity_type]
    try:
        return REGISTRIES[EntityType(entity_type.strip().lower())]
    except ValueError:
        raise UnknownEntityTypeError(entity_type) from None


def lookup(entity_type: Union[EntityType, str], field_name: str) -> FieldDescriptor:
    """Look up a field descriptor, raising UnknownFieldError on a miss."""
    return get_registry(entity_type).lookup(field_name)
