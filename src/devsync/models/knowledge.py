"""Knowledge models: questions, answers, notes, tags and comments."""

from datetime import datetime
from typing import Optional

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from devsync.models.base import Base
from devsync.models.enums import QuestionStatus, TargetType
from devsync.models.workspace import generate_id, utc_now

question_tags = Table(
    "question_tags",
    Base.metadata,
    Column("question_id", String, ForeignKey("question.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", String, ForeignKey("tag.id", ondelete="CASCADE"), primary_key=True),
)

note_tags = Table(
    "note_tags",
    Base.metadata,
    Column("note_id", String, ForeignKey("note.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", String, ForeignKey("tag.id", ondelete="CASCADE"), primary_key=True),
)


class Tag(Base):
    """A label shared by questions and notes."""

    __tablename__ = "tag"
    __table_args__ = (Index("ix_tag_name", "name", unique=True),)

    id: Mapped[str] = mapped_column(String, primary_key=True, default=generate_id)
    name: Mapped[str] = mapped_column(String)
    color: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    amount_used: Mapped[int] = mapped_column(Integer, default=0)

    def __repr__(self) -> str:
        return f"Tag(id='{self.id}', name='{self.name}')"


class Question(Base):
    """A question asked inside a project."""

    __tablename__ = "question"
    __table_args__ = (
        Index("ix_question_status", "status"),
        Index("ix_question_project_id", "project_id"),
        Index("ix_question_author_id", "author_id"),
    )

    id: Mapped[str] = mapped_column(String, primary_key=True, default=generate_id)
    title: Mapped[str] = mapped_column(String)
    description: Mapped[str] = mapped_column(String(4000))
    status: Mapped[QuestionStatus] = mapped_column(
        Enum(QuestionStatus), default=QuestionStatus.OPEN
    )
    author_id: Mapped[str] = mapped_column(String, ForeignKey("user.id"), nullable=False)
    project_id: Mapped[str] = mapped_column(
        String, ForeignKey("project.id", ondelete="CASCADE"), nullable=False
    )

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    author = relationship("User")
    project = relationship("Project")
    tags = relationship("Tag", secondary=question_tags)
    answers = relationship("Answer", back_populates="question", cascade="all, delete-orphan")

    @property
    def tag_ids(self) -> list[str]:
        """Ids of the attached tags. Requires ``tags`` to be loaded."""
        return sorted(tag.id for tag in self.tags)

    def __repr__(self) -> str:
        return f"Question(id='{self.id}', title='{self.title}', status='{self.status}')"


class Answer(Base):
    """An answer to a question."""

    __tablename__ = "answer"
    __table_args__ = (
        Index("ix_answer_question_id", "question_id"),
        Index("ix_answer_author_id", "author_id"),
    )

    id: Mapped[str] = mapped_column(String, primary_key=True, default=generate_id)
    content: Mapped[str] = mapped_column(String(4000))
    is_accepted: Mapped[bool] = mapped_column(Boolean, default=False)
    question_id: Mapped[str] = mapped_column(
        String, ForeignKey("question.id", ondelete="CASCADE"), nullable=False
    )
    author_id: Mapped[str] = mapped_column(String, ForeignKey("user.id"), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    question = relationship("Question", back_populates="answers")
    author = relationship("User")

    def __repr__(self) -> str:
        return f"Answer(id='{self.id}', question_id='{self.question_id}', is_accepted={self.is_accepted})"


class Note(Base):
    """A versioned note inside a project."""

    __tablename__ = "note"
    __table_args__ = (
        Index("ix_note_project_id", "project_id"),
        Index("ix_note_author_id", "author_id"),
    )

    id: Mapped[str] = mapped_column(String, primary_key=True, default=generate_id)
    title: Mapped[str] = mapped_column(String)
    content: Mapped[str] = mapped_column(Text)
    version: Mapped[int] = mapped_column(Integer, default=1)
    project_id: Mapped[str] = mapped_column(
        String, ForeignKey("project.id", ondelete="CASCADE"), nullable=False
    )
    author_id: Mapped[str] = mapped_column(String, ForeignKey("user.id"), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    project = relationship("Project")
    author = relationship("User")
    tags = relationship("Tag", secondary=note_tags)

    @property
    def tag_ids(self) -> list[str]:
        """Ids of the attached tags. Requires ``tags`` to be loaded."""
        return sorted(tag.id for tag in self.tags)

    def __repr__(self) -> str:
        return f"Note(id='{self.id}', title='{self.title}', version={self.version})"


class Comment(Base):
    """A comment attached to a note, question or answer.

    The target is polymorphic, so ``target_id`` is a plain column rather than
    a foreign key.
    """

    __tablename__ = "comment"
    __table_args__ = (
        Index("ix_comment_target", "target_type", "target_id"),
        Index("ix_comment_author_id", "author_id"),
    )

    id: Mapped[str] = mapped_column(String, primary_key=True, default=generate_id)
    content: Mapped[str] = mapped_column(Text)
    target_type: Mapped[TargetType] = mapped_column(Enum(TargetType))
    target_id: Mapped[str] = mapped_column(String)
    author_id: Mapped[str] = mapped_column(String, ForeignKey("user.id"), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    author = relationship("User")

    def __repr__(self) -> str:
        return f"Comment(id='{self.id}', target_type='{self.target_type}', target_id='{self.target_id}')"
