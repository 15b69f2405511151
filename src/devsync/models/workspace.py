"""Users, workspaces and projects."""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    String,
    Table,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from devsync.models.base import Base
from devsync.models.enums import UserRole


def generate_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now().astimezone()


workspace_members = Table(
    "workspace_members",
    Base.metadata,
    Column("workspace_id", String, ForeignKey("workspace.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", String, ForeignKey("user.id", ondelete="CASCADE"), primary_key=True),
)


class User(Base):
    """A platform user."""

    __tablename__ = "user"
    __table_args__ = (Index("ix_user_email", "email", unique=True),)

    id: Mapped[str] = mapped_column(String, primary_key=True, default=generate_id)
    name: Mapped[str] = mapped_column(String)
    email: Mapped[str] = mapped_column(String)
    password_hash: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    profile_picture_url: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    role: Mapped[UserRole] = mapped_column(Enum(UserRole), default=UserRole.MEMBER)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    def __repr__(self) -> str:
        return f"User(id='{self.id}', name='{self.name}', role='{self.role}')"


class Workspace(Base):
    """A workspace groups projects and the users allowed to see them."""

    __tablename__ = "workspace"
    __table_args__ = (
        Index("ix_workspace_name", "name", unique=True),
        Index("ix_workspace_owner_id", "owner_id"),
    )

    id: Mapped[str] = mapped_column(String, primary_key=True, default=generate_id)
    name: Mapped[str] = mapped_column(String)
    description: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    is_private: Mapped[bool] = mapped_column(Boolean, default=False)
    owner_id: Mapped[str] = mapped_column(String, ForeignKey("user.id"), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    owner = relationship("User", foreign_keys=[owner_id])
    members = relationship("User", secondary=workspace_members)
    projects = relationship("Project", back_populates="workspace")

    @property
    def member_ids(self) -> list[str]:
        """Ids of the workspace members. Requires ``members`` to be loaded."""
        return sorted(member.id for member in self.members)

    def __repr__(self) -> str:
        return f"Workspace(id='{self.id}', name='{self.name}', is_private={self.is_private})"


class Project(Base):
    """A project inside a workspace."""

    __tablename__ = "project"
    __table_args__ = (
        Index("ix_project_name", "name", unique=True),
        Index("ix_project_workspace_id", "workspace_id"),
    )

    id: Mapped[str] = mapped_column(String, primary_key=True, default=generate_id)
    name: Mapped[str] = mapped_column(String)
    description: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    workspace_id: Mapped[str] = mapped_column(
        String, ForeignKey("workspace.id", ondelete="CASCADE"), nullable=False
    )

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    workspace = relationship("Workspace", back_populates="projects")

    def __repr__(self) -> str:
        return f"Project(id='{self.id}', name='{self.name}', workspace_id='{self.workspace_id}')"
