"""Enumerated column types shared by the models and the search field tables."""

from enum import Enum


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    MEMBER = "MEMBER"


class QuestionStatus(str, Enum):
    OPEN = "OPEN"
    RESOLVED = "RESOLVED"
    CLOSED = "CLOSED"


class TargetType(str, Enum):
    """Kinds of records a comment can be attached to."""

    NOTE = "NOTE"
    QUESTION = "QUESTION"
    ANSWER = "ANSWER"
