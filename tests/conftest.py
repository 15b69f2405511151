"""Common test fixtures."""

import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import AsyncGenerator, Dict

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from devsync import db
from devsync.config import ConfigManager, DevSyncConfig
from devsync.db import DatabaseType
from devsync.models import (
    Answer,
    Base,
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
from devsync.services.search_service import SearchService


@pytest.fixture
def config_home(tmp_path, monkeypatch) -> Path:
    # Patch HOME environment variable for the duration of the test
    monkeypatch.setenv("HOME", str(tmp_path))
    # On Windows, also set USERPROFILE
    if os.name == "nt":
        monkeypatch.setenv("USERPROFILE", str(tmp_path))
    monkeypatch.delenv("DEVSYNC_CONFIG_DIR", raising=False)
    return tmp_path


@pytest.fixture(scope="function")
def app_config(config_home) -> DevSyncConfig:
    """Create test app configuration."""
    return DevSyncConfig(env="test")


@pytest.fixture
def config_manager(app_config: DevSyncConfig, config_home: Path) -> ConfigManager:
    # Invalidate config cache to ensure clean state for each test
    from devsync import config as config_module

    config_module._CONFIG_CACHE = None

    config_manager = ConfigManager()
    config_manager.save_config(app_config)
    return config_manager


@pytest_asyncio.fixture(scope="function")
async def engine_factory(
    app_config,
    config_manager,
) -> AsyncGenerator[tuple[AsyncEngine, async_sessionmaker[AsyncSession]], None]:
    """In-memory SQLite engine with a fresh schema for each test."""
    async with db.engine_session_factory(
        db_path=app_config.database_path, db_type=DatabaseType.MEMORY
    ) as (engine, session_maker):
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        yield engine, session_maker


@pytest_asyncio.fixture
async def session_maker(engine_factory) -> async_sessionmaker[AsyncSession]:
    """Get session maker for tests."""
    _, session_maker = engine_factory
    return session_maker


@pytest_asyncio.fixture
async def search_service(
    session_maker: async_sessionmaker[AsyncSession], app_config: DevSyncConfig
) -> SearchService:
    return SearchService(session_maker, app_config)


@dataclass
class SeedData:
    """Ids of the seeded rows, keyed by short name."""

    users: Dict[str, str]
    workspaces: Dict[str, str]
    projects: Dict[str, str]
    tags: Dict[str, str]
    questions: Dict[str, str]
    answers: Dict[str, str]
    notes: Dict[str, str]
    comments: Dict[str, str]


def _at(day: int) -> datetime:
    return datetime(2024, 1, day, 12, 0, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def seed_data(session_maker: async_sessionmaker[AsyncSession]) -> SeedData:
    """A small workspace graph covering every searchable entity.

    Ids are fixed and sort in declaration order, so default (id) ordering
    is predictable.
    """
    alice = User(
        id="u1", name="Alice Admin", email="alice@example.com", role=UserRole.ADMIN,
        password_hash="secret", created_at=_at(4), updated_at=_at(4),
    )
    bob = User(
        id="u2", name="Bob", email="bob@example.com", role=UserRole.MEMBER,
        created_at=_at(3), updated_at=_at(3),
    )
    carol = User(
        id="u3", name="Carol", email="carol@devsync.io", role=UserRole.MEMBER,
        created_at=_at(2), updated_at=_at(2),
    )
    dave = User(
        id="u4", name="Dave_100%", email="dave@example.com", role=UserRole.MEMBER,
        created_at=_at(1), updated_at=_at(1),
    )

    backend = Workspace(
        id="w1", name="backend", description="Server side", is_private=True,
        owner=alice, members=[alice, bob, carol],
    )
    frontend = Workspace(
        id="w2", name="frontend", description="Browser code", is_private=False,
        owner=bob, members=[bob],
    )
    platform = Workspace(
        id="w3", name="Data Platform", is_private=True, owner=carol, members=[],
    )

    api = Project(id="p1", name="api", description="Public API", workspace=backend)
    web = Project(id="p2", name="web", workspace=frontend)
    etl = Project(id="p3", name="etl", description="Nightly loads", workspace=platform)

    python = Tag(id="t1", name="python", color="blue", category="language", amount_used=5)
    sql = Tag(id="t2", name="sql", color="blue", category="language", amount_used=2)
    python_async = Tag(id="t3", name="python-async", color="green", amount_used=0)

    paginate = Question(
        id="q1", title="How to paginate", description="Offset or cursor?",
        status=QuestionStatus.OPEN, author=alice, project=api, tags=[python, sql],
    )
    tuning = Question(
        id="q2", title="Index tuning", description="Slow joins",
        status=QuestionStatus.RESOLVED, author=bob, project=api, tags=[sql],
    )
    asyncio_question = Question(
        id="q3", title="Async python", description="Event loop per test?",
        status=QuestionStatus.CLOSED, author=carol, project=web, tags=[python_async],
    )

    use_keyset = Answer(
        id="a1", content="Use keyset paging", is_accepted=True,
        question=paginate, author=bob,
    )
    use_offset = Answer(
        id="a2", content="Offset is fine for small tables", is_accepted=False,
        question=paginate, author=carol,
    )
    add_index = Answer(
        id="a3", content="Add a covering index", is_accepted=True,
        question=tuning, author=alice,
    )

    setup = Note(
        id="n1", title="Setup guide", content="Install and run", version=1,
        project=api, author=alice, tags=[python],
    )
    release = Note(
        id="n2", title="Release notes", content="v3 ships paging", version=3,
        project=web, author=bob, tags=[python, sql],
    )

    comments = [
        Comment(id="c1", content="Nice guide", target_type=TargetType.NOTE,
                target_id="n1", author=bob),
        Comment(id="c2", content="Same problem here", target_type=TargetType.QUESTION,
                target_id="q1", author=carol),
        Comment(id="c3", content="This worked", target_type=TargetType.ANSWER,
                target_id="a1", author=alice),
    ]

    async with db.scoped_session(session_maker) as session:
        session.add_all(
            [
                alice, bob, carol, dave,
                backend, frontend, platform,
                api, web, etl,
                python, sql, python_async,
                paginate, tuning, asyncio_question,
                use_keyset, use_offset, add_index,
                setup, release,
                *comments,
            ]
        )

    return SeedData(
        users={"alice": "u1", "bob": "u2", "carol": "u3", "dave": "u4"},
        workspaces={"backend": "w1", "frontend": "w2", "platform": "w3"},
        projects={"api": "p1", "web": "p2", "etl": "p3"},
        tags={"python": "t1", "sql": "t2", "python_async": "t3"},
        questions={"paginate": "q1", "tuning": "q2", "async": "q3"},
        answers={"keyset": "a1", "offset": "a2", "index": "a3"},
        notes={"setup": "n1", "release": "n2"},
        comments={"note": "c1", "question": "c2", "answer": "c3"},
    )