"""Shared helpers for CLI commands."""

import asyncio
from typing import Any, Coroutine, TypeVar

from devsync import db

T = TypeVar("T")


def run_with_cleanup(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine to completion, then dispose the database engine.

    Each CLI invocation gets its own event loop, so the engine must not
    outlive it.
    """

    async def _run() -> T:
        try:
            return await coro
        finally:
            await db.shutdown_db()

    return asyncio.run(_run())
