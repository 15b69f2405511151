"""CLI commands for devsync."""

from devsync.cli.commands import search

__all__ = ["search"]
