"""Main CLI entry point for devsync."""  # pragma: no cover

from devsync.cli.app import app  # pragma: no cover

# Register commands
from devsync.cli.commands import search  # noqa: F401  # pragma: no cover

if __name__ == "__main__":  # pragma: no cover
    app()
