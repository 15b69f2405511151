"""Search command for devsync CLI.

Prints one page of results as JSON on stdout.
"""

import json
from typing import Annotated, Any, Optional

import typer
from loguru import logger

from devsync import db
from devsync.cli.app import app
from devsync.cli.commands.command_utils import run_with_cleanup
from devsync.config import ConfigManager
from devsync.schemas.search import EntityType
from devsync.services.search_service import SearchService


def _print_json(result: Any) -> None:
    """Print a result as formatted JSON."""
    print(json.dumps(result, indent=2, ensure_ascii=True, default=str))


async def _search(
    entity_type: str,
    terms: Optional[str],
    page: Optional[int],
    page_size: Optional[int],
    sort: Optional[str],
    direction: Optional[str],
) -> dict:
    app_config = ConfigManager().config
    _, session_maker = await db.get_or_create_db(
        db_path=app_config.database_path,
        db_type=db.DatabaseType.for_config(app_config),
        config=app_config,
    )
    search_service = SearchService(session_maker, app_config)
    result = await search_service.search_params(
        entity_type,
        raw_terms=terms,
        page=page,
        page_size=page_size,
        sort_field=sort,
        sort_direction=direction,
    )
    return result.model_dump(mode="json")


@app.command()
def search(
    entity_type: Annotated[
        str,
        typer.Argument(
            help=f"Entity type to search: {', '.join(e.value for e in EntityType)}"
        ),
    ],
    terms: Annotated[
        Optional[str],
        typer.Argument(help="Search terms joined by '#', e.g. 'name=alice#role=admin'"),
    ] = None,
    page: Annotated[
        Optional[int], typer.Option("--page", help="Zero-based page number")
    ] = None,
    page_size: Annotated[
        Optional[int], typer.Option("--page-size", help="Number of results per page")
    ] = None,
    sort: Annotated[Optional[str], typer.Option("--sort", help="Field to sort by")] = None,
    direction: Annotated[
        Optional[str], typer.Option("--direction", help="Sort direction: asc or desc")
    ] = None,
):
    """Search an entity type. Terms are combined with OR.

    Examples:

    devsync search user "role=admin#name=ali"
    devsync search question "status=open" --sort title --direction desc
    devsync search tag --page 1 --page-size 20
    """
    try:
        result = run_with_cleanup(_search(entity_type, terms, page, page_size, sort, direction))
        _print_json(result)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except Exception as e:  # pragma: no cover
        if not isinstance(e, typer.Exit):
            logger.exception("Error during search", e)
            typer.echo(f"Error during search: {e}", err=True)
            raise typer.Exit(1)
        raise
