"""Tests for the search CLI command."""

import json
from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from devsync.cli.main import app as cli_app
from devsync.search.errors import UnknownFieldError

runner = CliRunner()

SEARCH_RESULT = {
    "page_number": 0,
    "page_size": 2,
    "total_count": 3,
    "items": [
        {"id": "t1", "name": "python", "amount_used": 5},
        {"id": "t2", "name": "sql", "amount_used": 2},
    ],
    "has_more": True,
}


@pytest.fixture
def cli_env(config_home, monkeypatch):
    """Point the CLI at an empty config dir with a fresh SQLite file."""
    from devsync import config as config_module

    monkeypatch.setenv("DEVSYNC_CONFIG_DIR", str(config_home / "devsync-cli"))
    config_module._CONFIG_CACHE = None
    yield config_home / "devsync-cli"
    config_module._CONFIG_CACHE = None


@patch("devsync.cli.commands.search._search", new_callable=AsyncMock)
def test_search_prints_json(mock_search):
    mock_search.return_value = SEARCH_RESULT

    result = runner.invoke(
        cli_app,
        ["search", "tag", "name=py#name=sql", "--page-size", "2", "--sort", "name"],
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == SEARCH_RESULT
    mock_search.assert_called_once_with("tag", "name=py#name=sql", None, 2, "name", None)


@patch("devsync.cli.commands.search._search", new_callable=AsyncMock)
def test_search_error_exits_nonzero(mock_search):
    mock_search.side_effect = UnknownFieldError("user", "nickname")

    result = runner.invoke(cli_app, ["search", "user", "nickname=al"])

    assert result.exit_code == 1
    assert "Error: Invalid search field provided: 'nickname'" in result.output


def test_search_empty_database(cli_env):
    result = runner.invoke(cli_app, ["search", "user"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["total_count"] == 0
    assert data["items"] == []
    assert data["page_size"] == 10
    assert (cli_env / "devsync.db").exists()


def test_search_unknown_field(cli_env):
    result = runner.invoke(cli_app, ["search", "user", "nickname=al"])

    assert result.exit_code == 1
    assert "Invalid search field provided: 'nickname'" in result.output


def test_search_unknown_entity_type(cli_env):
    result = runner.invoke(cli_app, ["search", "widget"])

    assert result.exit_code == 1
    assert "Unknown entity type: 'widget'" in result.output


def test_search_invalid_direction(cli_env):
    result = runner.invoke(cli_app, ["search", "tag", "--direction", "up"])

    assert result.exit_code == 1
    assert "direction" in result.output
