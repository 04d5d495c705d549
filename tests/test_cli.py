"""CLI tests."""

import asyncio

import pytest
from click.testing import CliRunner
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from tripdesk import __version__
from tripdesk.cli.main import main
from tripdesk.db import engine as db_engine_module
from tripdesk.db.engine import create_tables
from tripdesk.schemas.identity import AgentRegistration
from tripdesk.services.identity_store import IdentityStore


@pytest.fixture()
def cli_db(tmp_path, monkeypatch):
    """Point the CLI at a file-backed SQLite database with one agent in it.

    Learn: Each command runs its own event loop via asyncio.run, so the
    database lives in a file and connections are not pooled.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}", poolclass=NullPool
    )
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    monkeypatch.setattr(db_engine_module, "engine", engine)
    monkeypatch.setattr(db_engine_module, "async_session_factory", factory)

    async def _seed():
        await create_tables(engine)
        async with factory() as session:
            await IdentityStore(session).create_agent(
                AgentRegistration(
                    username="Ada Agent",
                    email="a@x.com",
                    password="pw1",
                    agent_id="AG-001",
                )
            )
        await engine.dispose()

    asyncio.run(_seed())
    return engine


def test_version():
    result = CliRunner().invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_init_db():
    result = CliRunner().invoke(main, ["init-db"])
    assert result.exit_code == 0, result.output
    assert "Tables ready" in result.output


def test_accounts_lists_email_and_role(cli_db):
    result = CliRunner().invoke(main, ["accounts"])
    assert result.exit_code == 0, result.output
    assert "Accounts (1):" in result.output
    assert "a@x.com" in result.output
    assert "agent" in result.output
    assert "Ada Agent" in result.output


def test_delete_account_requires_confirmation():
    result = CliRunner().invoke(main, ["delete-account", "a@x.com"], input="n\n")
    assert result.exit_code != 0
    assert "Deleted" not in result.output


def test_delete_account_with_yes(cli_db):
    runner = CliRunner()
    result = runner.invoke(main, ["delete-account", "a@x.com", "--yes"])
    assert result.exit_code == 0, result.output
    assert "Deleted a@x.com" in result.output

    result = runner.invoke(main, ["accounts"])
    assert result.exit_code == 0, result.output
    assert "No accounts found." in result.output


def test_delete_unknown_account_fails(cli_db):
    result = CliRunner().invoke(main, ["delete-account", "nobody@x.com", "--yes"])
    assert result.exit_code == 1
    assert "Deleted" not in result.output
