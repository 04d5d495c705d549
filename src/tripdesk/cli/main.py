"""TripDesk CLI — run the server, prepare the database, manage accounts.

Usage:
    tripdesk serve                     # Run the web app with uvicorn
    tripdesk init-db                   # Create missing tables
    tripdesk accounts                  # List accounts and roles
    tripdesk delete-account a@x.com    # Remove an account by email
"""

from __future__ import annotations

import asyncio
import sys

import click
from sqlalchemy import select

from tripdesk import __version__
from tripdesk.config import settings

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run(coro):
    """Run an async coroutine from a synchronous Click handler."""
    return asyncio.run(coro)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="tripdesk")
def main():
    """TripDesk — agent portal for the travel booking site."""


@main.command()
@click.option("--host", default=None, help="Bind address (default: TRIPDESK_HOST)")
@click.option("--port", default=None, type=int, help="Port (default: TRIPDESK_PORT)")
@click.option("--reload", is_flag=True, help="Reload on code changes (development)")
def serve(host, port, reload):
    """Run the web app."""
    import uvicorn

    uvicorn.run(
        "tripdesk.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


@main.command("init-db")
def init_db():
    """Create any missing tables."""
    from tripdesk.db.engine import create_tables, engine

    async def _init():
        await create_tables(engine)
        await engine.dispose()

    _run(_init())
    click.echo(f"Tables ready at {settings.database_url}")


@main.command()
def accounts():
    """List accounts and their roles."""
    from tripdesk.db.engine import async_session_factory, engine
    from tripdesk.auth.roles import Role
    from tripdesk.db.models import User

    async def _list():
        async with async_session_factory() as session:
            result = await session.execute(select(User).order_by(User.email))
            users = list(result.scalars().all())
        await engine.dispose()
        return users

    users = _run(_list())
    if not users:
        click.echo("No accounts found.")
        return

    click.secho(f"Accounts ({len(users)}):", bold=True)
    for u in users:
        role = click.style(u.role.value, fg="cyan" if u.role is Role.AGENT else "white")
        click.echo(f"  {str(u.id)[:8]}  {u.email:32s}  {role:10s}  {u.username}")


@main.command("delete-account")
@click.argument("email")
@click.confirmation_option(prompt="Permanently delete this account?")
def delete_account(email):
    """Permanently delete the account registered with EMAIL."""
    from tripdesk.db.engine import async_session_factory, engine
    from tripdesk.services.identity_store import IdentityStore

    async def _delete():
        async with async_session_factory() as session:
            store = IdentityStore(session)
            user = await store.find_by_email(email)
            deleted = await store.delete(user.id) if user else False
        await engine.dispose()
        return deleted

    if not _run(_delete()):
        click.secho(f"No account with email {email}", fg="red", err=True)
        sys.exit(1)
    click.echo(f"Deleted {email}")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    main()
