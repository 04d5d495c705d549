"""Test fixtures — a fresh in-memory database per test.

Learn: Testing pattern for async SQLAlchemy + FastAPI:

1. Each test gets its own in-memory SQLite engine (StaticPool keeps the
   single connection alive, so every session sees the same database).
2. The app's get_db dependency is overridden to hand out a new session
   per request from that engine — the same lifecycle as production.
3. After the test the engine is disposed and the database vanishes.

Environment is set before anything from tripdesk is imported, since
settings are read once at import time.
"""

import os

os.environ.setdefault("TRIPDESK_DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("TRIPDESK_BCRYPT_ROUNDS", "4")
os.environ.setdefault("TRIPDESK_ENVIRONMENT", "development")

import re

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from tripdesk.db.engine import create_tables, get_db
from tripdesk.main import app

TOKEN_RE = re.compile(r"(?:^|[\s,;])token=([^;]*)")


@pytest_asyncio.fixture()
async def db_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_tables(engine)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture()
async def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture()
async def db_session(session_factory):
    """A session for arranging and inspecting data outside of requests."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture()
async def client(session_factory):
    """HTTP client with the app's get_db pointed at the test database.

    Learn: Auth is NOT overridden — every protected request runs the real
    cookie → token → record pipeline. Tests pass the session cookie
    explicitly (see auth_headers) so nothing depends on the cookie jar.
    """
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ─── Helpers ─────────────────────────────────────────────


def session_token(response) -> str:
    """Pull the session token out of a response's Set-Cookie header."""
    for header in response.headers.get_list("set-cookie"):
        m = TOKEN_RE.search(header)
        if m:
            return m.group(1)
    raise AssertionError("response did not set the session cookie")


def auth_headers(token: str) -> dict:
    return {"Cookie": f"token={token}"}


def agent_form(**overrides) -> dict:
    form = {
        "agentname": "Ada Agent",
        "agentemail": "a@x.com",
        "agentpassword": "pw1",
        "agentid": "AG-001",
        "agency": "Blue Sky Travel",
        "phone": "555-0100",
    }
    form.update(overrides)
    return form


async def register_agent(client, **overrides) -> str:
    """Register an agent and return its session token."""
    r = await client.post("/agent/register", data=agent_form(**overrides))
    assert r.status_code == 302, r.text
    token = session_token(r)
    client.cookies.clear()
    return token
