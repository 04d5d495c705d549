"""FastAPI application factory.

Learn: App factory pattern — create_app() returns a configured FastAPI
instance. Lifespan manages startup/shutdown (database engine).
Middleware, error handlers and routers are all registered here.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from tripdesk import __version__
from tripdesk.api import app_router
from tripdesk.config import settings
from tripdesk.errors import TripdeskError

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Learn: Anything before `yield` runs at startup, after `yield` runs
    at shutdown. Tables are created by migrations (or `tripdesk init-db`),
    never implicitly here.
    """
    logger.info(
        "tripdesk.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )

    yield

    logger.info("tripdesk.shutdown")

    from tripdesk.db.engine import engine
    await engine.dispose()


async def handle_app_error(request: Request, exc: TripdeskError) -> PlainTextResponse:
    """Render a TripdeskError as status + public message.

    Learn: Handlers log the cause of an InternalError where it happens;
    here we only record the outcome. The client never sees more than
    the public message.
    """
    logger.info(
        "request.rejected",
        status=exc.status_code,
        error=exc.__class__.__name__,
    )
    return PlainTextResponse(exc.public_message, status_code=exc.status_code)


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    app = FastAPI(
        title="TripDesk",
        description="Agent portal for the TripDesk travel booking site",
        version=__version__,
        lifespan=lifespan,
    )

    # ── Middleware stack ──────────────────────────────────────
    # Note: Starlette middleware executes in reverse order of registration.
    # Request flow: RequestId → Security → handler

    from tripdesk.middleware.request_id import RequestIdMiddleware
    from tripdesk.middleware.security import SecurityHeadersMiddleware

    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIdMiddleware)

    app.add_exception_handler(TripdeskError, handle_app_error)

    app.include_router(app_router)

    return app


# Default app instance (used by uvicorn: tripdesk.main:app)
app = create_app()
