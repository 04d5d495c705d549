"""Route aggregation.

All routers registered here get mounted in main.py.

Learn: Unlike a router-wide auth dependency, the agent routes carry
their role check on each handler (see auth.dependencies). Session,
health and registration routes are open.
"""

from fastapi import APIRouter

from tripdesk.api.agent import router as agent_router
from tripdesk.api.health import router as health_router
from tripdesk.api.session import router as session_router

app_router = APIRouter()

app_router.include_router(health_router, tags=["health"])
app_router.include_router(session_router, tags=["session"])
app_router.include_router(agent_router, tags=["agent"])
