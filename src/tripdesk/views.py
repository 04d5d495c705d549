"""Server-side rendered views.

Learn: Jinja2 templates under tripdesk/templates, rendered through
FastAPI's Jinja2Templates. Handlers build a plain dict context from the
User row; templates never see the ORM object, so they can't reach the
password hash by accident.
"""

from pathlib import Path
from typing import Optional

from fastapi import Request
from fastapi.templating import Jinja2Templates
from starlette.responses import Response

from tripdesk.db.models import User

templates_dir = Path(__file__).parent / "templates"
templates = Jinja2Templates(directory=str(templates_dir))


def agent_context(user: User) -> dict:
    """Display fields shared by every agent page."""
    return {"agentname": user.username}


def agent_profile_context(
    user: User,
    success_message: Optional[str] = None,
    error_message: Optional[str] = None,
) -> dict:
    """Everything the profile form shows, plus an optional status banner."""
    return {
        "agentname": user.username,
        "agentemail": user.email,
        "agentid": user.agent_id,
        "phone": user.phone,
        "agency": user.agency,
        "bio": user.bio,
        "success_message": success_message,
        "error_message": error_message,
    }


def render(
    request: Request, name: str, context: Optional[dict] = None, status_code: int = 200
) -> Response:
    return templates.TemplateResponse(
        request, name, context or {}, status_code=status_code
    )
