"""Agent portal routes.

Learn: Routes for the "agent" role, mounted under /agent:
- POST /register → create an agent account, start a session
- GET  /dashboard, /clients, /services, /offers, /packages,
       /profile, /history, /privacy → rendered pages
- POST /profile → replace the editable profile fields
- POST /change-password → verify the current password, set a new one
- POST /delete-account → remove the account, end the session

Every route except /register declares require_agent itself. The
current account is passed in as a parameter, never read from ambient
request state.
"""

import pydantic
import structlog
from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.exc import SQLAlchemyError

from tripdesk.auth.dependencies import require_agent
from tripdesk.auth.session import end_session, start_session
from tripdesk.db.models import User
from tripdesk.errors import Conflict, InternalError, ValidationError
from tripdesk.schemas.identity import (
    AgentProfileUpdate,
    AgentRegistration,
    PasswordChange,
)
from tripdesk.services.identity_store import IdentityStore, get_identity_store
from tripdesk.views import agent_context, agent_profile_context, render

logger = structlog.get_logger()

router = APIRouter(prefix="/agent")


def _first_error(exc: pydantic.ValidationError) -> str:
    err = exc.errors()[0]
    field = ".".join(str(p) for p in err.get("loc", ()))
    return f"{field}: {err['msg']}" if field else err["msg"]


# ─── Register ────────────────────────────────────────────


@router.post("/register")
async def register(
    agentname: str = Form(""),
    agentemail: str = Form(""),
    agentpassword: str = Form(""),
    agentid: str = Form(""),
    agency: str = Form(""),
    phone: str = Form(""),
    store: IdentityStore = Depends(get_identity_store),
):
    """Create an agent account and sign it in."""
    try:
        data = AgentRegistration(
            username=agentname,
            email=agentemail,
            password=agentpassword,
            agent_id=agentid,
            agency=agency,
            phone=phone,
        )
    except pydantic.ValidationError as e:
        raise ValidationError(_first_error(e))

    try:
        user = await store.create_agent(data)
    except SQLAlchemyError as e:
        logger.exception("agent.register_failed", error=str(e))
        raise InternalError("Error registering agent")

    response = RedirectResponse(url="/agent/dashboard", status_code=302)
    start_session(response, user)
    logger.info("agent.registered", user_id=str(user.id))
    return response


# ─── Pages ───────────────────────────────────────────────


@router.get("/dashboard")
async def dashboard(request: Request, agent: User = Depends(require_agent)):
    return render(request, "agent/dashboard.html", agent_context(agent))


@router.get("/clients")
async def clients(request: Request, agent: User = Depends(require_agent)):
    return render(request, "agent/clients.html", agent_context(agent))


@router.get("/services")
async def services(request: Request, agent: User = Depends(require_agent)):
    return render(request, "agent/services.html", agent_context(agent))


@router.get("/offers")
async def offers(request: Request, agent: User = Depends(require_agent)):
    return render(request, "agent/offers.html", agent_context(agent))


@router.get("/packages")
async def packages(request: Request, agent: User = Depends(require_agent)):
    return render(request, "agent/packages.html", agent_context(agent))


@router.get("/history")
async def history(request: Request, agent: User = Depends(require_agent)):
    return render(request, "agent/history.html", agent_context(agent))


@router.get("/privacy")
async def privacy(request: Request, agent: User = Depends(require_agent)):
    return render(request, "agent/privacy.html", agent_context(agent))


# ─── Profile ─────────────────────────────────────────────


@router.get("/profile")
async def profile(request: Request, agent: User = Depends(require_agent)):
    return render(request, "agent/profile.html", agent_profile_context(agent))


@router.post("/profile")
async def update_profile(
    request: Request,
    agent: User = Depends(require_agent),
    agentname: str = Form(""),
    agentemail: str = Form(""),
    agentid: str = Form(""),
    phone: str = Form(""),
    agency: str = Form(""),
    bio: str = Form(""),
    store: IdentityStore = Depends(get_identity_store),
):
    """Replace the caller's profile fields and show the result.

    Learn: Malformed fields and an email already taken by another
    account are reported as a generic failure, the same as a store
    fault. NotFound (account deleted mid-request) passes through as-is.
    """
    try:
        data = AgentProfileUpdate(
            username=agentname,
            email=agentemail,
            agent_id=agentid,
            phone=phone,
            agency=agency,
            bio=bio,
        )
        updated = await store.update_agent_profile(agent.id, data)
    except pydantic.ValidationError as e:
        logger.warning("agent.profile_invalid", user_id=str(agent.id), error=_first_error(e))
        raise InternalError("Error updating profile")
    except Conflict:
        logger.warning("agent.profile_email_taken", user_id=str(agent.id))
        raise InternalError("Error updating profile")
    except SQLAlchemyError as e:
        logger.exception("agent.profile_update_failed", error=str(e))
        raise InternalError("Error updating profile")

    logger.info("agent.profile_updated", user_id=str(updated.id))
    return render(
        request,
        "agent/profile.html",
        agent_profile_context(updated, success_message="Profile updated successfully"),
    )


@router.post("/change-password")
async def change_password(
    request: Request,
    agent: User = Depends(require_agent),
    current_password: str = Form("", alias="currentPassword"),
    new_password: str = Form("", alias="newPassword"),
    store: IdentityStore = Depends(get_identity_store),
):
    """Set a new password after checking the current one.

    Learn: A wrong current password is an ordinary outcome, not an
    error — the profile page comes back with a message and the stored
    hash is left alone.
    """
    try:
        data = PasswordChange(
            current_password=current_password, new_password=new_password
        )
    except pydantic.ValidationError:
        return render(
            request,
            "agent/profile.html",
            agent_profile_context(agent, error_message="New password is required"),
        )

    if not store.check_password(agent, data.current_password):
        logger.info("agent.password_mismatch", user_id=str(agent.id))
        return render(
            request,
            "agent/profile.html",
            agent_profile_context(agent, error_message="Current password is incorrect"),
        )

    try:
        await store.set_password(agent, data.new_password)
    except SQLAlchemyError as e:
        logger.exception("agent.password_change_failed", error=str(e))
        raise InternalError("Error changing password")

    logger.info("agent.password_changed", user_id=str(agent.id))
    return render(
        request,
        "agent/profile.html",
        agent_profile_context(agent, success_message="Password changed successfully"),
    )


# ─── Delete ──────────────────────────────────────────────


@router.post("/delete-account")
async def delete_account(
    agent: User = Depends(require_agent),
    store: IdentityStore = Depends(get_identity_store),
):
    """Permanently delete the caller's account and sign them out."""
    user_id = agent.id
    try:
        await store.delete(user_id)
    except SQLAlchemyError as e:
        logger.exception("agent.delete_failed", error=str(e))
        raise InternalError("Error deleting account")

    response = RedirectResponse(url="/login", status_code=302)
    end_session(response)
    logger.info("agent.deleted", user_id=str(user_id))
    return response
