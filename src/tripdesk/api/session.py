"""Session routes — sign in, sign out, public pages.

Learn: Login is the other place a session token is issued (registration
is the first). Where the browser lands afterwards depends on the role,
via roles.landing_path.
"""

import structlog
from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse

from tripdesk.auth.roles import landing_path
from tripdesk.auth.session import end_session, start_session
from tripdesk.schemas.identity import LoginForm
from tripdesk.services.identity_store import IdentityStore, get_identity_store
from tripdesk.views import render

logger = structlog.get_logger()

router = APIRouter()

INVALID_CREDENTIALS = "Invalid email or password"


@router.get("/")
async def home(request: Request):
    return render(request, "index.html")


@router.get("/login")
async def login_page(request: Request):
    return render(request, "login.html")


@router.get("/register")
async def register_page(request: Request):
    return render(request, "register.html")


@router.post("/login")
async def login(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
    store: IdentityStore = Depends(get_identity_store),
):
    """Email/password → session cookie → role landing page."""
    form = LoginForm(email=email, password=password)
    user = await store.authenticate(form.email, form.password)
    if not user:
        logger.info("session.login_failed")
        return render(
            request,
            "login.html",
            {"error_message": INVALID_CREDENTIALS, "email": email},
            status_code=401,
        )

    response = RedirectResponse(url=landing_path(user.role), status_code=302)
    start_session(response, user)
    logger.info("session.login", user_id=str(user.id), role=user.role.value)
    return response


@router.post("/logout")
async def logout():
    response = RedirectResponse(url="/login", status_code=302)
    end_session(response)
    return response
