"""Session cookie helpers.

Learn: The token lives in an HTTP-only cookie, so page scripts can't
read it. Logout and account deletion clear the cookie; the token itself
stays valid until it expires (there is no revocation list).
"""

from starlette.responses import Response

from tripdesk.auth.jwt import create_access_token
from tripdesk.config import settings
from tripdesk.db.models import User


def start_session(response: Response, user: User) -> str:
    """Issue a token for `user` and attach it to the response as the session cookie."""
    token = create_access_token(user.id, user.role)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.access_token_expire_minutes * 60,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite=settings.session_cookie_samesite,
        path="/",
    )
    return token


def end_session(response: Response) -> None:
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite=settings.session_cookie_samesite,
        path="/",
    )
