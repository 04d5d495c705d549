"""FastAPI auth dependencies.

Learn: These are used as Depends() in route handlers to extract and
validate the current identity from the request. Two layers:

1. get_current_identity — cookie → verified token → User row (401 otherwise)
2. require_role(role)    — identity's role must equal `role` (403 otherwise)

Every protected handler declares its own role dependency; there is no
router-wide check, because proving *who* is not the same as proving
*what they may do*.
"""

from typing import Callable, Optional

from fastapi import Cookie, Depends

from tripdesk.auth.jwt import verify_token
from tripdesk.auth.roles import Role
from tripdesk.config import settings
from tripdesk.db.models import User
from tripdesk.errors import Forbidden, Unauthenticated
from tripdesk.services.identity_store import IdentityStore, get_identity_store


async def get_current_identity(
    token: Optional[str] = Cookie(None, alias=settings.session_cookie_name),
    store: IdentityStore = Depends(get_identity_store),
) -> User:
    """Resolve the session cookie to a live account.

    Learn: The store is only touched once the token has verified, so a
    request without a valid token never reads a record. A token whose
    account has since been deleted is rejected the same way as a bad one.
    """
    claims = verify_token(token)
    if claims is None:
        raise Unauthenticated()

    user = await store.get(claims.subject_id)
    if user is None:
        raise Unauthenticated()
    return user


def require_role(role: Role) -> Callable:
    """Build a dependency that admits only identities with exactly `role`."""

    async def check_role(identity: User = Depends(get_current_identity)) -> User:
        if identity.role != role:
            raise Forbidden()
        return identity

    return check_role


require_agent = require_role(Role.AGENT)
