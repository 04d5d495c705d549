"""JWT session token creation and verification.

Learn: JWT (JSON Web Token) provides stateless authentication.
The token carries the account id (`sub`) and its role, and lives for
a fixed 60 minutes. There is no server-side revocation list: a token
stays cryptographically valid until `exp`, and the only other bound
is that get_current_identity refuses tokens whose account is gone.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
import structlog

from tripdesk.auth.roles import Role
from tripdesk.config import settings

logger = structlog.get_logger()


class TokenError(Exception):
    """Raised when token verification fails."""


@dataclass(frozen=True)
class TokenClaims:
    subject_id: uuid.UUID
    role: Role
    expires_at: datetime


def create_access_token(
    subject_id: uuid.UUID,
    role: Role,
    now: Optional[datetime] = None,
    expires_minutes: Optional[int] = None,
) -> str:
    """Create a signed session token for an account."""
    issued_at = now or datetime.now(timezone.utc)
    if expires_minutes is None:
        expires_minutes = settings.access_token_expire_minutes
    expires = issued_at + timedelta(minutes=expires_minutes)
    payload = {
        "sub": str(subject_id),
        "role": Role(role).value,
        "iat": issued_at,
        "exp": expires,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> TokenClaims:
    """Verify and decode a session token.

    Returns the claims on success.
    Raises TokenError on failure.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "role", "iat", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise TokenError("Token has expired")
    except jwt.InvalidTokenError as e:
        raise TokenError(f"Invalid token: {e}")

    try:
        return TokenClaims(
            subject_id=uuid.UUID(payload["sub"]),
            role=Role(payload["role"]),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
    except (TypeError, ValueError) as e:
        raise TokenError(f"Invalid claims: {e}")


def verify_token(token: Optional[str]) -> Optional[TokenClaims]:
    """Return the token's claims, or None if it can't be trusted.

    Learn: Callers treat every failure the same way (unauthenticated),
    so the reason is only logged, never surfaced.
    """
    if not token:
        return None
    try:
        return decode_token(token)
    except TokenError as e:
        logger.debug("token.rejected", reason=str(e))
        return None
