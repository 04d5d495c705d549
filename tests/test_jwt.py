"""Session token tests — issuance, expiry, tampering."""

import uuid
from datetime import datetime, timedelta, timezone

import jwt as pyjwt
import pytest

from tripdesk.auth.jwt import (
    TokenError,
    create_access_token,
    decode_token,
    verify_token,
)
from tripdesk.auth.roles import Role
from tripdesk.config import settings


def test_token_round_trip_claims():
    user_id = uuid.uuid4()
    claims = verify_token(create_access_token(user_id, Role.AGENT))
    assert claims is not None
    assert claims.subject_id == user_id
    assert claims.role is Role.AGENT


def test_token_expires_one_hour_after_issue():
    issued = datetime.now(timezone.utc).replace(microsecond=0)
    token = create_access_token(uuid.uuid4(), Role.AGENT, now=issued)
    payload = pyjwt.decode(token, options={"verify_signature": False})
    assert payload["exp"] - payload["iat"] == 3600


def test_token_valid_just_before_expiry():
    issued = datetime.now(timezone.utc) - timedelta(minutes=59)
    token = create_access_token(uuid.uuid4(), Role.AGENT, now=issued)
    assert verify_token(token) is not None


def test_token_invalid_after_expiry():
    issued = datetime.now(timezone.utc) - timedelta(minutes=61)
    token = create_access_token(uuid.uuid4(), Role.AGENT, now=issued)
    assert verify_token(token) is None
    with pytest.raises(TokenError, match="expired"):
        decode_token(token)


def test_token_invalid_at_expiry_instant():
    """exp is exclusive: a token is no longer valid at the exp second itself."""
    issued = datetime.now(timezone.utc).replace(microsecond=0) - timedelta(hours=1)
    token = create_access_token(uuid.uuid4(), Role.AGENT, now=issued)
    assert verify_token(token) is None


def test_zero_lifetime_is_not_replaced_by_default():
    issued = datetime.now(timezone.utc).replace(microsecond=0)
    token = create_access_token(uuid.uuid4(), Role.AGENT, now=issued, expires_minutes=0)
    payload = pyjwt.decode(token, options={"verify_signature": False})
    assert payload["exp"] == payload["iat"]
    assert verify_token(token) is None


def test_tampered_token_rejected():
    token = create_access_token(uuid.uuid4(), Role.USER)
    header, payload, signature = token.split(".")
    forged = pyjwt.encode(
        {**pyjwt.decode(token, options={"verify_signature": False}), "role": "agent"},
        "some-other-secret",
        algorithm="HS256",
    )
    assert verify_token(f"{header}.{forged.split('.')[1]}.{signature}") is None
    assert verify_token(forged) is None


def test_unsigned_token_rejected():
    now = datetime.now(timezone.utc)
    token = pyjwt.encode(
        {
            "sub": str(uuid.uuid4()),
            "role": "agent",
            "iat": now,
            "exp": now + timedelta(hours=1),
        },
        None,
        algorithm="none",
    )
    assert verify_token(token) is None


@pytest.mark.parametrize("token", [None, "", "not-a-jwt", "a.b.c"])
def test_malformed_tokens_rejected(token):
    assert verify_token(token) is None


def test_unknown_role_claim_rejected():
    now = datetime.now(timezone.utc)
    token = pyjwt.encode(
        {
            "sub": str(uuid.uuid4()),
            "role": "superagent",
            "iat": now,
            "exp": now + timedelta(hours=1),
        },
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )
    assert verify_token(token) is None


def test_missing_role_claim_rejected():
    now = datetime.now(timezone.utc)
    token = pyjwt.encode(
        {"sub": str(uuid.uuid4()), "iat": now, "exp": now + timedelta(hours=1)},
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )
    assert verify_token(token) is None
