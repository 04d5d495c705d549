"""Account roles.

Learn: Roles are a closed enum rather than free-form strings. Anything
that branches on role goes through a `match` ending in assert_never,
so a new role that isn't handled everywhere fails type checking instead
of silently falling through.
"""

import enum
from typing import assert_never


class Role(str, enum.Enum):
    USER = "user"
    AGENT = "agent"


def landing_path(role: Role) -> str:
    """Where to send an account right after it signs in."""
    match role:
        case Role.AGENT:
            return "/agent/dashboard"
        case Role.USER:
            return "/"
        case _:
            assert_never(role)
