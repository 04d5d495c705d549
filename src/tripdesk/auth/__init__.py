"""Authentication and authorization.

Learn: One authentication path — email/password → JWT in an HTTP-only
cookie. Authorization is a per-route role check on top of it:

1. get_current_identity proves *who* (cookie → token → user record)
2. require_role(...) proves *what they may do* (role equality)

Handlers receive the resolved user as an explicit argument.
"""
