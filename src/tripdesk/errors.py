"""Application error taxonomy.

Learn: Each error carries the HTTP status and a public message. The
message is what the client sees; internal detail (SQL errors, stack
traces) only ever goes to the server log. A single exception handler
registered in main.py turns any TripdeskError into a response.
"""

from typing import Optional


class TripdeskError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 500
    public_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.public_message = message or self.public_message
        super().__init__(self.public_message)


class Unauthenticated(TripdeskError):
    """No token, an invalid or expired token, or a token whose record is gone."""

    status_code = 401
    public_message = "Not authorized"


class Forbidden(TripdeskError):
    """Valid identity, wrong role for the route."""

    status_code = 403
    public_message = "Forbidden"


class Conflict(TripdeskError):
    """Duplicate unique field on create or update."""

    status_code = 400
    public_message = "Record already exists"


class NotFound(TripdeskError):
    status_code = 404
    public_message = "Not found"


class ValidationError(TripdeskError):
    """Submitted fields failed schema validation."""

    status_code = 400
    public_message = "Invalid input"


class InternalError(TripdeskError):
    """Unexpected store or signing fault. Logged server-side, never detailed to the client."""

    status_code = 500
