"""
Domain errors raised by the resource services.

The API layer maps each class to an HTTP status; services never raise
HTTPException themselves.
"""


class StockroomError(Exception):
    """Base class for domain errors."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AccessDenied(StockroomError):
    """Caller lacks access to the scope, or the resource does not exist.

    The two cases share one error so responses never reveal whether an id
    exists.
    """

    status_code = 403


class NotFound(StockroomError):
    """Raised for lookups that are not scope-guarded (invite codes, member rows)."""

    status_code = 404


class Conflict(StockroomError):
    """Duplicate name, self-join, already a member, owner cannot leave."""

    status_code = 409


class InvalidInput(StockroomError):
    """Input passed schema validation but breaks a domain rule."""

    status_code = 422


class InvariantViolation(StockroomError):
    """Raised when a change would break a stored invariant (stock below zero)."""

    status_code = 409
