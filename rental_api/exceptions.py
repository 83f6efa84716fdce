"""
Custom exception classes for the rental booking API.

Controllers never catch these one by one: the app factory registers a single
error handler for `RentalError` that renders `{"success": False, "message"}`
with the class's HTTP status.
"""


class RentalError(Exception):
    """Base class for every error the API reports to its caller."""

    status_code = 500
    default_message = "Error: request failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def __str__(self) -> str:  # pragma: no cover
        return self.message


class ValidationError(RentalError):
    """Raised when a required field is missing or malformed."""

    status_code = 400
    default_message = "Missing required fields"


class AuthError(RentalError):
    """Raised when the request carries no valid identity, or the identity may not act."""

    status_code = 401
    default_message = "Not authorized"


class NotFoundError(RentalError):
    """Raised when a referenced vehicle, booking or user does not exist."""

    status_code = 404
    default_message = "Not found"


class ConflictError(RentalError):
    """
    Raised by the store when an active booking already covers the requested dates.

    The booking service turns it into a normal negative result, so it only
    reaches the HTTP layer if some caller lets it escape.
    """

    status_code = 409
    default_message = "Vehicle not available for selected dates"


class StoreError(RentalError):
    """Raised when the persistent store cannot be read or written."""

    status_code = 500
    default_message = "Error: storage failure"
