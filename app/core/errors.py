"""Error taxonomy for the API.

Every error carries the message shown to the client and the HTTP status it
maps to. The handlers in ``app.api.error_handlers`` render them as
``{"error": message}``.
"""


class ApiError(Exception):
    status_code = 500
    default_message = "Server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_response(self) -> dict:
        return {"error": self.message}


class ValidationError(ApiError):
    """Missing or malformed client input."""
    status_code = 400
    default_message = "Invalid request"


class ConflictError(ApiError):
    """A unique value (the user email) is already taken."""
    status_code = 400
    default_message = "Email already in use"


class AuthError(ApiError):
    """Unknown email or wrong password; the two are reported identically."""
    status_code = 400
    default_message = "Invalid credentials"


class NotFoundError(ApiError):
    status_code = 404
    default_message = "Not found"


class StoreError(ApiError):
    """Any Firestore failure. The client only ever sees a generic message."""
    status_code = 500
    default_message = "Server error"

    def __init__(self, operation: str = "unknown"):
        super().__init__(self.default_message)
        self.operation = operation
