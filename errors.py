"""
Error taxonomy shared by the db layer, services and routes.

Every error the API reports to a caller is an ``ApiError``.  The exception
handler installed in ``app.py`` renders it as ``{"error": message}`` with the
error's status code.  ``DatabaseUnavailable`` is the exception: it is only
raised at startup and stops the process.
"""


class ApiError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class ValidationError(ApiError):
    status_code = 400
    message = "Invalid request"


class AuthError(ApiError):
    status_code = 401
    message = "Unauthorized"


class NotFoundError(ApiError):
    status_code = 404
    message = "Not found"


class RateLimitError(ApiError):
    status_code = 429
    message = "Too many requests, please try again later."


class QueryError(ApiError):
    """A statement failed downstream.  The driver detail is logged, not returned."""

    status_code = 500
    message = "Database query failed"


class AdminNotConfigured(ApiError):
    status_code = 503
    message = "Admin password is not configured. Set ADMIN_PASSWORD."


class DatabaseUnavailable(ConnectionError):
    """The connection pool could not be established at startup."""
