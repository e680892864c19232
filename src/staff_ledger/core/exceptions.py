class DomainError(Exception):
    """Base exception for business rule violations."""

    code = "INTERNAL_SERVER_ERROR"
    http_status = 500


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "BAD_REQUEST"
    http_status = 400


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""

    code = "UNAUTHORIZED"
    http_status = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    code = "FORBIDDEN"
    http_status = 403


class NotFoundError(DomainError):
    """Raised when an admin targets a record that does not exist."""

    code = "NOT_FOUND"
    http_status = 404


class DatabaseUnavailableError(DomainError):
    """Raised when the storage layer cannot be reached."""

    code = "SERVICE_UNAVAILABLE"
    http_status = 503
