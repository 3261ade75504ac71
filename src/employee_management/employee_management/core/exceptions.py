class DomainError(Exception):
    """Base exception for business rule violations."""

    http_status = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid or no session exists."""

    http_status = 401


class AuthorizationError(DomainError):
    """Raised when an employee lacks permission for an action."""

    http_status = 403


class NotFoundError(DomainError):
    http_status = 404


class ConflictError(DomainError):
    """Raised on uniqueness violations (email, one report per day)."""

    http_status = 409
