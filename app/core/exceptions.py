"""Custom exceptions for the invoice dashboard."""


class InvoiceAppException(Exception):
    """Base exception for the invoice dashboard."""

    pass


class NotFoundError(InvoiceAppException):
    """Raised when a resource is not found."""

    pass


class DatabaseError(InvoiceAppException):
    """Raised when a database operation fails."""

    pass


class ConfigurationError(InvoiceAppException):
    """Raised when configuration is invalid."""

    pass


class AuthenticationError(InvoiceAppException):
    """Raised when a request carries no valid session."""

    pass


class AuthError(InvoiceAppException):
    """Raised by the credentials provider when sign-in cannot complete."""

    pass


class CredentialsSignin(AuthError):
    """Raised when the submitted credentials do not match a user."""

    pass
