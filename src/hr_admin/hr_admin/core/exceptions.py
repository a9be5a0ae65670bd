class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class ConfigurationError(Exception):
    """Raised at startup when the selected settings module is unusable."""


def get_error_message(error: BaseException) -> str:
    message = str(error)
    return message or error.__class__.__name__
