class FormError(Exception):
    """Base exception for the form pipeline."""


class MalformedSubmissionError(FormError):
    """Raised when a submission body or reply cannot be read at all."""


class TransportError(FormError):
    """Raised by a transport when a submission never got a reply."""


class SubmissionInFlightError(FormError):
    """Raised when a form is submitted again before the previous reply arrived."""


class UnknownFieldError(FormError, KeyError):
    """Raised when a template binds a field its schema does not declare."""
