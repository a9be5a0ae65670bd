"""Form pipeline: extract → validate → respond → context → binder."""
from __future__ import annotations

from .binder import FieldProps, FormBinder, bind_field
from .context import FormSubmitter, Submission, SubmissionContext, SubmissionState, client_transport
from .errors import (
    FormError,
    MalformedSubmissionError,
    SubmissionInFlightError,
    TransportError,
    UnknownFieldError,
)
from .extract import collapse, get_query_params, get_raw_form_fields
from .responses import SubmissionResponse, bad_request, has_form_error, process_bad_request, success
from .schema import (
    Email,
    Failure,
    Field,
    FieldError,
    MaxLength,
    MinLength,
    OneOf,
    RawFields,
    Schema,
    Success,
    ValidationResult,
    string,
    string_list,
    validate,
)

__all__ = [
    "Email",
    "Failure",
    "Field",
    "FieldError",
    "FieldProps",
    "FormBinder",
    "FormError",
    "FormSubmitter",
    "MalformedSubmissionError",
    "MaxLength",
    "MinLength",
    "OneOf",
    "RawFields",
    "Schema",
    "Submission",
    "SubmissionContext",
    "SubmissionInFlightError",
    "SubmissionResponse",
    "SubmissionState",
    "Success",
    "TransportError",
    "UnknownFieldError",
    "ValidationResult",
    "bad_request",
    "bind_field",
    "client_transport",
    "collapse",
    "get_query_params",
    "get_raw_form_fields",
    "has_form_error",
    "process_bad_request",
    "string",
    "string_list",
    "success",
    "validate",
]
