"""Submission responses.

A :class:`SubmissionResponse` is what a form handler answers with. On the
wire it is JSON::

    {"fields": {...}, "fieldErrors": {"name": ["..."]}, "formError": "..."}

``fieldErrors`` and ``formError`` are left out on success. ``fields`` always
echoes what was submitted, invalid values included, so the form can be
re-rendered exactly as the user typed it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .errors import MalformedSubmissionError
from .schema import Failure, RawFields, RawValue


def _copy_fields(fields: Mapping[str, RawValue]) -> RawFields:
    return {k: list(v) if isinstance(v, list) else v for k, v in fields.items()}


@dataclass(frozen=True)
class SubmissionResponse:
    fields: RawFields = field(default_factory=dict)
    field_errors: Dict[str, List[str]] = field(default_factory=dict)
    form_error: Optional[str] = None
    redirect_to: Optional[str] = None

    @property
    def ok(self) -> bool:
        return not self.field_errors and self.form_error is None

    def get(self, name: str, default: RawValue = "") -> RawValue:
        return self.fields.get(name, default)

    def errors_for(self, name: str) -> List[str]:
        return list(self.field_errors.get(name, ()))

    def to_json(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"fields": _copy_fields(self.fields)}
        if self.field_errors:
            payload["fieldErrors"] = {k: list(v) for k, v in self.field_errors.items()}
        if self.form_error is not None:
            payload["formError"] = self.form_error
        if self.redirect_to is not None:
            payload["redirectTo"] = self.redirect_to
        return payload

    @classmethod
    def from_json(cls, payload: Any) -> "SubmissionResponse":
        if not isinstance(payload, Mapping):
            raise MalformedSubmissionError("Submission reply is not a JSON object")

        raw_fields = payload.get("fields") or {}
        raw_errors = payload.get("fieldErrors") or {}
        form_error = payload.get("formError")
        redirect_to = payload.get("redirectTo")
        if not isinstance(raw_fields, Mapping) or not isinstance(raw_errors, Mapping):
            raise MalformedSubmissionError("Submission reply has an invalid shape")
        if form_error is not None and not isinstance(form_error, str):
            raise MalformedSubmissionError("formError must be a string")

        fields: RawFields = {}
        for name, value in raw_fields.items():
            if isinstance(value, list):
                fields[str(name)] = [str(v) for v in value]
            elif value is not None:
                fields[str(name)] = str(value)

        field_errors: Dict[str, List[str]] = {}
        for name, messages in raw_errors.items():
            if isinstance(messages, str):
                messages = [messages]
            if not isinstance(messages, list):
                raise MalformedSubmissionError(f"fieldErrors[{name!r}] must be a list")
            field_errors[str(name)] = [str(m) for m in messages]

        return cls(
            fields=fields,
            field_errors=field_errors,
            form_error=form_error,
            redirect_to=redirect_to if isinstance(redirect_to, str) else None,
        )


def process_bad_request(
    failure: Failure,
    fields: Mapping[str, RawValue],
    *,
    form_error: Optional[str] = None,
) -> SubmissionResponse:
    """Build the 400 answer for a failed validation. Never raises."""
    return SubmissionResponse(
        fields=_copy_fields(fields),
        field_errors=failure.field_errors(),
        form_error=form_error,
    )


def bad_request(*, form_error: str, fields: Optional[Mapping[str, RawValue]] = None) -> SubmissionResponse:
    """Build the 400 answer for an error no single field is to blame for."""
    return SubmissionResponse(fields=_copy_fields(fields or {}), form_error=form_error)


def success(fields: Optional[Mapping[str, RawValue]] = None, *, redirect_to: Optional[str] = None) -> SubmissionResponse:
    return SubmissionResponse(fields=_copy_fields(fields or {}), redirect_to=redirect_to)


def has_form_error(payload: Any) -> bool:
    if isinstance(payload, SubmissionResponse):
        return payload.form_error is not None
    return isinstance(payload, Mapping) and isinstance(payload.get("formError"), str)
