from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .context import SubmissionContext
from .errors import UnknownFieldError
from .schema import RawValue, Schema


@dataclass(frozen=True)
class FieldProps:
    """Everything an input needs: ``<input name=.. value=.. disabled>`` plus its errors."""

    name: str
    value: RawValue
    errors: List[str] = field(default_factory=list)
    disabled: bool = False

    @property
    def invalid(self) -> bool:
        return bool(self.errors)

    @property
    def error_text(self) -> str:
        return ", ".join(self.errors)

    @property
    def error_id(self) -> str:
        return f"{self.name}-error"

    def selected(self, option: object) -> bool:
        if isinstance(self.value, list):
            return str(option) in self.value
        return str(option) == self.value


def bind_field(name: str, context: SubmissionContext) -> FieldProps:
    # Recomputed on every call: the props always reflect the current response.
    return FieldProps(
        name=name,
        value=context.value_of(name),
        errors=context.errors_of(name),
        disabled=context.is_submitting,
    )


class FormBinder:
    """Binds the inputs of one form to its context, by schema field name."""

    def __init__(self, schema: Schema, context: SubmissionContext):
        self.schema = schema
        self.context = context

    def field(self, name: str) -> FieldProps:
        if name not in self.schema:
            raise UnknownFieldError(f"Field {name!r} is not declared in schema {self.schema.name!r}")
        return bind_field(name, self.context)

    __getitem__ = field

    def fields(self) -> List[FieldProps]:
        return [bind_field(name, self.context) for name in self.schema.field_names]

    @property
    def is_submitting(self) -> bool:
        return self.context.is_submitting

    @property
    def submit_disabled(self) -> bool:
        return self.context.is_submitting

    @property
    def form_error(self) -> Optional[str]:
        return self.context.form_error

    def submit_label(self, idle: str = "Save", busy: str = "Saving...") -> str:
        return busy if self.context.is_submitting else idle
