"""Declarative form schemas.

A :class:`Schema` is declared once per form and used on both sides of a
submission: :meth:`Schema.defaults` gives the values a form renders before
anything was posted, :meth:`Schema.validate` checks what comes back.

Usage::

    EmployeeSchema = Schema(
        string("firstName", MinLength(3)),
        string("email", Email()),
        string("managerId", MinLength(1)),
    )

    result = EmployeeSchema.validate(fields)
    if isinstance(result, Failure):
        return process_bad_request(result, fields)

Every field is checked, so a :class:`Failure` lists all problems at once:
ordered by field declaration, then by constraint declaration.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from email_validator import EmailNotValidError, validate_email

RawValue = Union[str, List[str]]
RawFields = Dict[str, RawValue]

MSG_REQUIRED = "Required"
MSG_SINGLE_VALUE = "Expected a single value"
MSG_INVALID_EMAIL = "Invalid email"


@dataclass(frozen=True)
class MinLength:
    length: int

    def check(self, value: str) -> Optional[str]:
        if len(value) >= self.length:
            return None
        if not value:
            return MSG_REQUIRED
        return f"Too short, expected at least {self.length} characters"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": "min_length", "length": self.length}


@dataclass(frozen=True)
class MaxLength:
    length: int

    def check(self, value: str) -> Optional[str]:
        if len(value) <= self.length:
            return None
        return f"Too long, expected at most {self.length} characters"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": "max_length", "length": self.length}


@dataclass(frozen=True)
class Email:
    def check(self, value: str) -> Optional[str]:
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            return MSG_INVALID_EMAIL
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": "email"}


@dataclass(frozen=True)
class OneOf:
    choices: Tuple[str, ...]

    def check(self, value: str) -> Optional[str]:
        if value in self.choices:
            return None
        return f"Expected one of: {', '.join(self.choices)}"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": "one_of", "choices": list(self.choices)}


Constraint = Union[MinLength, MaxLength, Email, OneOf]


def _constraint_from_dict(data: Mapping[str, Any]) -> Constraint:
    kind = data.get("kind")
    if kind == "min_length":
        return MinLength(int(data["length"]))
    if kind == "max_length":
        return MaxLength(int(data["length"]))
    if kind == "email":
        return Email()
    if kind == "one_of":
        return OneOf(tuple(str(c) for c in data.get("choices", ())))
    raise ValueError(f"Unknown constraint kind: {kind!r}")


@dataclass(frozen=True)
class Field:
    """One named input of a form.

    ``optional`` fields may be left out of a submission entirely;
    ``allow_empty`` fields accept ``""`` without running constraints (filter
    selects with a "-Select-" option); ``many`` fields carry every value of a
    repeated input as a list, and a required one needs at least one value.
    """

    name: str
    constraints: Tuple[Constraint, ...] = ()
    optional: bool = False
    allow_empty: bool = False
    many: bool = False
    default: Optional[RawValue] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "constraints": [c.to_dict() for c in self.constraints],
            "optional": self.optional,
            "allowEmpty": self.allow_empty,
            "many": self.many,
            "default": self.default,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Field":
        return cls(
            name=str(data["name"]),
            constraints=tuple(_constraint_from_dict(c) for c in data.get("constraints", ())),
            optional=bool(data.get("optional", False)),
            allow_empty=bool(data.get("allowEmpty", False)),
            many=bool(data.get("many", False)),
            default=data.get("default"),
        )

    def empty_value(self) -> RawValue:
        if self.default is not None:
            return list(self.default) if isinstance(self.default, list) else self.default
        return [] if self.many else ""

    def check(self, raw: Mapping[str, Any]) -> Tuple[bool, Any, List[str]]:
        """Return ``(present, value, messages)`` for this field."""
        value = raw.get(self.name)
        if value is None:
            if self.optional:
                return False, None, []
            return False, None, [MSG_REQUIRED]

        if self.many:
            values = [value] if isinstance(value, str) else [str(v) for v in value]
            if not values and not self.optional:
                return True, values, [MSG_REQUIRED]
            messages: List[str] = []
            for constraint in self.constraints:
                for item in values:
                    if self.allow_empty and item == "":
                        continue
                    message = constraint.check(item)
                    if message is not None:
                        messages.append(message)
                        break
            return True, values, messages

        if not isinstance(value, str):
            return True, value, [MSG_SINGLE_VALUE]
        if self.allow_empty and value == "":
            return True, value, []

        messages = []
        for constraint in self.constraints:
            message = constraint.check(value)
            if message is not None:
                messages.append(message)
        return True, value, messages


def string(name: str, *constraints: Constraint, optional: bool = False, allow_empty: bool = False,
           default: Optional[str] = None) -> Field:
    return Field(name, tuple(constraints), optional=optional, allow_empty=allow_empty, default=default)


def string_list(name: str, *constraints: Constraint, optional: bool = False) -> Field:
    return Field(name, tuple(constraints), optional=optional, many=True)


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


@dataclass(frozen=True)
class Success:
    value: Dict[str, Any]

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    errors: Tuple[FieldError, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return False

    def field_errors(self) -> Dict[str, List[str]]:
        grouped: Dict[str, List[str]] = {}
        for error in self.errors:
            grouped.setdefault(error.field, []).append(error.message)
        return grouped


ValidationResult = Union[Success, Failure]


class Schema:
    def __init__(self, *fields: Field, name: str = "form"):
        seen = set()
        for f in fields:
            if f.name in seen:
                raise ValueError(f"Duplicate field {f.name!r} in schema {name!r}")
            seen.add(f.name)
        self.name = name
        self.fields: Tuple[Field, ...] = tuple(fields)
        self._by_name = {f.name: f for f in fields}

    def __repr__(self) -> str:
        return f"Schema(name={self.name!r}, fields={list(self.field_names)!r})"

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[Field]:
        return iter(self.fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Schema):
            return NotImplemented
        return self.name == other.name and self.fields == other.fields

    def __hash__(self) -> int:
        return hash((self.name, self.fields))

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    @property
    def list_fields(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields if f.many)

    def get(self, name: str) -> Optional[Field]:
        return self._by_name.get(name)

    def validate(self, raw: Mapping[str, Any]) -> ValidationResult:
        value: Dict[str, Any] = {}
        errors: List[FieldError] = []
        for f in self.fields:
            present, field_value, messages = f.check(raw)
            if messages:
                errors.extend(FieldError(f.name, m) for m in messages)
            elif present:
                value[f.name] = field_value
        if errors:
            return Failure(tuple(errors))
        return Success(value)

    def defaults(self, values: Optional[Mapping[str, Any]] = None) -> RawFields:
        """Values to render before the first submission.

        Record values (ids, enums) are turned into the strings an input would
        post back; ``None`` falls back to the field default.
        """
        values = values or {}
        out: RawFields = {}
        for f in self.fields:
            current = values.get(f.name)
            if current is None:
                out[f.name] = f.empty_value()
            elif f.many:
                out[f.name] = [_as_text(v) for v in _as_iterable(current)]
            else:
                out[f.name] = _as_text(current)
        return out

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "fields": [f.to_dict() for f in self.fields]}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Schema":
        return cls(*(Field.from_dict(f) for f in data.get("fields", ())), name=str(data.get("name", "form")))


def validate(raw: Mapping[str, Any], schema: Schema) -> ValidationResult:
    return schema.validate(raw)


def _as_text(value: Any) -> str:
    enum_value = getattr(value, "value", None)
    if isinstance(enum_value, str):
        return enum_value
    return str(value)


def _as_iterable(value: Any) -> Sequence[Any]:
    if isinstance(value, (str, bytes)):
        return [value]
    if isinstance(value, Iterable):
        return list(value)
    return [value]
