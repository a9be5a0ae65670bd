from __future__ import annotations

import pytest

from src.hr_admin.hr_admin.forms import (
    Email,
    Failure,
    FieldError,
    MinLength,
    OneOf,
    Schema,
    Success,
    string,
    string_list,
    validate,
)
from src.hr_admin.hr_admin.forms.schema import MSG_REQUIRED, MSG_SINGLE_VALUE

DepartmentSchema = Schema(
    string("name", MinLength(3)),
    string("managerId", MinLength(1)),
    name="department",
)


def test_failure_lists_every_field_in_declaration_order():
    result = validate({"name": "Al", "managerId": ""}, DepartmentSchema)

    assert isinstance(result, Failure)
    assert [e.field for e in result.errors] == ["name", "managerId"]
    assert result.errors[0].message.startswith("Too short")
    assert result.errors[1].message == MSG_REQUIRED


def test_success_returns_declared_fields_only():
    result = DepartmentSchema.validate({"name": "Alice", "managerId": "42", "extra": "ignored"})

    assert result == Success({"name": "Alice", "managerId": "42"})
    assert result.ok


def test_validation_is_deterministic():
    raw = {"name": "", "managerId": "x"}
    assert DepartmentSchema.validate(raw) == DepartmentSchema.validate(raw)


def test_missing_required_field_is_reported():
    result = DepartmentSchema.validate({"name": "Alice"})

    assert result == Failure((FieldError("managerId", MSG_REQUIRED),))


def test_errors_only_name_schema_fields():
    result = DepartmentSchema.validate({"bogus": "1"})

    assert isinstance(result, Failure)
    assert {e.field for e in result.errors} <= set(DepartmentSchema.field_names)


def test_constraints_of_one_field_keep_their_order():
    schema = Schema(string("email", MinLength(10), Email()))

    result = schema.validate({"email": "a@b"})

    assert [e.message for e in result.errors] == [
        "Too short, expected at least 10 characters",
        "Invalid email",
    ]
    assert result.field_errors() == {"email": [e.message for e in result.errors]}


def test_optional_and_allow_empty_fields():
    schema = Schema(
        string("status", OneOf(("Active", "Inactive")), optional=True, allow_empty=True),
        string("q", optional=True),
    )

    assert schema.validate({}) == Success({})
    assert schema.validate({"status": ""}) == Success({"status": ""})
    assert isinstance(schema.validate({"status": "Archived"}), Failure)


def test_repeated_scalar_value_is_rejected():
    result = DepartmentSchema.validate({"name": ["Alice", "Bob"], "managerId": "1"})

    assert result == Failure((FieldError("name", MSG_SINGLE_VALUE),))


def test_list_field_checks_every_value():
    schema = Schema(string_list("tags", MinLength(2)))

    assert schema.validate({"tags": ["hr", "it"]}) == Success({"tags": ["hr", "it"]})
    assert schema.validate({"tags": "hr"}) == Success({"tags": ["hr"]})
    result = schema.validate({"tags": ["hr", "x"]})
    assert isinstance(result, Failure)
    assert len(result.errors) == 1


def test_duplicate_field_names_are_rejected():
    with pytest.raises(ValueError):
        Schema(string("name"), string("name"))


def test_defaults_render_record_values_as_strings():
    from src.hr_admin.hr_admin.core.enums import RecordStatus
    from src.hr_admin.hr_admin.departments.schemas import EditDepartmentSchema

    values = EditDepartmentSchema.defaults({"name": "Payroll", "managerId": 7, "status": RecordStatus.INACTIVE})

    assert values == {"name": "Payroll", "managerId": "7", "status": "Inactive"}
    assert EditDepartmentSchema.defaults() == {"name": "", "managerId": "", "status": ""}


def test_schema_survives_serialization():
    schema = Schema(
        string("email", Email(), MinLength(5)),
        string("status", OneOf(("Active", "Inactive")), optional=True, allow_empty=True),
        string_list("tags"),
        name="profile",
    )

    restored = Schema.from_dict(schema.to_dict())

    assert restored == schema
    assert restored.validate({"email": "bad", "tags": []}) == schema.validate({"email": "bad", "tags": []})


def test_required_list_field_needs_a_value():
    required = Schema(string_list("tags"))
    optional = Schema(string_list("tags", optional=True))

    assert required.validate({"tags": []}) == Failure((FieldError("tags", MSG_REQUIRED),))
    assert optional.validate({"tags": []}) == Success({"tags": []})


@pytest.mark.parametrize("value", ["ann.lee@test.com", "ann+hr@mail.acme.org"])
def test_email_accepts_real_addresses(value):
    assert Email().check(value) is None


@pytest.mark.parametrize("value", ["", "ann", "ann@", "@test.com", "ann@test", "ann lee@test.com", "ann@@test.com"])
def test_email_rejects_malformed_addresses(value):
    assert Email().check(value) == "Invalid email"
