from __future__ import annotations

import pytest

from src.hr_admin.hr_admin.forms import (
    FormBinder,
    MinLength,
    Schema,
    SubmissionContext,
    SubmissionResponse,
    UnknownFieldError,
    bind_field,
    string,
)

DepartmentSchema = Schema(string("name", MinLength(3)), string("managerId", MinLength(1)), name="department")


def test_props_follow_context_snapshot():
    ctx = SubmissionContext({"name": "Payroll", "managerId": "4"})
    form = FormBinder(DepartmentSchema, ctx)

    before = form.field("name")
    assert (before.name, before.value, before.errors, before.disabled) == ("name", "Payroll", [], False)

    submission = ctx.start({"name": "Al"})
    assert form["name"].disabled
    assert form.submit_disabled
    assert form.submit_label() == "Saving..."

    ctx.receive(submission, SubmissionResponse(fields={"name": "Al"}, field_errors={"name": ["Too short"]}))
    after = form.field("name")
    assert after.value == "Al"
    assert after.invalid
    assert after.error_text == "Too short"
    assert after.error_id == "name-error"
    assert not after.disabled
    assert form.field("managerId").value == "4"
    assert before.errors == []


def test_bind_field_matches_binder():
    ctx = SubmissionContext({"name": "Payroll"})

    assert bind_field("name", ctx) == FormBinder(DepartmentSchema, ctx).field("name")


def test_fields_are_in_schema_order():
    form = FormBinder(DepartmentSchema, SubmissionContext())

    assert [p.name for p in form.fields()] == ["name", "managerId"]


def test_unknown_field_raises():
    form = FormBinder(DepartmentSchema, SubmissionContext())

    with pytest.raises(UnknownFieldError):
        form.field("nmae")
    with pytest.raises(KeyError):
        form["nmae"]


def test_selected_matches_string_form_of_option():
    ctx = SubmissionContext({"managerId": "42"})
    props = bind_field("managerId", ctx)

    assert props.selected(42)
    assert not props.selected(4)


def test_form_error_comes_from_context():
    ctx = SubmissionContext.from_response(SubmissionResponse(form_error="No manager record found"))

    assert FormBinder(DepartmentSchema, ctx).form_error == "No manager record found"
