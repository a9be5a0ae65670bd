from __future__ import annotations

import pytest

from src.hr_admin.hr_admin.forms import (
    Failure,
    FieldError,
    MalformedSubmissionError,
    SubmissionResponse,
    bad_request,
    has_form_error,
    process_bad_request,
    success,
)


def test_process_bad_request_echoes_fields_and_groups_errors():
    failure = Failure(
        (
            FieldError("name", "Too short"),
            FieldError("managerId", "Required"),
            FieldError("name", "Invalid"),
        )
    )
    fields = {"name": "Al", "managerId": "", "note": "kept"}

    response = process_bad_request(failure, fields)

    assert response.fields == fields
    assert response.field_errors == {"name": ["Too short", "Invalid"], "managerId": ["Required"]}
    assert response.form_error is None
    assert not response.ok


def test_echoed_fields_are_a_copy():
    fields = {"tags": ["a"]}
    response = process_bad_request(Failure((FieldError("tags", "x"),)), fields)

    fields["tags"].append("b")

    assert response.fields == {"tags": ["a"]}


def test_json_shape_leaves_out_empty_parts():
    assert success({"name": "Alice"}).to_json() == {"fields": {"name": "Alice"}}
    assert bad_request(form_error="Something went wrong").to_json() == {
        "fields": {},
        "formError": "Something went wrong",
    }


def test_json_round_trip():
    response = process_bad_request(Failure((FieldError("email", "Invalid email"),)), {"email": "x"}, form_error="Nope")

    assert SubmissionResponse.from_json(response.to_json()) == response


@pytest.mark.parametrize(
    "payload",
    [None, [], {"fields": "x"}, {"fields": {}, "fieldErrors": {"a": 1}}, {"formError": 3}],
)
def test_from_json_rejects_malformed_payloads(payload):
    with pytest.raises(MalformedSubmissionError):
        SubmissionResponse.from_json(payload)


def test_has_form_error():
    assert has_form_error({"fields": {}, "formError": "Oops"})
    assert has_form_error(bad_request(form_error="Oops"))
    assert not has_form_error({"fields": {}})
    assert not has_form_error(None)
