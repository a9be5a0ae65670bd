from __future__ import annotations

from typing import Callable, Mapping, Optional

from flask import flash, jsonify, redirect, request

from ..core.enums import StatusCode
from ..forms import SubmissionContext, SubmissionResponse, success
from ..forms.schema import RawValue

Render = Callable[[SubmissionContext], str]


def wants_json() -> bool:
    """Fetch-style clients get :class:`SubmissionResponse` JSON instead of HTML."""
    if request.headers.get("X-Requested-With"):
        return True
    accept = request.accept_mimetypes
    return accept["application/json"] > accept["text/html"]


def respond_bad_request(
    response: SubmissionResponse,
    render: Render,
    *,
    defaults: Optional[Mapping[str, RawValue]] = None,
):
    if wants_json():
        return jsonify(response.to_json()), StatusCode.BAD_REQUEST
    ctx = SubmissionContext.from_response(response, defaults)
    return render(ctx), StatusCode.BAD_REQUEST


def respond_success(location: str, fields: Optional[Mapping[str, RawValue]] = None):
    if wants_json():
        return jsonify(success(fields, redirect_to=location).to_json()), StatusCode.OK
    return redirect(location)


def respond_action(response: SubmissionResponse, location: str):
    """Answer a one-button form (activate/deactivate) posted from a list page."""
    if wants_json():
        status = StatusCode.OK if response.ok else StatusCode.BAD_REQUEST
        return jsonify(response.to_json()), status
    if response.form_error:
        flash(response.form_error, "danger")
    for messages in response.field_errors.values():
        for message in messages:
            flash(message, "danger")
    return redirect(location)
