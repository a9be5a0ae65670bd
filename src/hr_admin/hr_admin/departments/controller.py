from __future__ import annotations

from flask import Flask, abort, render_template, request, url_for

from ..common.http import respond_action, respond_bad_request, respond_success
from ..common.validators import get_validated_id
from ..container import Container
from ..core.constants import GENERIC_FORM_ERROR, INVALID_FILTERS_MESSAGE
from ..core.enums import StatusCode
from ..core.exceptions import DomainError, get_error_message
from ..core.links import AppLinks
from ..forms import (
    Failure,
    FormBinder,
    SubmissionContext,
    bad_request,
    get_query_params,
    get_raw_form_fields,
    process_bad_request,
    success,
)
from ..users.session import login_required
from .model import DepartmentFilters, DepartmentInput
from .schemas import CreateDepartmentSchema, DepartmentFilterSchema, EditDepartmentSchema, ToggleDepartmentSchema


def register(app: Flask, container: Container) -> None:
    service = container.department_service

    def form_renderer(schema, title: str, action: str):
        def render(ctx: SubmissionContext) -> str:
            return render_template(
                "departments/form.html",
                form=FormBinder(schema, ctx),
                managers=service.list_managers(),
                title=title,
                action=action,
            )

        return render

    render_create = form_renderer(CreateDepartmentSchema, "Create Department", AppLinks.CREATE_DEPARTMENT)

    def submit(schema, render, save, failure_log: str):
        fields = get_raw_form_fields(request, list_fields=schema.list_fields)
        result = schema.validate(fields)
        if isinstance(result, Failure):
            return respond_bad_request(process_bad_request(result, fields), render)

        try:
            save(DepartmentInput.from_form(result.value))
        except DomainError as e:
            return respond_bad_request(bad_request(form_error=get_error_message(e), fields=fields), render)
        except Exception:
            app.logger.exception(failure_log)
            return respond_bad_request(bad_request(form_error=GENERIC_FORM_ERROR, fields=fields), render)

        return respond_success(AppLinks.DEPARTMENTS)

    @app.route(AppLinks.DEPARTMENTS, methods=["GET", "POST"], endpoint="departments")
    @login_required
    def departments(current_user):
        if request.method == "POST":
            fields = get_raw_form_fields(request)
            result = ToggleDepartmentSchema.validate(fields)
            if isinstance(result, Failure):
                response = process_bad_request(result, fields)
            else:
                try:
                    service.toggle_status(get_validated_id(result.value["departmentId"], label="Department"))
                    response = success(fields)
                except DomainError as e:
                    response = bad_request(form_error=get_error_message(e), fields=fields)
                except Exception:
                    app.logger.exception("Toggling department status failed")
                    response = bad_request(form_error=GENERIC_FORM_ERROR, fields=fields)
            return respond_action(response, url_for("departments"))

        raw = get_query_params(request.args, DepartmentFilterSchema.field_names)
        result = DepartmentFilterSchema.validate(raw)
        if isinstance(result, Failure):
            abort(StatusCode.BAD_REQUEST, description=INVALID_FILTERS_MESSAGE)
        try:
            filters = DepartmentFilters.from_form(result.value)
        except DomainError:
            abort(StatusCode.BAD_REQUEST, description=INVALID_FILTERS_MESSAGE)

        return render_template(
            "departments/index.html",
            departments=service.list_departments(filters, search=result.value.get("q", "")),
            filters=FormBinder(DepartmentFilterSchema, SubmissionContext(DepartmentFilterSchema.defaults(raw))),
            current_user=current_user,
        )

    @app.route(AppLinks.CREATE_DEPARTMENT, methods=["GET", "POST"], endpoint="create_department")
    @login_required
    def create_department(current_user):
        if request.method == "GET":
            return render_create(SubmissionContext(CreateDepartmentSchema.defaults()))
        return submit(CreateDepartmentSchema, render_create, service.create_department, "Creating department failed")

    @app.route("/departments/<department_id>/edit", methods=["GET", "POST"], endpoint="edit_department")
    @login_required
    def edit_department(current_user, department_id: str):
        record_id = get_validated_id(department_id, label="Department")
        render = form_renderer(EditDepartmentSchema, "Edit Department", AppLinks.edit_department(record_id))

        if request.method == "GET":
            department = service.get_department(record_id)
            return render(SubmissionContext(EditDepartmentSchema.defaults(department.form_values())))

        return submit(
            EditDepartmentSchema,
            render,
            lambda data: service.update_department(record_id, data),
            f"Updating department {record_id} failed",
        )
