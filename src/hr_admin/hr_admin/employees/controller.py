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
from .model import EmployeeFilters, EmployeeInput
from .schemas import CreateEmployeeSchema, EditEmployeeSchema, EmployeeFilterSchema, ToggleEmployeeSchema


def register(app: Flask, container: Container) -> None:
    service = container.employee_service

    def render_create(ctx: SubmissionContext) -> str:
        return render_template(
            "employees/form.html",
            form=FormBinder(CreateEmployeeSchema, ctx),
            managers=service.list_managers(),
            title="Create Employee",
            action=AppLinks.CREATE_EMPLOYEE,
        )

    def render_edit(employee_id: int):
        def render(ctx: SubmissionContext) -> str:
            return render_template(
                "employees/form.html",
                form=FormBinder(EditEmployeeSchema, ctx),
                managers=service.list_managers(),
                title="Edit Employee",
                action=AppLinks.edit_employee(employee_id),
            )

        return render

    def toggle_status():
        fields = get_raw_form_fields(request)
        result = ToggleEmployeeSchema.validate(fields)
        if isinstance(result, Failure):
            response = process_bad_request(result, fields)
        else:
            try:
                employee_id = get_validated_id(result.value["employeeId"], label="Employee")
                service.toggle_status(employee_id)
                response = success(fields)
            except DomainError as e:
                response = bad_request(form_error=get_error_message(e), fields=fields)
            except Exception:
                app.logger.exception("Toggling employee status failed")
                response = bad_request(form_error=GENERIC_FORM_ERROR, fields=fields)

        return respond_action(response, url_for("employees"))

    @app.route(AppLinks.EMPLOYEES, methods=["GET", "POST"], endpoint="employees")
    @login_required
    def employees(current_user):
        if request.method == "POST":
            return toggle_status()

        raw = get_query_params(request.args, EmployeeFilterSchema.field_names)
        result = EmployeeFilterSchema.validate(raw)
        if isinstance(result, Failure):
            abort(StatusCode.BAD_REQUEST, description=INVALID_FILTERS_MESSAGE)
        try:
            filters = EmployeeFilters.from_form(result.value)
        except DomainError:
            abort(StatusCode.BAD_REQUEST, description=INVALID_FILTERS_MESSAGE)

        records = service.list_employees(filters, search=result.value.get("q", ""))
        filter_ctx = SubmissionContext(EmployeeFilterSchema.defaults(raw))
        return render_template(
            "employees/index.html",
            employees=records,
            departments=container.department_service.list_departments(),
            managers=service.list_managers(),
            filters=FormBinder(EmployeeFilterSchema, filter_ctx),
            current_user=current_user,
        )

    @app.route(AppLinks.CREATE_EMPLOYEE, methods=["GET", "POST"], endpoint="create_employee")
    @login_required
    def create_employee(current_user):
        if request.method == "GET":
            return render_create(SubmissionContext(CreateEmployeeSchema.defaults()))

        fields = get_raw_form_fields(request, list_fields=CreateEmployeeSchema.list_fields)
        result = CreateEmployeeSchema.validate(fields)
        if isinstance(result, Failure):
            return respond_bad_request(process_bad_request(result, fields), render_create)

        try:
            service.create_employee(EmployeeInput.from_form(result.value))
        except DomainError as e:
            return respond_bad_request(bad_request(form_error=get_error_message(e), fields=fields), render_create)
        except Exception:
            app.logger.exception("Creating employee failed")
            return respond_bad_request(bad_request(form_error=GENERIC_FORM_ERROR, fields=fields), render_create)

        return respond_success(AppLinks.EMPLOYEES)

    @app.route("/employees/<employee_id>/edit", methods=["GET", "POST"], endpoint="edit_employee")
    @login_required
    def edit_employee(current_user, employee_id: str):
        record_id = get_validated_id(employee_id, label="Employee")
        render = render_edit(record_id)

        if request.method == "GET":
            employee = service.get_employee(record_id)
            return render(SubmissionContext(EditEmployeeSchema.defaults(employee.form_values())))

        fields = get_raw_form_fields(request, list_fields=EditEmployeeSchema.list_fields)
        result = EditEmployeeSchema.validate(fields)
        if isinstance(result, Failure):
            return respond_bad_request(process_bad_request(result, fields), render)

        try:
            service.update_employee(record_id, EmployeeInput.from_form(result.value))
        except DomainError as e:
            return respond_bad_request(bad_request(form_error=get_error_message(e), fields=fields), render)
        except Exception:
            app.logger.exception("Updating employee %s failed", record_id)
            return respond_bad_request(bad_request(form_error=GENERIC_FORM_ERROR, fields=fields), render)

        return respond_success(AppLinks.EMPLOYEES)
