from __future__ import annotations

from flask import Flask, redirect, render_template, request, session, url_for

from ..common.http import respond_bad_request, respond_success
from ..container import Container
from ..core.constants import GENERIC_FORM_ERROR
from ..core.exceptions import AuthenticationError
from ..core.links import AppLinks
from ..forms import (
    Failure,
    FormBinder,
    SubmissionContext,
    bad_request,
    get_raw_form_fields,
    process_bad_request,
)
from .schemas import LoginSchema
from .session import current_session_user, login_required, start_session


def register(app: Flask, container: Container) -> None:
    def render_login(ctx: SubmissionContext) -> str:
        return render_template("login.html", form=FormBinder(LoginSchema, ctx))

    @app.route(AppLinks.HOME, endpoint="home")
    @login_required
    def home(current_user):
        return redirect(url_for("employees"))

    @app.route(AppLinks.LOGIN, methods=["GET", "POST"], endpoint="login")
    def login():
        if request.method == "GET":
            if current_session_user() is not None:
                return redirect(url_for("employees"))
            return render_login(SubmissionContext(LoginSchema.defaults()))

        fields = get_raw_form_fields(request)
        result = LoginSchema.validate(fields)
        if isinstance(result, Failure):
            return respond_bad_request(process_bad_request(result, fields), render_login)

        try:
            user = container.auth_service.authenticate(result.value["username"], result.value["password"])
        except AuthenticationError as e:
            return respond_bad_request(bad_request(form_error=str(e), fields=fields), render_login)
        except Exception:
            app.logger.exception("Login failed unexpectedly")
            return respond_bad_request(bad_request(form_error=GENERIC_FORM_ERROR, fields=fields), render_login)

        start_session(user, remember=True)
        app.logger.info("User %s logged in", user.username)
        return respond_success(AppLinks.EMPLOYEES)

    @app.route(AppLinks.LOGOUT, endpoint="logout")
    def logout():
        session.clear()
        return redirect(url_for("login"))
