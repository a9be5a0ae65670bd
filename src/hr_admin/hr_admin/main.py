from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify, render_template
from werkzeug.exceptions import BadRequest

from config import get_settings_module

from .common.http import wants_json
from .container import Container, build_container
from .core.constants import DEFAULT_PASSWORD
from .core.enums import StatusCode
from .core.env import validate_settings
from .core.exceptions import NotFoundError, get_error_message
from .core.links import AppLinks
from .database.bootstrap import apply_schema, list_tables, seed_demo_data
from .departments.controller import register as register_departments
from .employees.controller import register as register_employees
from .forms import MalformedSubmissionError, bad_request
from .users.controller import register as register_users

REPO_ROOT = Path(__file__).resolve().parents[3]


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    """Build the Flask app.

    ``container`` lets tests hand in in-memory services; when it is given the
    database is never touched, even if the settings ask for init/seed.
    """
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates")

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    validate_settings(settings)

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    db_config = dict(getattr(settings, "DB_CONFIG"))
    default_password = str(getattr(settings, "DEFAULT_PASSWORD", DEFAULT_PASSWORD))

    if app.config["DEBUG"]:
        app.logger.setLevel(logging.DEBUG)
    app.logger.info("[hr-admin] settings=%s", settings_module)

    if container is None:
        _prepare_database(app, settings, db_config, default_password)
        container = build_container(db_config=db_config, default_password=default_password)
        app.logger.info("[hr-admin] db=%s", container.conn.config.describe())

    app.jinja_env.globals["links"] = AppLinks

    register_users(app, container)
    register_employees(app, container)
    register_departments(app, container)
    _register_error_handlers(app)

    return app


def _prepare_database(app: Flask, settings, db_config: dict, default_password: str) -> None:
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
        app.logger.info("[hr-admin] schema ready (tables=%s)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        seed_demo_data(db_config, default_password=default_password)
        app.logger.info("[hr-admin] demo seed ready")


def _register_error_handlers(app: Flask) -> None:
    def error_page(message: str, status: int):
        if wants_json():
            return jsonify(bad_request(form_error=message).to_json()), status
        return render_template("error.html", message=message, status=status), status

    @app.errorhandler(NotFoundError)
    def not_found(e: NotFoundError):
        return error_page(get_error_message(e), StatusCode.NOT_FOUND)

    @app.errorhandler(MalformedSubmissionError)
    def malformed(e: MalformedSubmissionError):
        return error_page(get_error_message(e), StatusCode.BAD_REQUEST)

    @app.errorhandler(BadRequest)
    def bad_input(e: BadRequest):
        return error_page(e.description, StatusCode.BAD_REQUEST)
