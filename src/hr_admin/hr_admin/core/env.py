"""Startup checks for the selected settings module.

The settings module is validated with the same :class:`Schema` machinery the
forms use, so a broken deployment lists every missing value at once instead
of failing on the first database call.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping

from ..forms import Failure, MinLength, Schema, string
from .exceptions import ConfigurationError

SettingsSchema = Schema(
    string("SECRET_KEY", MinLength(1)),
    string("DB_HOST", MinLength(1)),
    string("DB_USER", MinLength(1)),
    string("DB_NAME", MinLength(1)),
    string("DEFAULT_PASSWORD", MinLength(8), optional=True),
    name="settings",
)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def settings_fields(settings: Any) -> Dict[str, Any]:
    """Flatten a settings module (or mapping) into the names checked above."""
    if isinstance(settings, Mapping):
        get = settings.get
    else:
        def get(name, default=None):
            return getattr(settings, name, default)

    db_config = get("DB_CONFIG") or {}
    fields: Dict[str, Any] = {
        "SECRET_KEY": _text(get("SECRET_KEY")),
        "DB_HOST": _text(db_config.get("host")),
        "DB_USER": _text(db_config.get("user")),
        "DB_NAME": _text(db_config.get("database")),
    }
    if get("DEFAULT_PASSWORD") is not None:
        fields["DEFAULT_PASSWORD"] = str(get("DEFAULT_PASSWORD"))
    return fields


def validate_settings(settings: Any) -> Dict[str, Any]:
    result = SettingsSchema.validate(settings_fields(settings))
    if isinstance(result, Failure):
        problems = "; ".join(f"{e.field}: {e.message}" for e in result.errors)
        raise ConfigurationError(f"Invalid settings: {problems}")
    return result.value
