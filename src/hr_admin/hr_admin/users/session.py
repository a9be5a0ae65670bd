from __future__ import annotations

from datetime import timedelta
from functools import wraps

from flask import current_app, flash, redirect, session, url_for

from ..core.constants import DEFAULT_SESSION_DAYS
from .service import SessionUser


def current_session_user():
    return SessionUser.from_session(session)


def start_session(user: SessionUser, *, remember: bool = True) -> None:
    session.clear()
    session.permanent = remember
    current_app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)
    session.update(user.to_session())


def login_required(view):
    """Resolve the session once and hand it to the view as ``current_user``."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        user = current_session_user()
        if user is None:
            flash("Please log in to continue", "warning")
            return redirect(url_for("login"))
        return view(*args, current_user=user, **kwargs)

    return wrapper
