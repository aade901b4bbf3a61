"""Session helpers protecting user-scoped endpoints."""

from __future__ import annotations

from functools import wraps
from typing import Callable, TypeVar

from flask import abort, session

SESSION_USER_KEY = "user_id"

F = TypeVar("F", bound=Callable)


def current_user_id() -> int:
    """Return the signed-in user's id or abort with 401."""

    user_id = session.get(SESSION_USER_KEY)
    if user_id is None:
        abort(401)
    return int(user_id)


def login_required(view: F) -> F:
    """Reject anonymous requests with 401 before the view runs."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        current_user_id()
        return view(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def ensure_owner(record, user_id: int):
    """Abort with 404 for missing records and 403 for someone else's."""

    if record is None:
        abort(404)
    if record.user_id != user_id:
        abort(403)
    return record
