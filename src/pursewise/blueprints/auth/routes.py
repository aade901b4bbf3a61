"""Registration, login and session routes."""

from __future__ import annotations

from flask import abort, jsonify, session

from ...context import get_context
from ...logging_config import get_logger
from ...services import auth as auth_service
from ...services.serialization import user_to_dict
from ..validation import as_text, json_body
from . import bp
from .guards import SESSION_USER_KEY, current_user_id, login_required

logger = get_logger(__name__)


@bp.post("/register")
def register():
    """Create an account and sign it in."""

    payload = json_body()
    user = auth_service.create_user(
        username=as_text(payload.get("username")),
        password=str(payload.get("password") or ""),
        name=as_text(payload.get("name")),
        email=as_text(payload.get("email")),
        avatar=as_text(payload.get("avatar")) or None,
        repository=get_context().users,
    )
    session.clear()
    session[SESSION_USER_KEY] = user.id
    return jsonify(user_to_dict(user)), 201


@bp.post("/login")
def login():
    payload = json_body()
    user = auth_service.authenticate(
        username=as_text(payload.get("username")),
        password=str(payload.get("password") or ""),
        repository=get_context().users,
    )
    if user is None:
        abort(401)
    session.clear()
    session[SESSION_USER_KEY] = user.id
    return jsonify(user_to_dict(user))


@bp.post("/logout")
def logout():
    session.clear()
    return "", 204


@bp.get("/user")
@login_required
def current_user():
    user = auth_service.get_user(current_user_id(), repository=get_context().users)
    if user is None:
        # Stale cookie for a deleted account.
        session.clear()
        abort(401)
    return jsonify(user_to_dict(user))
