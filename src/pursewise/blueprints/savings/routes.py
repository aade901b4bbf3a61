"""Savings goal CRUD routes."""

from __future__ import annotations

from datetime import date

from flask import abort, jsonify

from ...context import get_context
from ...errors import ValidationFailed
from ...logging_config import get_logger
from ...services.serialization import savings_goal_to_dict
from ..auth.guards import current_user_id, ensure_owner, login_required
from ..validation import json_body
from . import bp
from .forms import SavingsGoalForm

logger = get_logger(__name__)


@bp.get("")
@login_required
def list_goals():
    goals = get_context().savings_goals.list_for_user(current_user_id())
    today = date.today()
    return jsonify([savings_goal_to_dict(goal, now=today) for goal in goals])


@bp.post("")
@login_required
def create_goal():
    user_id = current_user_id()
    form = SavingsGoalForm.from_mapping(json_body())
    form.raise_for_errors()

    created = get_context().savings_goals.create(form.to_record(user_id=user_id))
    logger.info("Savings goal created", extra={"user_id": user_id, "goal_id": created.id})
    return jsonify(savings_goal_to_dict(created, now=date.today())), 201


@bp.get("/<int:goal_id>")
@login_required
def get_goal(goal_id: int):
    goal = get_context().savings_goals.get_by_id(goal_id)
    ensure_owner(goal, current_user_id())
    return jsonify(savings_goal_to_dict(goal, now=date.today()))


@bp.put("/<int:goal_id>")
@bp.patch("/<int:goal_id>")
@login_required
def update_goal(goal_id: int):
    repo = get_context().savings_goals
    ensure_owner(repo.get_by_id(goal_id), current_user_id())

    form = SavingsGoalForm.from_mapping(json_body(), partial=True)
    form.raise_for_errors()
    patch = form.to_patch()
    if patch.is_empty():
        raise ValidationFailed({"body": ["No updatable fields supplied."]})

    updated = repo.update(goal_id, patch)
    if updated is None:
        abort(404)
    return jsonify(savings_goal_to_dict(updated, now=date.today()))


@bp.delete("/<int:goal_id>")
@login_required
def delete_goal(goal_id: int):
    repo = get_context().savings_goals
    ensure_owner(repo.get_by_id(goal_id), current_user_id())
    if not repo.delete(goal_id):
        abort(404)
    return "", 204
