"""Category lookup blueprint."""

from __future__ import annotations

from flask import Blueprint

bp = Blueprint("categories", __name__, url_prefix="/api/categories")

from . import routes  # noqa: E402,F401 - ensure routes get registered

__all__ = ["bp"]
