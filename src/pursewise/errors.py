"""Application error taxonomy and JSON error handlers."""

from __future__ import annotations

from typing import Mapping

from flask import Flask, jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from .logging_config import get_logger

logger = get_logger(__name__)


class PursewiseError(Exception):
    """Base class for errors surfaced through the HTTP API."""

    status_code = 500
    code = "internal_error"

    def to_dict(self) -> dict:
        return {"error": self.code, "message": str(self)}


class ValidationFailed(PursewiseError):
    """Request payload or query parameters failed field validation."""

    status_code = 400
    code = "validation_failed"

    def __init__(self, errors: Mapping[str, list[str]], message: str = "Invalid request data."):
        super().__init__(message)
        self.errors = {field: list(messages) for field, messages in errors.items()}

    def to_dict(self) -> dict:
        payload = super().to_dict()
        payload["details"] = self.errors
        return payload


class StorageUnavailable(PursewiseError):
    """The persistence layer could not serve the request."""

    status_code = 503
    code = "storage_unavailable"


class IntegrationUnavailable(PursewiseError):
    """The bank-data aggregator is not configured for this deployment."""

    status_code = 503
    code = "integration_unavailable"


class ImportFailed(PursewiseError):
    """The bank-data aggregator rejected or failed a request."""

    status_code = 502
    code = "import_failed"


def register_error_handlers(app: Flask) -> None:
    """Render domain and HTTP errors as JSON bodies."""

    @app.errorhandler(PursewiseError)
    def _handle_domain_error(exc: PursewiseError):
        if exc.status_code >= 500:
            logger.warning("Request failed", extra={"error": exc.code, "detail": str(exc)})
        return jsonify(exc.to_dict()), exc.status_code

    @app.errorhandler(SQLAlchemyError)
    def _handle_storage_error(exc: SQLAlchemyError):
        logger.exception("Storage failure")
        error = StorageUnavailable("The data store is currently unavailable.")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def _handle_http_error(exc: HTTPException):
        code = (exc.name or "error").lower().replace(" ", "_")
        return jsonify({"error": code, "message": exc.description}), exc.code or 500
