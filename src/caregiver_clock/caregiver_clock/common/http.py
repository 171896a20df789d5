"""JSON error mapping and response hooks shared by the API controllers."""

from __future__ import annotations

import logging
from typing import Any, Dict

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import DomainError, ScheduleConflict, SessionStateError, StoreUnavailable, ValidationError

logger = logging.getLogger(__name__)

# Checked in order; the first matching class wins.
STORE_UNAVAILABLE_MESSAGE = "No se pudo acceder al almacén de registros"

STATUS_BY_ERROR = (
    (ScheduleConflict, 400),
    (ValidationError, 400),
    (SessionStateError, 409),
    (DomainError, 400),
    (StoreUnavailable, 503),
)


def status_for(exc: Exception) -> int:
    for error_type, status in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status
    return 500


def json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("El cuerpo de la petición debe ser un objeto JSON")
    return data


def register_http_hooks(app: Flask) -> None:
    @app.errorhandler(ScheduleConflict)
    def handle_conflict(exc: ScheduleConflict):
        return jsonify({"error": exc.description, "code": exc.code}), status_for(exc)

    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        return jsonify({"error": str(exc), "code": exc.code}), status_for(exc)

    @app.errorhandler(StoreUnavailable)
    def handle_store_unavailable(exc: StoreUnavailable):
        # Driver details (host, user, socket) stay in the log.
        logger.error("Record store unavailable on %s %s: %s", request.method, request.path, exc)
        return jsonify({"error": STORE_UNAVAILABLE_MESSAGE, "code": exc.code}), status_for(exc)

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        if isinstance(exc, HTTPException):
            return exc
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"error": "Error interno del servidor", "code": "INTERNAL_ERROR"}), 500

    @app.after_request
    def no_cache(response):
        if request.method == "GET" and request.path.startswith("/api/"):
            response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"
            response.headers["Pragma"] = "no-cache"
            response.headers["Expires"] = "0"
        return response
