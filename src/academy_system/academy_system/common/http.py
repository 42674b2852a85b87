from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import BulkAttendanceError, NotFoundError, StoreError, ValidationError
from .datetime_utils import parse_iso_date, parse_month

logger = logging.getLogger(__name__)


def error_response(message: str, status: int, **extra):
    body = {"message": message}
    body.update({k: v for k, v in extra.items() if v is not None})
    return jsonify(body), status


def date_arg(name: str, default: Optional[date] = None) -> Optional[date]:
    value = request.args.get(name)
    if not value:
        return default
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"{name} must be a date (YYYY-MM-DD)", field=name)


def month_arg(name: str, default: date) -> date:
    value = request.args.get(name)
    if not value:
        return default.replace(day=1)
    try:
        return parse_month(value)
    except ValueError:
        raise ValidationError(f"{name} must be a month (YYYY-MM)", field=name)


def json_body():
    # silent: a malformed body is reported by the payload validators
    return request.get_json(silent=True)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return error_response(e.message, 400, field=e.field)

    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return error_response(str(e), 404)

    @app.errorhandler(BulkAttendanceError)
    def _bulk_failed(e: BulkAttendanceError):
        return error_response(str(e), 502, failedStudentIds=e.failed_student_ids)

    @app.errorhandler(StoreError)
    def _store(e: StoreError):
        return error_response("Internal server error", 500)

    @app.errorhandler(HTTPException)
    def _http(e: HTTPException):
        return error_response(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def _unexpected(e: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return error_response("Internal server error", 500)
