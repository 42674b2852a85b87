from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import date_arg, json_body
from ..common.serializers import daily_log_json
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    queries = container.queries

    @app.route("/api/students/<int:student_id>/logs", methods=["GET"], endpoint="list_student_logs")
    def list_student_logs(student_id: int):
        return jsonify([daily_log_json(log) for log in queries.student_logs(student_id)])

    @app.route("/api/students/<int:student_id>/logs", methods=["POST"], endpoint="create_student_log")
    def create_student_log(student_id: int):
        log = queries.create_log(student_id, json_body())
        return jsonify(daily_log_json(log)), 201

    @app.route("/api/logs", methods=["GET"], endpoint="list_logs")
    def list_logs():
        """Logs of all students for one day (``?date=``) or a range (``?start=&end=``)."""
        on_date = date_arg("date")
        if on_date:
            logs = queries.logs_by_date(on_date)
        elif "start" in request.args or "end" in request.args:
            start = date_arg("start")
            end = date_arg("end")
            if not start or not end:
                raise ValidationError("start and end are both required", field="start" if not start else "end")
            if start > end:
                raise ValidationError("start must not be after end", field="start")
            logs = queries.logs_range(start, end)
        else:
            raise ValidationError("date or start/end is required", field="date")
        return jsonify([daily_log_json(log) for log in logs])

    @app.route("/api/logs/<int:log_id>", methods=["DELETE"], endpoint="delete_log")
    def delete_log(log_id: int):
        queries.delete_log(log_id)
        return "", 204
