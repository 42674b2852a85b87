from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import error_response, json_body
from ..common.serializers import student_json
from ..container import Container
from ..core.constants import CLASS_IDS, DEFAULT_LESSON, LESSONS
from ..core.enums import StudentStatus


def register(app: Flask, container: Container) -> None:
    queries = container.queries

    @app.route("/api/students", methods=["GET"], endpoint="list_students")
    def list_students():
        students = queries.students(request.args.get("search"))
        return jsonify([student_json(s) for s in students])

    @app.route("/api/students/options", methods=["GET"], endpoint="student_form_options")
    def student_form_options():
        """Choices offered by the student form."""
        return jsonify(
            {
                "classIds": list(CLASS_IDS),
                "lessons": list(LESSONS),
                "defaultLesson": DEFAULT_LESSON,
                "statuses": [s.value for s in StudentStatus],
            }
        )

    @app.route("/api/students", methods=["POST"], endpoint="create_student")
    def create_student():
        student = queries.create_student(json_body())
        return jsonify(student_json(student)), 201

    @app.route("/api/students/<int:student_id>", methods=["GET"], endpoint="get_student")
    def get_student(student_id: int):
        student = queries.student(student_id)
        if not student:
            return error_response("Student not found", 404)
        return jsonify(student_json(student))

    @app.route("/api/students/<int:student_id>", methods=["PATCH"], endpoint="update_student")
    def update_student(student_id: int):
        student = queries.update_student(student_id, json_body())
        return jsonify(student_json(student))

    @app.route("/api/students/<int:student_id>", methods=["DELETE"], endpoint="delete_student")
    def delete_student(student_id: int):
        queries.delete_student(student_id)
        return "", 204
