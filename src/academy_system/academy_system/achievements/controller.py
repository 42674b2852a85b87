from __future__ import annotations

from flask import Flask, jsonify

from .tally import medal_tally
from ..common.http import json_body
from ..common.serializers import achievement_json
from ..container import Container


def register(app: Flask, container: Container) -> None:
    queries = container.queries

    @app.route("/api/students/<int:student_id>/achievements", methods=["GET"], endpoint="list_achievements")
    def list_achievements(student_id: int):
        return jsonify([achievement_json(a) for a in queries.achievements(student_id)])

    @app.route("/api/students/<int:student_id>/achievements", methods=["POST"], endpoint="create_achievement")
    def create_achievement(student_id: int):
        achievement = queries.create_achievement(student_id, json_body())
        return jsonify(achievement_json(achievement)), 201

    @app.route("/api/students/<int:student_id>/medals", methods=["GET"], endpoint="student_medals")
    def student_medals(student_id: int):
        return jsonify(medal_tally(queries.achievements(student_id)))
