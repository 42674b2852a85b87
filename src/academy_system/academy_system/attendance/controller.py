from __future__ import annotations

import csv
import io

from flask import Flask, jsonify, request

from ..common.datetime_utils import day_key, now_local
from ..common.http import date_arg, json_body, month_arg
from ..common.serializers import daily_log_json, student_json
from ..common.validators import optional_text, require_choice, require_datetime, require_mapping
from ..container import Container
from ..core.constants import CLASS_IDS, MONTH_KEY_FORMAT
from .service import AttendanceHistoryService, MonthHistory


def _history_json(history: MonthHistory) -> dict:
    matrix = history.matrix
    return {
        "month": history.month.strftime(MONTH_KEY_FORMAT),
        "isCurrentMonth": history.is_current_month,
        "days": [day_key(d) for d in matrix.days],
        "classes": [
            {
                "classId": group.class_id,
                "students": [
                    {
                        "student": student_json(row.student),
                        "present": list(row.cells),
                        "presentDays": row.present_days,
                        "totalDays": row.total_days,
                        "percentage": row.percentage,
                    }
                    for row in group.rows
                ],
            }
            for group in matrix.groups
        ],
    }


def register(app: Flask, container: Container) -> None:
    def _class_arg():
        class_id = request.args.get("class_id") or None
        if class_id:
            require_choice(class_id, "class_id", CLASS_IDS)
        return class_id

    def _month_history() -> MonthHistory:
        today = now_local().date()
        return container.history_service.month_history(
            month_arg("month", today),
            class_id=_class_arg(),
            today=today,
        )

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    def attendance_history():
        return jsonify(_history_json(_month_history()))

    @app.route("/api/attendance/history.csv", methods=["GET"], endpoint="attendance_history_csv")
    def attendance_history_csv():
        history = _month_history()
        fieldnames, rows = AttendanceHistoryService.csv_rows(history)

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=fieldnames)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)

        filename = f"attendance_{history.month.strftime('%Y%m')}.csv"
        return app.response_class(
            out.getvalue().encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    def attendance_today():
        target = date_arg("date", now_local().date())
        present, total = container.mark_all_service.present_count(target, class_id=_class_arg())
        return jsonify({"date": day_key(target), "present": present, "total": total})

    @app.route("/api/attendance/mark-all", methods=["POST"], endpoint="attendance_mark_all")
    def attendance_mark_all():
        data = require_mapping(json_body() or {})
        target = None
        if data.get("date") is not None:
            target = require_datetime(data["date"], "date").date()
        class_id = optional_text(data.get("classId"), "classId")
        if class_id:
            require_choice(class_id, "classId", CLASS_IDS)

        result = container.mark_all_service.mark_all_present(target, class_id=class_id)
        return jsonify(
            {
                "date": day_key(result.target_date),
                "created": [daily_log_json(log) for log in result.created],
                "alreadyPresent": list(result.already_present),
            }
        )
