"""JSON shapes of the entities (camelCase, ISO-8601 dates)."""
from __future__ import annotations

from ..achievements.model import Achievement
from ..daily_logs.model import DailyLog
from ..students.model import Student


def student_json(s: Student) -> dict:
    return {
        "id": s.student_id,
        "name": s.name,
        "currentLesson": s.current_lesson,
        "status": s.status.value,
        "feesPaid": s.fees_paid,
        "classId": s.class_id,
    }


def daily_log_json(log: DailyLog) -> dict:
    return {
        "id": log.log_id,
        "studentId": log.student_id,
        "date": log.date.isoformat(),
        "attended": log.attended,
        "lessonSummary": log.lesson_summary,
    }


def achievement_json(a: Achievement) -> dict:
    return {
        "id": a.achievement_id,
        "studentId": a.student_id,
        "level": a.level.value,
        "medal": a.medal.value,
        "description": a.description,
    }
