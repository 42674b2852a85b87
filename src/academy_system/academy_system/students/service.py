from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..core.exceptions import NotFoundError
from .model import Student
from .repository import StudentRepository
from .schema import parse_student_changes, parse_student_input

logger = logging.getLogger(__name__)


class StudentService:
    """Use case: manage student records (admin)."""

    def __init__(self, students: StudentRepository):
        self._students = students

    def list_students(self, search: Optional[str] = None) -> Sequence[Student]:
        # plain substring match; surrounding spaces are part of the term
        return self._students.list_all(search=search or None)

    def get_student(self, student_id: int) -> Optional[Student]:
        """Absent students are ``None``, not an error."""
        return self._students.get_by_id(student_id)

    def require_student(self, student_id: int) -> Student:
        student = self._students.get_by_id(student_id)
        if not student:
            raise NotFoundError("Student not found")
        return student

    def create_student(self, payload: Any) -> Student:
        data = parse_student_input(payload)
        student_id = self._students.create(data)
        logger.info("Created student %s (%s, %s)", student_id, data.name, data.class_id)
        return self.require_student(student_id)

    def update_student(self, student_id: int, payload: Any) -> Student:
        changes = parse_student_changes(payload)
        if not self._students.update(student_id, changes):
            raise NotFoundError("Student not found")
        logger.info("Updated student %s fields=%s", student_id, sorted(changes))
        return self.require_student(student_id)

    def delete_student(self, student_id: int) -> None:
        # No cascade: logs and achievements keep their student_id.
        if not self._students.delete_by_id(student_id):
            raise NotFoundError("Student not found")
        logger.info("Deleted student %s", student_id)
