from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import StudentStatus


@dataclass(frozen=True)
class Student:
    """Domain entity: an enrolled student.

    Note: Plain data object, no database access here.
    """

    student_id: int
    name: str
    current_lesson: str
    status: StudentStatus
    fees_paid: bool
    class_id: str
